"""Tests for store discovery and drift detection."""

from __future__ import annotations

from passtype.io import file_sha256
from passtype.store import ChangeDetector, assign_display_names, discover_entry_files


def test_discovery_is_recursive_sorted_and_skips_hidden_dirs(store) -> None:
    store.write("web/mail", "a")
    store.write("bank", "b")
    store.write(".git/objects/leak", "c")
    (store.root / "notes.txt").write_text("ignored", encoding="utf-8")

    assert discover_entry_files(store.root, ".gpg") == ["bank.gpg", "web/mail.gpg"]


def test_new_files_are_drifted(store) -> None:
    store.write("mail", "a")

    drift = ChangeDetector(store).detect({})

    assert drift.drifted == ("mail.gpg",)
    assert drift.orphans == ()
    assert drift.fingerprints["mail.gpg"] == file_sha256(store.root / "mail.gpg")


def test_only_changed_files_drift(store) -> None:
    store.write("mail", "a")
    store.write("bank", "b")
    detector = ChangeDetector(store)
    recorded = detector.fingerprint_all()

    store.write("bank", "b2")
    drift = detector.detect(recorded)

    assert drift.drifted == ("bank.gpg",)
    assert drift.fingerprints["bank.gpg"] != recorded["bank.gpg"]


def test_unchanged_store_is_clean(store) -> None:
    store.write("mail", "a")
    detector = ChangeDetector(store)

    drift = detector.detect(detector.fingerprint_all())

    assert drift.clean


def test_removed_files_are_orphans(store) -> None:
    detector = ChangeDetector(store)
    recorded = {"gone.gpg": "deadbeef"}

    drift = detector.detect(recorded)

    assert drift.orphans == ("gone.gpg",)
    assert drift.drifted == ()


def test_display_names_fall_back_to_full_name_on_collision() -> None:
    display = assign_display_names(["work/mail", "home/mail", "bank"])

    assert display == {"work/mail": "work/mail", "home/mail": "home/mail", "bank": "bank"}
