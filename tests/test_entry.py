"""Tests for the entry model and autotype action resolution."""

from __future__ import annotations

from datetime import UTC, datetime

import pyotp
import pytest

from passtype.config import AttributeKeys
from passtype.exceptions import ActionError, EntryParseError
from passtype.model import Action, Entry, builtin_slot_tokens

SECRET = "JBSWY3DPEHPK3PXP"


def _entry(keys: AttributeKeys, **attributes: object) -> Entry:
    return Entry.from_attributes("web/mail", {"pass": "hunter2", "user": "alice", **attributes}, keys)


def test_from_attributes_splits_reserved_and_residual_keys(keys: AttributeKeys) -> None:
    entry = _entry(keys, url="https://mail.example", pin=1234, tan="111\n222\n", window="Mail")

    assert entry.password == "hunter2"
    assert entry.username == "alice"
    assert entry.window == "Mail"
    assert entry.tan == ("111", "222")
    assert entry.attributes == {"url": "https://mail.example", "pin": "1234"}
    assert entry.display_name == "mail"
    assert not entry.failed


def test_from_attributes_rejects_wrong_reserved_types(keys: AttributeKeys) -> None:
    with pytest.raises(EntryParseError, match="autotype_1"):
        _entry(keys, autotype_1={"nested": "map"})
    with pytest.raises(EntryParseError, match="user"):
        Entry.from_attributes("x", {"pass": "p", "user": ["a", "b"]}, keys)


def test_from_attributes_drops_nested_residual_values(keys: AttributeKeys) -> None:
    entry = _entry(keys, notes={"a": 1}, enabled=True)

    assert entry.attributes == {"enabled": "true"}


def test_builtin_slots(keys: AttributeKeys) -> None:
    assert builtin_slot_tokens(0, keys) == ("user", ":tab", "pass")
    assert builtin_slot_tokens(1, keys) == ("pass",)
    assert builtin_slot_tokens(2, keys) == ("user",)
    assert builtin_slot_tokens(3, keys) == (":otp",)
    assert builtin_slot_tokens(4, keys) == ()
    assert builtin_slot_tokens(17, keys) == ()


def test_resolve_primary_slot(keys: AttributeKeys) -> None:
    actions = _entry(keys).resolve_actions(0, keys)

    assert actions == (
        Action.text("alice", source="user"),
        Action.control("tab"),
        Action.text("hunter2", source="pass"),
    )


def test_slot_precedence_entry_over_config_over_builtin(keys: AttributeKeys) -> None:
    defaults = {2: ("pass", ":enter")}
    plain = _entry(keys)
    overridden = _entry(keys, autotype_2="user :tab")

    assert plain.resolve_actions(2, keys) == (Action.text("alice", source="user"),)
    assert plain.resolve_actions(2, keys, defaults) == (
        Action.text("hunter2", source="pass"),
        Action.control("enter"),
    )
    assert overridden.resolve_actions(2, keys, defaults) == (
        Action.text("alice", source="user"),
        Action.control("tab"),
    )


def test_list_tokens_used_as_is_and_missing_lookups_dropped(keys: AttributeKeys) -> None:
    entry = _entry(keys, autotype=["user", "email", ":tab", "pass", ":enter"])

    actions = entry.resolve_actions(0, keys)

    assert [action.source for action in actions] == ["user", "tab", "pass", "enter"]


def test_undefined_slot_resolves_empty(keys: AttributeKeys) -> None:
    assert _entry(keys).resolve_actions(9, keys) == ()
    assert _entry(keys, autotype_1="").resolve_actions(1, keys) == ()


def test_renamed_keys_drive_lookup_and_slots() -> None:
    keys = AttributeKeys(password="password", username="login", autotype="type")
    entry = Entry.from_attributes("bank", {"password": "s3cret", "login": "bob", "type_1": "login"}, keys)

    assert entry.resolve_actions(0, keys) == (
        Action.text("bob", source="login"),
        Action.control("tab"),
        Action.text("s3cret", source="password"),
    )
    assert entry.resolve_actions(1, keys) == (Action.text("bob", source="login"),)


def test_tan_action_is_one_based(keys: AttributeKeys) -> None:
    entry = _entry(keys, tan="111\n222\n333")

    assert entry.tan_action(2) == Action.text("222", source="tan")
    with pytest.raises(ActionError):
        entry.tan_action(4)
    with pytest.raises(ActionError, match="no TAN"):
        _entry(keys).tan_action(1)


def test_otp_code_matches_totp(keys: AttributeKeys) -> None:
    moment = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    entry = _entry(keys, otp_secret=SECRET)

    assert entry.otp_code(moment) == pyotp.TOTP(SECRET).at(moment)


def test_otp_code_accepts_otpauth_uri(keys: AttributeKeys) -> None:
    moment = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
    uri = pyotp.TOTP(SECRET).provisioning_uri(name="alice", issuer_name="Mail")
    entry = _entry(keys, otp_secret=uri)

    assert entry.otp_code(moment) == pyotp.TOTP(SECRET).at(moment)


def test_otp_code_without_secret_is_action_error(keys: AttributeKeys) -> None:
    with pytest.raises(ActionError, match="no OTP secret"):
        _entry(keys).otp_code()


def test_otp_code_without_pyotp_is_action_error(keys: AttributeKeys, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("passtype.model.entry.pyotp", None)

    with pytest.raises(ActionError, match="not installed"):
        _entry(keys, otp_secret=SECRET).otp_code()


def test_payload_roundtrip(keys: AttributeKeys) -> None:
    entry = _entry(keys, otp_secret=SECRET, tan="1\n2", autotype_3="user", url="u", window="Mail.*")
    failed = Entry.failure("broken", "Invalid metadata: oops")

    assert Entry.from_payload(entry.to_payload()) == entry
    assert Entry.from_payload(failed.to_payload()) == failed


def test_from_payload_rejects_malformed(keys: AttributeKeys) -> None:
    assert Entry.from_payload({"password": "x"}) is None
    assert Entry.from_payload({"name": "a", "tan": "not-a-list"}) is None
    assert Entry.from_payload({"name": "a", "autotype": {"x": ["user"]}}) is None


def test_action_repr_hides_text_values() -> None:
    assert "hunter2" not in repr(Action.text("hunter2", source="pass"))


def test_entry_mappings_are_read_only_and_hashable(keys: AttributeKeys) -> None:
    source = {"pass": "hunter2", "autotype_1": "user", "url": "u"}
    entry = Entry.from_attributes("mail", source, keys)

    with pytest.raises(TypeError):
        entry.attributes["url"] = "changed"  # type: ignore[index]
    with pytest.raises(TypeError):
        entry.autotype[2] = ("pass",)  # type: ignore[index]
    assert hash(entry) == hash(Entry.from_attributes("mail", source, keys))
    assert {entry} == {Entry.from_attributes("mail", source, keys)}


def test_entry_copies_caller_mappings() -> None:
    attributes = {"url": "u"}
    entry = Entry(name="mail", password="p", attributes=attributes)

    attributes["url"] = "changed"

    assert entry.attributes == {"url": "u"}
