"""Content fingerprinting and drift detection for store files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from passtype.integrations.base import CredentialStore
from passtype.io import file_sha256

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Drift:
    """Outcome of comparing the store against recorded fingerprints."""

    fingerprints: dict[str, str]
    drifted: tuple[str, ...]
    orphans: tuple[str, ...]

    @property
    def clean(self) -> bool:
        return not self.drifted and not self.orphans


class ChangeDetector:
    """Fingerprints every entry file of a store and diffs against a previous run."""

    def __init__(self, store: CredentialStore):
        self.store = store

    def fingerprint_all(self) -> dict[str, str]:
        """Return ``{relative path: sha256}`` for every file currently in the store.

        Files that vanish or become unreadable between enumeration and hashing
        are left out and logged.
        """
        fingerprints: dict[str, str] = {}
        for relative_path in self.store.iter_files():
            try:
                fingerprints[relative_path] = file_sha256(self.store.root / relative_path)
            except OSError as exc:
                logger.warning("Failed to fingerprint %s: %s", relative_path, exc)
        return fingerprints

    def detect(self, recorded: Mapping[str, str]) -> Drift:
        """Diff current fingerprints against ``recorded``."""
        current = self.fingerprint_all()
        drifted = tuple(path for path in sorted(current) if recorded.get(path) != current[path])
        orphans = tuple(sorted(path for path in recorded if path not in current))
        logger.debug(
            "Fingerprinted %d files: %d drifted, %d orphaned",
            len(current),
            len(drifted),
            len(orphans),
        )
        return Drift(fingerprints=current, drifted=drifted, orphans=orphans)
