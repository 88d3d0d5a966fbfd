"""Encrypted metadata cache: load, sync against the store, persist when dirty."""

from __future__ import annotations

import enum
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from passtype.constants.cache import CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX, CACHE_VERSION
from passtype.exceptions import CacheDecryptError, CipherError, ConfigError, StoreError
from passtype.integrations.base import Cipher
from passtype.io import dump_json_bytes, load_json_bytes, write_bytes_atomic
from passtype.model import Entry
from passtype.store.detector import ChangeDetector
from passtype.store.loader import MetadataLoader
from passtype.types import CachePayload
from passtype.utils import entry_name_for_path

logger = logging.getLogger(__name__)


class CacheState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    LOADED = "loaded"
    DIRTY = "dirty"
    PERSISTED = "persisted"


@dataclass
class SyncReport:
    """What one sync pass did."""

    reloaded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    orphans: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.reloaded or self.pruned)


class CacheStore:
    """Owns the ``{fingerprints, entries}`` state behind the encrypted cache blob.

    Lifecycle: ``load()`` once, ``sync()`` once, then ``persist()``, which only
    writes when the sync changed something.
    """

    def __init__(
        self,
        *,
        path: Path,
        cipher: Cipher,
        recipient: str,
        detector: ChangeDetector,
        loader: MetadataLoader,
        workers: int = 1,
        prune_orphans: bool = False,
    ):
        if not recipient.strip():
            raise ConfigError("A gpg recipient is required to encrypt the metadata cache")
        self.path = path
        self.cipher = cipher
        self.recipient = recipient
        self.detector = detector
        self.loader = loader
        self.workers = max(1, workers)
        self.prune_orphans = prune_orphans
        self.state = CacheState.UNINITIALIZED
        self.fingerprints: dict[str, str] = {}
        self.entries: dict[str, Entry] = {}

    def load(self) -> None:
        """Decrypt and deserialize the persisted blob, or start empty when there is none.

        Raises:
            CacheDecryptError: when an existing blob cannot be decrypted or decoded.
        """
        self.fingerprints = {}
        self.entries = {}
        if self.path.is_file():
            try:
                plaintext = self.cipher.decrypt(self.path.read_bytes())
            except (CipherError, OSError) as exc:
                raise CacheDecryptError(f"Cannot decrypt metadata cache {self.path}: {exc}") from exc
            try:
                payload = load_json_bytes(plaintext)
            except (UnicodeDecodeError, ValueError) as exc:
                raise CacheDecryptError(f"Metadata cache {self.path} is not valid JSON: {exc}") from exc
            self._restore(payload)
            logger.debug("Loaded %d cached entries from %s", len(self.entries), self.path)
        else:
            logger.info("No metadata cache at %s; starting empty", self.path)
        self.state = CacheState.LOADED

    def sync(self) -> SyncReport:
        """Reload every drifted store file and record its new fingerprint."""
        if self.state is CacheState.UNINITIALIZED:
            self.load()

        report = SyncReport()
        drift = self.detector.detect(self.fingerprints)

        for relative_path, outcome in self._load_drifted(drift.drifted):
            if isinstance(outcome, StoreError):
                logger.warning("Skipping %s until next sync: %s", relative_path, outcome)
                report.skipped.append(relative_path)
                continue
            self.entries[outcome.name] = outcome
            self.fingerprints[relative_path] = drift.fingerprints[relative_path]
            report.reloaded.append(relative_path)
            if outcome.failed:
                report.failed.append(relative_path)

        report.orphans.extend(drift.orphans)
        if drift.orphans:
            if self.prune_orphans:
                for relative_path in drift.orphans:
                    self.fingerprints.pop(relative_path, None)
                    self.entries.pop(entry_name_for_path(relative_path, self.detector.store.suffix), None)
                    report.pruned.append(relative_path)
                logger.info("Pruned %d orphaned cache entries", len(drift.orphans))
            else:
                logger.info("Keeping %d orphaned cache entries", len(drift.orphans))

        if report.changed:
            self.state = CacheState.DIRTY
        logger.info(
            "Cache sync: %d reloaded (%d with errors), %d skipped, %d orphaned",
            len(report.reloaded),
            len(report.failed),
            len(report.skipped),
            len(report.orphans),
        )
        return report

    def persist(self) -> bool:
        """Encrypt and write the cache when dirty; returns whether a write happened."""
        if self.state is not CacheState.DIRTY:
            return False
        ciphertext = self.cipher.encrypt(dump_json_bytes(self.to_payload()), self.recipient)
        write_bytes_atomic(
            path=self.path,
            data=ciphertext,
            temp_prefix=CACHE_TEMP_PREFIX,
            temp_suffix=CACHE_TEMP_SUFFIX,
        )
        self.state = CacheState.PERSISTED
        logger.info("Persisted %d entries to %s", len(self.entries), self.path)
        return True

    def refresh(self) -> SyncReport:
        """Run the whole lifecycle: load, sync, persist."""
        self.load()
        report = self.sync()
        self.persist()
        return report

    def sorted_entries(self) -> list[Entry]:
        return [self.entries[name] for name in sorted(self.entries)]

    def to_payload(self) -> CachePayload:
        return {
            "version": CACHE_VERSION,
            "fingerprints": dict(self.fingerprints),
            "entries": {name: entry.to_payload() for name, entry in self.entries.items()},
        }

    def _load_drifted(self, drifted: tuple[str, ...]) -> list[tuple[str, Entry | StoreError]]:
        """Reveal drifted files, in parallel when configured; results keep drift order."""

        def load_one(relative_path: str) -> Entry | StoreError:
            try:
                return self.loader.load(relative_path)
            except StoreError as exc:
                return exc

        if self.workers == 1 or len(drifted) <= 1:
            return [(path, load_one(path)) for path in drifted]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            return list(zip(drifted, pool.map(load_one, drifted), strict=True))

    def _restore(self, payload: object) -> None:
        if not isinstance(payload, dict) or payload.get("version") != CACHE_VERSION:
            logger.warning("Discarding metadata cache with unknown layout; rebuilding")
            return
        raw_fingerprints = payload.get("fingerprints")
        raw_entries = payload.get("entries")
        if not isinstance(raw_fingerprints, dict) or not isinstance(raw_entries, dict):
            logger.warning("Discarding malformed metadata cache; rebuilding")
            return

        entries: dict[str, Entry] = {}
        for name, raw_entry in raw_entries.items():
            entry = Entry.from_payload(raw_entry) if isinstance(raw_entry, dict) else None
            if entry is None or entry.name != name:
                logger.warning("Dropping malformed cached entry '%s'", name)
                continue
            entries[name] = entry

        # Fingerprints without an entry are dropped so those files reload.
        suffix = self.detector.store.suffix
        self.fingerprints = {
            str(path): digest
            for path, digest in raw_fingerprints.items()
            if isinstance(digest, str) and entry_name_for_path(str(path), suffix) in entries
        }
        self.entries = entries
