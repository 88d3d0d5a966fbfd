"""Build entries from revealed store content."""

from __future__ import annotations

import logging

import yaml

from passtype.config.model import AttributeKeys
from passtype.exceptions import EntryParseError
from passtype.integrations.base import CredentialStore
from passtype.model import Entry
from passtype.utils import entry_name_for_path

logger = logging.getLogger(__name__)


class MetadataLoader:
    """Reveals one store file and turns its content into an ``Entry``.

    Parse and merge failures never propagate: they come back as an
    error-flagged entry so the index can still list and flag them.
    ``StoreError`` from the reveal itself does propagate.
    """

    def __init__(self, store: CredentialStore, keys: AttributeKeys):
        self.store = store
        self.keys = keys

    def load(self, relative_path: str) -> Entry:
        name = entry_name_for_path(relative_path, self.store.suffix)
        content = self.store.reveal(name)
        return parse_entry(name, content, self.keys)


def parse_entry(name: str, content: str, keys: AttributeKeys) -> Entry:
    """Split secret line from metadata document and build the entry."""
    secret, _, document = content.partition("\n")
    secret = secret.rstrip("\r")

    try:
        metadata = yaml.safe_load(document) if document.strip() else None
    except yaml.YAMLError as exc:
        logger.warning("Metadata of %s is not valid YAML", name)
        return Entry.failure(name, f"Invalid metadata: {exc}")

    try:
        attributes = _merge_secret(metadata, secret, keys)
        return Entry.from_attributes(name, attributes, keys)
    except EntryParseError as exc:
        logger.warning("Metadata of %s rejected: %s", name, exc)
        return Entry.failure(name, f"Invalid metadata: {exc}")


def _merge_secret(metadata: object, secret: str, keys: AttributeKeys) -> dict[object, object]:
    if metadata is None:
        return {keys.password: secret}
    if not isinstance(metadata, dict):
        raise EntryParseError(f"expected key: value lines, got {type(metadata).__name__}")
    return {**metadata, keys.password: secret}
