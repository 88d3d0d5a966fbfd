"""``pass``-compatible credential store collaborator."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from passtype.exceptions import StoreError
from passtype.integrations.process import run_command
from passtype.store.discovery import discover_entry_files


class PassStore:
    """Enumerates ``*.gpg`` files under the store root and reveals them with ``pass show``."""

    def __init__(self, root: Path, suffix: str = ".gpg", reveal_command: tuple[str, ...] = ("pass", "show")):
        self._root = root
        self._suffix = suffix
        self._reveal_command = reveal_command

    @property
    def root(self) -> Path:
        return self._root

    @property
    def suffix(self) -> str:
        return self._suffix

    def iter_files(self) -> Iterator[str]:
        yield from discover_entry_files(self._root, self._suffix)

    def reveal(self, name: str) -> str:
        output = run_command([*self._reveal_command, name], error=StoreError)
        return output.decode("utf-8", errors="replace")
