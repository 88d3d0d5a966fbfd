"""Collaborator interfaces the core depends on."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from passtype.types.common import Severity


@dataclass(frozen=True)
class Window:
    """A top-level window as reported by the automation tool."""

    id: str
    title: str


@dataclass(frozen=True)
class Selection:
    """Result of a picker run: the chosen row and the keybinding used to choose it.

    ``binding`` is None for the accept key, otherwise the index into the
    keybindings passed to the picker.
    """

    index: int
    binding: int | None = None


class CredentialStore(Protocol):
    """One encrypted file per entry under ``root``."""

    @property
    def root(self) -> Path: ...

    @property
    def suffix(self) -> str: ...

    def iter_files(self) -> Iterator[str]:
        """Yield store-relative POSIX paths of every entry file."""
        ...

    def reveal(self, name: str) -> str:
        """Return the decrypted content of the entry called ``name``."""
        ...


class Cipher(Protocol):
    def encrypt(self, data: bytes, recipient: str) -> bytes: ...

    def decrypt(self, data: bytes) -> bytes: ...


class Automation(Protocol):
    def active_window(self) -> Window: ...

    def focus(self, window_id: str) -> None: ...

    def send_keys(self, *keys: str) -> None: ...

    def type_text(self, text: str) -> None: ...


class Clipboard(Protocol):
    def set(self, text: str) -> None: ...

    def clear(self) -> None: ...


class ClearScheduler(Protocol):
    """Schedules the clipboard clear that follows a copy."""

    def schedule(self, delay: float) -> None: ...

    def cancel(self) -> bool: ...


class Notifier(Protocol):
    def notify(self, message: str, severity: Severity = "normal", duration_ms: int | None = None) -> None: ...


class Picker(Protocol):
    def choose(
        self,
        lines: Sequence[str],
        *,
        prompt: str,
        urgent: Sequence[int] = (),
        bindings: Sequence[str] = (),
        message: str = "",
    ) -> Selection | None:
        """Show ``lines`` and return the selection, or None when dismissed."""
        ...

    def prompt(self, message: str) -> str | None:
        """Ask for free text; None when dismissed."""
        ...
