"""Shared pytest fixtures and in-memory collaborators."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest

from passtype.config import AttributeKeys, CacheConfig, ClipboardConfig, Keybinding, PasstypeConfig, StoreConfig
from passtype.constants.cli import ACTION_AUTOTYPE, ACTION_COPY_OTP, ACTION_COPY_PASSWORD, ACTION_TAN
from passtype.exceptions import CipherError
from passtype.integrations.base import Selection, Window
from passtype.store.discovery import discover_entry_files

CIPHER_MAGIC = b"FAKEGPG:"


class FakeStore:
    """Store whose ``.gpg`` files hold plaintext; ``reveal`` reads them and counts calls."""

    def __init__(self, root: Path, suffix: str = ".gpg"):
        self.root = root
        self.suffix = suffix
        self.reveals: list[str] = []

    def write(self, name: str, content: str) -> Path:
        path = self.root / f"{name}{self.suffix}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def iter_files(self) -> Iterator[str]:
        yield from discover_entry_files(self.root, self.suffix)

    def reveal(self, name: str) -> str:
        self.reveals.append(name)
        return (self.root / f"{name}{self.suffix}").read_text(encoding="utf-8")


class FakeCipher:
    """Reversible stand-in for gpg that records recipients."""

    def __init__(self) -> None:
        self.encrypted_for: list[str] = []
        self.decrypt_calls = 0

    def encrypt(self, data: bytes, recipient: str) -> bytes:
        self.encrypted_for.append(recipient)
        return CIPHER_MAGIC + data[::-1]

    def decrypt(self, data: bytes) -> bytes:
        self.decrypt_calls += 1
        if not data.startswith(CIPHER_MAGIC):
            raise CipherError("gpg exited with status 2: decryption failed: No secret key")
        return data[len(CIPHER_MAGIC) :][::-1]


class FakeAutomation:
    def __init__(self, window: Window | None = None) -> None:
        self.window = window or Window(id="42", title="Mail - Inbox")
        self.calls: list[tuple[str, ...]] = []

    def active_window(self) -> Window:
        return self.window

    def focus(self, window_id: str) -> None:
        self.calls.append(("focus", window_id))

    def send_keys(self, *keys: str) -> None:
        self.calls.append(("keys", *keys))

    def type_text(self, text: str) -> None:
        self.calls.append(("type", text))


class FakeClipboard:
    def __init__(self) -> None:
        self.value = ""
        self.sets: list[str] = []
        self.clears = 0

    def set(self, text: str) -> None:
        self.value = text
        self.sets.append(text)

    def clear(self) -> None:
        self.value = ""
        self.clears += 1


class FakeScheduler:
    def __init__(self) -> None:
        self.scheduled: list[float] = []

    def schedule(self, delay: float) -> None:
        self.scheduled.append(delay)

    def cancel(self) -> bool:
        return False


class FakeNotifier:
    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, message: str, severity: str = "normal", duration_ms: int | None = None) -> None:
        self.messages.append((severity, message))


class FakePicker:
    """Returns a scripted selection and scripted prompt answers."""

    def __init__(self, selection: Selection | None = None, answers: Sequence[str | None] = ()) -> None:
        self.selection = selection
        self.answers = list(answers)
        self.shown: list[str] = []
        self.urgent: list[int] = []
        self.bindings: list[str] = []
        self.prompts: list[str] = []

    def choose(
        self,
        lines: Sequence[str],
        *,
        prompt: str,
        urgent: Sequence[int] = (),
        bindings: Sequence[str] = (),
        message: str = "",
    ) -> Selection | None:
        self.shown = list(lines)
        self.urgent = list(urgent)
        self.bindings = list(bindings)
        return self.selection

    def prompt(self, message: str) -> str | None:
        self.prompts.append(message)
        return self.answers.pop(0) if self.answers else None


@pytest.fixture
def keys() -> AttributeKeys:
    return AttributeKeys()


@pytest.fixture
def store(tmp_path: Path) -> FakeStore:
    root = tmp_path / "store"
    root.mkdir()
    return FakeStore(root)


@pytest.fixture
def cipher() -> FakeCipher:
    return FakeCipher()


@pytest.fixture
def config(tmp_path: Path, store: FakeStore) -> PasstypeConfig:
    """A config pointing at the fake store with the default keybindings."""
    return PasstypeConfig(
        store=StoreConfig(root=store.root),
        cache=CacheConfig(path=tmp_path / "cache" / "cache.json.gpg", recipient="ABCDEF0123456789"),
        keybindings=(
            Keybinding(action=ACTION_AUTOTYPE, key="Alt+1", slot=1),
            Keybinding(action=ACTION_AUTOTYPE, key="Alt+2", slot=2),
            Keybinding(action=ACTION_AUTOTYPE, key="Alt+3", slot=3),
            Keybinding(action=ACTION_COPY_PASSWORD, key="Alt+c"),
            Keybinding(action=ACTION_TAN, key="Alt+t"),
            Keybinding(action=ACTION_COPY_OTP, key="Alt+o"),
        ),
        clipboard=ClipboardConfig(clear_after=45.0, detach=False, pid_file=tmp_path / "clip.pid"),
    )
