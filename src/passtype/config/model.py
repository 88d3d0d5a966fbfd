"""Config data model for Passtype."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from passtype.constants.cli import ACTION_AUTOTYPE


@dataclass(frozen=True)
class AttributeKeys:
    """Names of the reserved entry attributes."""

    password: str = "pass"
    username: str = "user"
    otp_secret: str = "otp_secret"
    tan: str = "tan"
    window: str = "window"
    autotype: str = "autotype"

    def slot_key(self, slot: int) -> str:
        """Return the attribute key holding the action sequence for ``slot``."""
        if slot == 0:
            return self.autotype
        return f"{self.autotype}_{slot}"

    def slot_for_key(self, key: str) -> int | None:
        """Return the slot number addressed by ``key``, or None when it is not a slot key."""
        if key == self.autotype:
            return 0
        prefix = f"{self.autotype}_"
        if not key.startswith(prefix):
            return None
        suffix = key[len(prefix) :]
        if not (suffix.isascii() and suffix.isdecimal()):
            return None
        return int(suffix)

    @property
    def scalar_keys(self) -> frozenset[str]:
        """Reserved keys stored as single strings."""
        return frozenset({self.password, self.username, self.otp_secret, self.window})


@dataclass(frozen=True)
class StoreConfig:
    """Location and reveal command of the credential store."""

    root: Path = Path("~/.password-store")
    suffix: str = ".gpg"
    reveal_command: tuple[str, ...] = ("pass", "show")


@dataclass(frozen=True)
class CacheConfig:
    """Encrypted metadata cache settings."""

    path: Path = Path("~/.cache/passtype/cache.json.gpg")
    recipient: str = ""
    workers: int = 1
    prune_orphans: bool = False


@dataclass(frozen=True)
class ClipboardConfig:
    """Clipboard copy and clear-timer settings."""

    clear_after: float = 45.0
    detach: bool = True
    pid_file: Path = Path("/tmp/passtype-clipboard.pid")


@dataclass(frozen=True)
class PickerConfig:
    """Picker command line."""

    command: tuple[str, ...] = ("rofi", "-dmenu", "-i")
    prompt: str = "passtype"


@dataclass(frozen=True)
class Keybinding:
    """One picker keybinding: the action it triggers and its display string."""

    action: str
    key: str
    slot: int = 0

    @property
    def is_autotype(self) -> bool:
        return self.action == ACTION_AUTOTYPE


@dataclass(frozen=True)
class PasstypeConfig:
    """Resolved configuration, built once at startup and passed explicitly."""

    store: StoreConfig = StoreConfig()
    cache: CacheConfig = CacheConfig()
    keys: AttributeKeys = AttributeKeys()
    gpg_binary: str = "gpg"
    autotype_defaults: dict[int, tuple[str, ...]] = field(default_factory=dict)
    keybindings: tuple[Keybinding, ...] = ()
    clipboard: ClipboardConfig = ClipboardConfig()
    picker: PickerConfig = PickerConfig()
    type_delay_ms: int = 12
    log_level: str = "WARNING"
