"""Config loading, scaffolding and normalization for Passtype."""

from __future__ import annotations

import difflib
import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from passtype.config.merge import deep_merge, interpolate_env
from passtype.config.model import (
    AttributeKeys,
    CacheConfig,
    ClipboardConfig,
    Keybinding,
    PasstypeConfig,
    PickerConfig,
    StoreConfig,
)
from passtype.constants.cli import ACTION_AUTOTYPE, ACTION_COPY_OTP, ACTION_COPY_PASSWORD, ACTION_TAN
from passtype.constants.config import (
    ALLOWED_TOP_LEVEL_KEYS,
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    CONFIG_HOME_ENV,
    CONFIG_HOME_FALLBACK,
    DEFAULT_CONFIG,
    SCAFFOLD_HEADER,
    VALID_LOG_LEVELS,
)
from passtype.exceptions import ConfigError
from passtype.utils import split_tokens

logger = logging.getLogger(__name__)

_AUTOTYPE_BINDING = re.compile(r"^autotype_(?P<slot>\d+)$")
_FIXED_BINDINGS: frozenset[str] = frozenset({ACTION_COPY_PASSWORD, ACTION_COPY_OTP, ACTION_TAN})


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return ``$XDG_CONFIG_HOME/passtype/config.yaml``."""
    environ = os.environ if environ is None else environ
    config_home = environ.get(CONFIG_HOME_ENV) or CONFIG_HOME_FALLBACK
    return Path(config_home).expanduser() / CONFIG_DIRNAME / CONFIG_FILENAME


def scaffold_config(path: Path) -> Path:
    """Write the default configuration document to ``path`` and return it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    body = yaml.safe_dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False)
    path.write_text(SCAFFOLD_HEADER + body, encoding="utf-8")
    logger.info("Wrote default configuration to %s", path)
    return path


def load_config(path: Path, environ: Mapping[str, str] | None = None) -> PasstypeConfig:
    """Load, interpolate, merge over defaults and validate the configuration document."""
    environ = os.environ if environ is None else environ
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    for key in raw:
        if key not in ALLOWED_TOP_LEVEL_KEYS:
            raise ConfigError(f"Unknown config key '{key}'{_suggest_key(str(key), ALLOWED_TOP_LEVEL_KEYS)}")

    merged = deep_merge(DEFAULT_CONFIG, raw)
    resolved = interpolate_env(merged, environ)
    assert isinstance(resolved, dict)
    return build_config(resolved)


def build_config(raw: dict[str, Any]) -> PasstypeConfig:
    """Validate a merged, interpolated document into a ``PasstypeConfig``."""
    store_raw = _section(raw, "store")
    cache_raw = _section(raw, "cache")
    keys_raw = _section(raw, "keys")
    clipboard_raw = _section(raw, "clipboard")
    picker_raw = _section(raw, "picker")

    store_root = _ensure_path(store_raw.get("root"), "store.root")
    if not store_root.is_dir():
        raise ConfigError(f"store.root does not exist or is not a directory: {store_root}")

    recipient = _ensure_string(cache_raw.get("recipient"), "cache.recipient").strip()
    if not recipient:
        raise ConfigError("cache.recipient must name the gpg key used to encrypt the metadata cache")

    workers = cache_raw.get("workers")
    if isinstance(workers, bool) or not isinstance(workers, int) or workers <= 0:
        raise ConfigError("cache.workers must be a positive integer")

    keys = AttributeKeys(
        password=_ensure_key(keys_raw.get("password"), "keys.password"),
        username=_ensure_key(keys_raw.get("username"), "keys.username"),
        otp_secret=_ensure_key(keys_raw.get("otp_secret"), "keys.otp_secret"),
        tan=_ensure_key(keys_raw.get("tan"), "keys.tan"),
        window=_ensure_key(keys_raw.get("window"), "keys.window"),
        autotype=_ensure_key(keys_raw.get("autotype"), "keys.autotype"),
    )

    clear_after = clipboard_raw.get("clear_after")
    if isinstance(clear_after, bool) or not isinstance(clear_after, (int, float)) or clear_after <= 0:
        raise ConfigError("clipboard.clear_after must be a positive number of seconds")

    type_delay_ms = _section(raw, "automation").get("type_delay_ms")
    if isinstance(type_delay_ms, bool) or not isinstance(type_delay_ms, int) or type_delay_ms < 0:
        raise ConfigError("automation.type_delay_ms must be a non-negative integer")

    log_level = _ensure_string(_section(raw, "logging").get("level"), "logging.level").upper()
    if log_level not in VALID_LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {sorted(VALID_LOG_LEVELS)}, got {log_level!r}")

    return PasstypeConfig(
        store=StoreConfig(
            root=store_root,
            suffix=_ensure_string(store_raw.get("suffix"), "store.suffix"),
            reveal_command=_ensure_command(store_raw.get("reveal_command"), "store.reveal_command"),
        ),
        cache=CacheConfig(
            path=_ensure_path(cache_raw.get("path"), "cache.path"),
            recipient=recipient,
            workers=workers,
            prune_orphans=_ensure_bool(cache_raw.get("prune_orphans"), "cache.prune_orphans"),
        ),
        keys=keys,
        gpg_binary=_ensure_string(_section(raw, "gpg").get("binary"), "gpg.binary"),
        autotype_defaults=_build_autotype_defaults(_section(raw, "autotype"), keys),
        keybindings=_build_keybindings(_section(raw, "keybindings")),
        clipboard=ClipboardConfig(
            clear_after=float(clear_after),
            detach=_ensure_bool(clipboard_raw.get("detach"), "clipboard.detach"),
            pid_file=_ensure_path(clipboard_raw.get("pid_file"), "clipboard.pid_file"),
        ),
        picker=PickerConfig(
            command=_ensure_command(picker_raw.get("command"), "picker.command"),
            prompt=_ensure_string(picker_raw.get("prompt"), "picker.prompt"),
        ),
        type_delay_ms=type_delay_ms,
        log_level=log_level,
    )


def _build_autotype_defaults(raw: dict[str, Any], keys: AttributeKeys) -> dict[int, tuple[str, ...]]:
    """Map slot keys like ``autotype_2`` in the config to slot numbers and token tuples."""
    defaults: dict[int, tuple[str, ...]] = {}
    for key, value in raw.items():
        slot = keys.slot_for_key(str(key))
        if slot is None:
            raise ConfigError(
                f"autotype.{key} is not a slot key (expected '{keys.autotype}' or '{keys.autotype}_<n>')"
            )
        tokens = split_tokens(value)
        if tokens is None:
            raise ConfigError(f"autotype.{key} must be a string or a list of strings")
        defaults[slot] = tokens
    return defaults


def _build_keybindings(raw: dict[str, Any]) -> tuple[Keybinding, ...]:
    """Build picker keybindings in document order, skipping empty (disabled) ones."""
    bindings: list[Keybinding] = []
    for action, key in raw.items():
        key = _ensure_string(key, f"keybindings.{action}").strip()
        if not key:
            continue
        match = _AUTOTYPE_BINDING.match(str(action))
        if match is not None:
            slot = int(match.group("slot"))
            if slot == 0:
                raise ConfigError("keybindings.autotype_0 is reserved for the accept key")
            bindings.append(Keybinding(action=ACTION_AUTOTYPE, key=key, slot=slot))
        elif action in _FIXED_BINDINGS:
            bindings.append(Keybinding(action=str(action), key=key))
        else:
            allowed = {*_FIXED_BINDINGS, "autotype_1"}
            raise ConfigError(f"Unknown keybinding '{action}'{_suggest_key(str(action), allowed)}")
    return tuple(bindings)


def _section(raw: dict[str, Any], name: str) -> dict[str, Any]:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping")
    return value


def _ensure_string(value: Any, key_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{key_name} must be a string")
    return value


def _ensure_key(value: Any, key_name: str) -> str:
    value = _ensure_string(value, key_name).strip()
    if not value:
        raise ConfigError(f"{key_name} must not be empty")
    return value


def _ensure_bool(value: Any, key_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key_name} must be a boolean")
    return value


def _ensure_path(value: Any, key_name: str) -> Path:
    value = _ensure_string(value, key_name).strip()
    if not value:
        raise ConfigError(f"{key_name} must not be empty")
    return Path(value).expanduser()


def _ensure_command(value: Any, key_name: str) -> tuple[str, ...]:
    """Accept a command as a list of strings or a whitespace-separated string."""
    command = split_tokens(value)
    if not command:
        raise ConfigError(f"{key_name} must be a non-empty command (string or list of strings)")
    return command


def _suggest_key(key: str, allowed: frozenset[str] | set[str]) -> str:
    """Return a ``did you mean`` hint for a mistyped key, or an empty string."""
    matches = difflib.get_close_matches(key, sorted(allowed), n=1, cutoff=0.6)
    if not matches:
        return ""
    return f" (did you mean '{matches[0]}'?)"
