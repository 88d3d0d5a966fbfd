"""Pure helpers for layering configuration documents."""

from __future__ import annotations

import re
from collections.abc import Mapping

from passtype.types.common import JsonValue

_ENV_PATTERN = re.compile(
    r"\$(?:(?P<escaped>\$)"
    r"|\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)(?::-(?P<default>[^}]*))?\}"
    r"|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))"
)


def deep_merge(base: JsonValue, override: JsonValue) -> JsonValue:
    """Merge ``override`` over ``base``.

    Mappings merge key by key, recursively. Any other override value replaces
    the base value, except ``None`` which counts as absent. Neither input is
    modified.
    """
    if override is None:
        return _copy(base)
    if isinstance(base, dict) and isinstance(override, dict):
        merged: dict[str, JsonValue] = {key: _copy(value) for key, value in base.items()}
        for key, value in override.items():
            merged[key] = deep_merge(merged[key], value) if key in merged else _copy(value)
        return merged
    return _copy(override)


def interpolate_env(value: JsonValue, environ: Mapping[str, str]) -> JsonValue:
    """Expand ``$VAR``, ``${VAR}`` and ``${VAR:-default}`` in every string, recursively.

    Unset variables expand to the empty string (or the inline default), and
    ``$$`` yields a literal ``$``.
    """
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda match: _expand(match, environ), value)
    if isinstance(value, list):
        return [interpolate_env(item, environ) for item in value]
    if isinstance(value, dict):
        return {key: interpolate_env(item, environ) for key, item in value.items()}
    return value


def _expand(match: re.Match[str], environ: Mapping[str, str]) -> str:
    if match.group("escaped"):
        return "$"
    name = match.group("braced") or match.group("bare")
    resolved = environ.get(name, "")
    if not resolved and match.group("default") is not None:
        return match.group("default")
    return resolved


def _copy(value: JsonValue) -> JsonValue:
    if isinstance(value, dict):
        return {key: _copy(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy(item) for item in value]
    return value
