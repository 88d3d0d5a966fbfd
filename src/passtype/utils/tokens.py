"""Autotype token splitting shared by config and entry parsing."""

from __future__ import annotations


def split_tokens(value: object) -> tuple[str, ...] | None:
    """Return the token sequence for an autotype value.

    Strings are split on whitespace and lists of strings are used as-is.
    Returns None for any other shape so callers can report the offending key.
    """
    if isinstance(value, str):
        return tuple(value.split())
    if isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value):
        return tuple(item for item in value if item)
    return None
