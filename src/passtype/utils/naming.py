"""Entry naming helpers."""

from __future__ import annotations

from pathlib import PurePosixPath


def entry_name_for_path(relative_path: str, suffix: str) -> str:
    """Strip the store suffix from a store-relative POSIX path."""
    if suffix and relative_path.endswith(suffix):
        return relative_path[: -len(suffix)]
    return relative_path


def leaf_name(name: str) -> str:
    """Return the last path component of an entry name."""
    return PurePosixPath(name).name or name
