"""Entry file discovery and display naming helpers."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from passtype.utils import leaf_name

logger = logging.getLogger(__name__)


def discover_entry_files(root: Path, suffix: str) -> list[str]:
    """Return store-relative POSIX paths of every ``*<suffix>`` file under ``root``.

    Hidden directories (``.git``, ``.extensions``...) are skipped. Results are
    sorted so enumeration order is stable across runs.
    """
    discovered: list[str] = []
    for path in root.rglob(f"*{suffix}"):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts[:-1]):
            continue
        if not path.is_file():
            continue
        discovered.append(relative.as_posix())
    return sorted(discovered)


def assign_display_names(names: Iterable[str]) -> dict[str, str]:
    """Map each entry name to its display name.

    The display name is the leaf component; when several entries share a
    leaf, each of them falls back to its full relative name so picker rows
    stay one-to-one with entries.
    """
    names = list(names)
    names_by_leaf: dict[str, list[str]] = {}
    for name in names:
        names_by_leaf.setdefault(leaf_name(name), []).append(name)

    display: dict[str, str] = {}
    for leaf, group in names_by_leaf.items():
        if len(group) > 1:
            logger.debug("Leaf name '%s' shared by %d entries; showing full names", leaf, len(group))
        for name in group:
            display[name] = leaf if len(group) == 1 else name
    return display
