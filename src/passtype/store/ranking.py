"""Order entries by how well they match the focused window title."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from passtype.model import Entry

logger = logging.getLogger(__name__)


def window_pattern(entry: Entry) -> re.Pattern[str]:
    """Compile the entry's window regex (or display name) case-insensitively.

    Patterns that are not valid regular expressions match literally.
    """
    source = entry.window or entry.display_name
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error:
        logger.debug("Window pattern of %s is not a valid regex; matching literally", entry.name)
        return re.compile(re.escape(source), re.IGNORECASE)


def match_remainder(entry: Entry, title: str) -> int | None:
    """Return how many title characters the best match leaves unmatched, or None when it does not match."""
    if not title:
        return None
    best: int | None = None
    for match in window_pattern(entry).finditer(title):
        remainder = len(title) - len(match.group(0))
        if best is None or remainder < best:
            best = remainder
    return best


def rank_entries(entries: Iterable[Entry], title: str) -> list[Entry]:
    """Sort entries for the picker.

    Entries matching ``title`` come first, closest match (smallest remainder)
    first; everything else follows in name order. Ties break on name, so the
    order is total and deterministic.
    """

    def sort_key(entry: Entry) -> tuple[int, int, str]:
        remainder = match_remainder(entry, title)
        if remainder is None:
            return (1, 0, entry.name)
        return (0, remainder, entry.name)

    return sorted(entries, key=sort_key)
