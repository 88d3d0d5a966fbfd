"""Metadata cache synchronization: discovery, drift detection, loading, ranking."""

from .cache import CacheState, CacheStore, SyncReport
from .detector import ChangeDetector, Drift
from .discovery import assign_display_names, discover_entry_files
from .loader import MetadataLoader, parse_entry
from .ranking import match_remainder, rank_entries

__all__ = [
    "CacheState",
    "CacheStore",
    "ChangeDetector",
    "Drift",
    "MetadataLoader",
    "SyncReport",
    "assign_display_names",
    "discover_entry_files",
    "match_remainder",
    "parse_entry",
    "rank_entries",
]
