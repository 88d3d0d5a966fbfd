"""Shared type aliases for Passtype."""

from .cache import CachePayload, EntryPayload
from .common import ActionKind, JsonObject, JsonScalar, JsonValue, Severity

__all__ = [
    "ActionKind",
    "CachePayload",
    "EntryPayload",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Severity",
]
