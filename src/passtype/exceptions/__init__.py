"""Shared exception hierarchy for Passtype."""

from __future__ import annotations

from .actions import ActionCancelled, ActionError, AutomationError
from .base import PasstypeError
from .config import ConfigError
from .parsing import EntryParseError
from .store import CacheDecryptError, CipherError, StoreError

__all__ = [
    "ActionCancelled",
    "ActionError",
    "AutomationError",
    "CacheDecryptError",
    "CipherError",
    "ConfigError",
    "EntryParseError",
    "PasstypeError",
    "StoreError",
]
