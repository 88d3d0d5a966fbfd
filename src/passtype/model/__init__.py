"""Core data models for Passtype."""

from .actions import Action
from .entry import Entry, builtin_slot_tokens

__all__ = ["Action", "Entry", "builtin_slot_tokens"]
