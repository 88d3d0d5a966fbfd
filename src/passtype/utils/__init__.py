"""Utility helpers for Passtype."""

from .naming import entry_name_for_path, leaf_name
from .tokens import split_tokens

__all__ = ["entry_name_for_path", "leaf_name", "split_tokens"]
