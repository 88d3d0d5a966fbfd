"""Parsing-related exceptions."""

from __future__ import annotations

from passtype.exceptions.base import PasstypeError


class EntryParseError(PasstypeError, ValueError):
    """Raised when revealed entry content cannot be turned into an entry."""
