"""Configuration-related exceptions."""

from __future__ import annotations

from passtype.exceptions.base import PasstypeError


class ConfigError(PasstypeError, ValueError):
    """Raised when the configuration document is missing required values or is invalid."""
