"""Root of the Passtype exception hierarchy."""

from __future__ import annotations


class PasstypeError(Exception):
    """Base class for all errors raised by Passtype."""
