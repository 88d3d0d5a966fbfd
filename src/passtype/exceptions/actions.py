"""User-facing action exceptions."""

from __future__ import annotations

from passtype.exceptions.base import PasstypeError


class ActionError(PasstypeError):
    """Raised when a requested entry action cannot be performed."""


class ActionCancelled(ActionError):
    """Raised when the user dismisses a prompt in the middle of an action."""


class AutomationError(PasstypeError):
    """Raised when window focus, key injection or clipboard access fails."""
