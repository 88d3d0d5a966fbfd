"""Constants for interactive entry actions."""

from __future__ import annotations

TAN_MAX_ATTEMPTS: int = 5
TAN_PROMPT: str = "TAN index (1-{count})"
TAN_RETRY_PROMPT: str = "Not a valid index, TAN index (1-{count})"
