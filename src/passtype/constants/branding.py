"""Branding constants for terminal output and notifications."""

from __future__ import annotations

CLI_DESCRIPTION: str = "Pick a password-store entry and autotype or copy it into the focused window."
NOTIFY_TITLE: str = "passtype"
