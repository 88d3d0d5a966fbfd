"""Constants for entry attributes and autotype action tokens."""

from __future__ import annotations

CONTROL_PREFIX: str = ":"

CONTROL_TAB: str = "tab"
CONTROL_ENTER: str = "enter"
CONTROL_SPACE: str = "space"
CONTROL_OTP: str = "otp"
CONTROL_DELAY: str = "delay"

# Control actions that map straight onto a single key press.
CONTROL_KEYS: dict[str, str] = {
    CONTROL_TAB: "Tab",
    CONTROL_ENTER: "Return",
    CONTROL_SPACE: "space",
}
KNOWN_CONTROLS: frozenset[str] = frozenset({*CONTROL_KEYS, CONTROL_OTP, CONTROL_DELAY})

DELAY_SECONDS: float = 0.5

# Highest slot with a built-in action sequence; later slots resolve empty.
BUILTIN_SLOT_COUNT: int = 4

OTP_URI_PREFIX: str = "otpauth://"
