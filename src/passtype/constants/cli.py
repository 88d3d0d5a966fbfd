"""Process exit codes and picker action names."""

from __future__ import annotations

EXIT_OK: int = 0
EXIT_FAILURE: int = 1
EXIT_CONFIG: int = 2

ACTION_AUTOTYPE: str = "autotype"
ACTION_COPY_PASSWORD: str = "copy_password"
ACTION_COPY_OTP: str = "copy_otp"
ACTION_TAN: str = "tan"

NOTIFY_ERROR_DURATION_MS: int = 5000
