"""Desktop notifications through ``notify-send``."""

from __future__ import annotations

import logging

from passtype.constants.branding import NOTIFY_TITLE
from passtype.exceptions import AutomationError
from passtype.integrations.process import run_command
from passtype.types.common import Severity

logger = logging.getLogger(__name__)


class NotifySendNotifier:
    """Fire-and-forget notifications; failures are logged and otherwise ignored."""

    def __init__(self, binary: str = "notify-send", title: str = NOTIFY_TITLE):
        self.binary = binary
        self.title = title

    def notify(self, message: str, severity: Severity = "normal", duration_ms: int | None = None) -> None:
        command = [self.binary, "--app-name", self.title, "--urgency", severity]
        if duration_ms is not None:
            command += ["--expire-time", str(duration_ms)]
        command += [self.title, message]
        try:
            run_command(command, error=AutomationError)
        except AutomationError as exc:
            logger.warning("Notification failed: %s", exc)
