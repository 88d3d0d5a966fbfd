"""Clipboard access and the pending clear that follows every copy.

At most one clear is pending at a time: scheduling a new one cancels the
previous one first. ``TimerClearScheduler`` keeps the timer in this process;
``DetachedClearScheduler`` hands it to a detached helper process so the
clear outlives a short-lived invocation.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
import threading
from collections.abc import Callable, Sequence
from contextlib import suppress
from pathlib import Path

import pyperclip

from passtype.constants.cache import CACHE_FILE_MODE
from passtype.exceptions import AutomationError
from passtype.integrations.base import Clipboard

logger = logging.getLogger(__name__)

CLEAR_COMMAND_MARKER = "clear-clipboard"


class PyperclipClipboard:
    def set(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise AutomationError(f"Clipboard unavailable: {exc}") from exc

    def clear(self) -> None:
        self.set("")


class TimerClearScheduler:
    """In-process clear timer."""

    def __init__(self, clipboard: Clipboard, *, daemon: bool = False):
        self._clipboard = clipboard
        self._daemon = daemon
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def schedule(self, delay: float) -> None:
        with self._lock:
            self._cancel_locked()
            timer = threading.Timer(delay, self._fire)
            timer.daemon = self._daemon
            self._timer = timer
            timer.start()

    def cancel(self) -> bool:
        with self._lock:
            return self._cancel_locked()

    def _cancel_locked(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def _fire(self) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        try:
            self._clipboard.clear()
        except AutomationError as exc:
            logger.warning("Clearing the clipboard failed: %s", exc)


class DetachedClearScheduler:
    """Clear timer run by a detached helper process whose pid is kept in ``pid_file``."""

    def __init__(
        self,
        pid_file: Path,
        *,
        command_factory: Callable[[float], Sequence[str]] | None = None,
    ):
        self.pid_file = pid_file
        self._command_factory = command_factory or (lambda delay: default_clear_command(delay, pid_file))

    def schedule(self, delay: float) -> None:
        self.cancel()
        try:
            process = subprocess.Popen(
                list(self._command_factory(delay)),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            raise AutomationError(f"Failed to start clipboard clear helper: {exc}") from exc
        self._write_pid(process.pid)
        logger.debug("Clipboard clear helper %d scheduled in %.0fs", process.pid, delay)

    def cancel(self) -> bool:
        pid = read_pid_file(self.pid_file)
        with suppress(FileNotFoundError):
            self.pid_file.unlink()
        if pid is None or not _is_clear_helper(pid):
            return False
        try:
            os.kill(pid, signal.SIGTERM)
        except ProcessLookupError:
            return False
        logger.debug("Cancelled pending clipboard clear helper %d", pid)
        return True

    def _write_pid(self, pid: int) -> None:
        self.pid_file.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self.pid_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, CACHE_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(f"{pid}\n")


def default_clear_command(delay: float, pid_file: Path) -> list[str]:
    return [
        sys.executable,
        "-m",
        "passtype.cli.main",
        CLEAR_COMMAND_MARKER,
        "--after",
        str(delay),
        "--pid-file",
        str(pid_file),
    ]


def read_pid_file(pid_file: Path) -> int | None:
    """Return the pid recorded in ``pid_file``, or None when absent or unreadable."""
    try:
        text = pid_file.read_text(encoding="utf-8").strip()
    except OSError:
        return None
    return int(text) if text.isascii() and text.isdecimal() else None


def _is_clear_helper(pid: int) -> bool:
    """Guard against signalling a recycled pid that belongs to another program."""
    cmdline = Path(f"/proc/{pid}/cmdline")
    if not cmdline.parent.parent.is_dir():
        return True
    try:
        return CLEAR_COMMAND_MARKER.encode() in cmdline.read_bytes()
    except OSError:
        return False
