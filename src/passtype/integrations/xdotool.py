"""X11 window focus and keystroke injection through ``xdotool``."""

from __future__ import annotations

from passtype.exceptions import AutomationError
from passtype.integrations.base import Window
from passtype.integrations.process import run_command


class XdotoolAutomation:
    def __init__(self, binary: str = "xdotool", type_delay_ms: int = 12):
        self.binary = binary
        self.type_delay_ms = type_delay_ms

    def active_window(self) -> Window:
        window_id = self._run("getactivewindow").strip()
        title = self._run("getwindowname", window_id).strip()
        return Window(id=window_id, title=title)

    def focus(self, window_id: str) -> None:
        self._run("windowactivate", "--sync", window_id)

    def send_keys(self, *keys: str) -> None:
        if keys:
            self._run("key", "--clearmodifiers", *keys)

    def type_text(self, text: str) -> None:
        # Text goes through stdin so secrets never show up in the process list.
        run_command(
            [self.binary, "type", "--clearmodifiers", "--delay", str(self.type_delay_ms), "--file", "-"],
            error=AutomationError,
            input_bytes=text.encode("utf-8"),
        )

    def _run(self, *args: str) -> str:
        output = run_command([self.binary, *args], error=AutomationError)
        return output.decode("utf-8", errors="replace")
