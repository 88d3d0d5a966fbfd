"""rofi ``-dmenu`` picker."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from passtype.exceptions import AutomationError
from passtype.integrations.base import Selection

logger = logging.getLogger(__name__)

# rofi exits with 10 + n - 1 when ``-kb-custom-n`` accepted the row.
_CUSTOM_EXIT_BASE = 10
_CUSTOM_BINDING_LIMIT = 19


class RofiPicker:
    def __init__(self, command: tuple[str, ...] = ("rofi", "-dmenu", "-i")):
        self.command = command

    def choose(
        self,
        lines: Sequence[str],
        *,
        prompt: str,
        urgent: Sequence[int] = (),
        bindings: Sequence[str] = (),
        message: str = "",
    ) -> Selection | None:
        if len(bindings) > _CUSTOM_BINDING_LIMIT:
            raise AutomationError(f"rofi supports at most {_CUSTOM_BINDING_LIMIT} custom keybindings")

        args = [*self.command, "-p", prompt, "-format", "i"]
        if urgent:
            args += ["-u", ",".join(str(index) for index in urgent)]
        if message:
            args += ["-mesg", message]
        for number, key in enumerate(bindings, start=1):
            args += [f"-kb-custom-{number}", key]

        returncode, output = self._run(args, "\n".join(lines))
        if returncode == 1 or not output:
            return None
        if returncode == 0:
            binding = None
        elif _CUSTOM_EXIT_BASE <= returncode < _CUSTOM_EXIT_BASE + len(bindings):
            binding = returncode - _CUSTOM_EXIT_BASE
        else:
            raise AutomationError(f"{self.command[0]} exited with status {returncode}")

        try:
            index = int(output)
        except ValueError as exc:
            raise AutomationError(f"Unexpected picker output: {output!r}") from exc
        return Selection(index=index, binding=binding)

    def prompt(self, message: str) -> str | None:
        returncode, output = self._run([*self.command, "-p", message], "")
        if returncode != 0:
            return None
        return output

    def _run(self, args: list[str], stdin_text: str) -> tuple[int, str]:
        logger.debug("Running picker %s", args[0])
        try:
            result = subprocess.run(args, input=stdin_text, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise AutomationError(f"Failed to run {args[0]}: {exc}") from exc
        return result.returncode, result.stdout.strip()
