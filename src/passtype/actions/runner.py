"""Perform entry operations: autotype, TAN, OTP, and clipboard copies."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from passtype.config.model import PasstypeConfig
from passtype.constants.actions import TAN_MAX_ATTEMPTS, TAN_PROMPT, TAN_RETRY_PROMPT
from passtype.constants.entry import CONTROL_DELAY, CONTROL_KEYS, CONTROL_OTP, DELAY_SECONDS, KNOWN_CONTROLS
from passtype.exceptions import ActionCancelled, ActionError
from passtype.integrations.base import Automation, ClearScheduler, Clipboard, Picker, Window
from passtype.model import Action, Entry

logger = logging.getLogger(__name__)


class ActionRunner:
    """Turns resolved entry actions into window focus, keystrokes and clipboard writes."""

    def __init__(
        self,
        config: PasstypeConfig,
        *,
        automation: Automation,
        clipboard: Clipboard,
        clear_scheduler: ClearScheduler,
        picker: Picker,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.automation = automation
        self.clipboard = clipboard
        self.clear_scheduler = clear_scheduler
        self.picker = picker
        self.sleep = sleep

    def autotype(self, entry: Entry, slot: int, window: Window) -> bool:
        """Type the slot's action sequence into ``window``.

        Returns False without focusing or typing anything when the slot
        resolves to an empty sequence.
        """
        _ensure_usable(entry)
        actions = entry.resolve_actions(slot, self.config.keys, self.config.autotype_defaults)
        if not actions:
            logger.info("Slot %d of %s is empty; nothing to type", slot, entry.name)
            return False
        self._perform(window, self._materialize(entry, actions))
        return True

    def type_tan(self, entry: Entry, window: Window) -> None:
        """Prompt for a TAN index and type the selected code."""
        action = self.select_tan(entry)
        self._perform(window, (action,))

    def select_tan(self, entry: Entry) -> Action:
        """Prompt until a valid 1-based TAN index is entered.

        Raises:
            ActionError: when the entry has no TAN list or every attempt was invalid.
            ActionCancelled: when the prompt is dismissed.
        """
        _ensure_usable(entry)
        if not entry.tan:
            raise ActionError(f"{entry.name} has no TAN list")

        count = len(entry.tan)
        message = TAN_PROMPT.format(count=count)
        for _ in range(TAN_MAX_ATTEMPTS):
            answer = self.picker.prompt(message)
            if answer is None:
                raise ActionCancelled("TAN selection cancelled")
            answer = answer.strip()
            if answer.isascii() and answer.isdecimal() and 1 <= int(answer) <= count:
                return entry.tan_action(int(answer))
            message = TAN_RETRY_PROMPT.format(count=count)
        raise ActionError(f"No valid TAN index given after {TAN_MAX_ATTEMPTS} attempts")

    def copy_password(self, entry: Entry) -> None:
        _ensure_usable(entry)
        if entry.password is None:
            raise ActionError(f"{entry.name} has no password")
        self._copy(entry.password)

    def copy_otp(self, entry: Entry) -> None:
        _ensure_usable(entry)
        self._copy(entry.otp_code())

    def _copy(self, text: str) -> None:
        self.clipboard.set(text)
        self.clear_scheduler.schedule(self.config.clipboard.clear_after)
        logger.info("Copied to clipboard; clearing in %.0fs", self.config.clipboard.clear_after)

    def _materialize(self, entry: Entry, actions: tuple[Action, ...]) -> tuple[Action, ...]:
        """Resolve OTP codes and reject unknown controls before anything is focused."""
        materialized: list[Action] = []
        for action in actions:
            if action.kind == "control" and action.value == CONTROL_OTP:
                materialized.append(Action.text(entry.otp_code(), source=CONTROL_OTP))
            elif action.kind == "control" and action.value not in KNOWN_CONTROLS:
                raise ActionError(f"Unknown autotype action ':{action.value}' in {entry.name}")
            else:
                materialized.append(action)
        return tuple(materialized)

    def _perform(self, window: Window, actions: tuple[Action, ...]) -> None:
        self.automation.focus(window.id)
        for action in actions:
            if action.kind == "text":
                self.automation.type_text(action.value)
            elif action.value == CONTROL_DELAY:
                self.sleep(DELAY_SECONDS)
            else:
                self.automation.send_keys(CONTROL_KEYS[action.value])


def _ensure_usable(entry: Entry) -> None:
    if entry.error is not None:
        raise ActionError(f"{entry.name}: {entry.error}")
