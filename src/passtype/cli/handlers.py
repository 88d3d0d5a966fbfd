"""Command handlers behind the CLI entrypoint."""

from __future__ import annotations

import logging
import os
import time
from contextlib import suppress
from pathlib import Path

from passtype.actions import ActionRunner
from passtype.cli.runtime import Runtime, build_cache
from passtype.config.model import Keybinding, PasstypeConfig
from passtype.constants.cli import (
    ACTION_AUTOTYPE,
    ACTION_COPY_OTP,
    ACTION_COPY_PASSWORD,
    ACTION_TAN,
    EXIT_FAILURE,
    EXIT_OK,
    NOTIFY_ERROR_DURATION_MS,
)
from passtype.exceptions import ActionCancelled, ActionError, AutomationError
from passtype.integrations.base import Clipboard, Window
from passtype.integrations.clipboard import read_pid_file
from passtype.model import Entry
from passtype.store import SyncReport, assign_display_names, rank_entries

logger = logging.getLogger(__name__)


def run_pick(config: PasstypeConfig, runtime: Runtime) -> int:
    """Sync the cache, show the picker, and perform the chosen action."""
    cache = build_cache(config, runtime)
    cache.refresh()

    window = _focused_window(runtime)
    ranked = rank_entries(cache.entries.values(), window.title if window else "")
    display = assign_display_names(entry.name for entry in ranked)

    selection = runtime.picker.choose(
        [display[entry.name] for entry in ranked],
        prompt=config.picker.prompt,
        urgent=[index for index, entry in enumerate(ranked) if entry.failed],
        bindings=[binding.key for binding in config.keybindings],
        message=keybinding_help(config.keybindings),
    )
    if selection is None or not 0 <= selection.index < len(ranked):
        logger.debug("Nothing selected")
        return EXIT_OK

    entry = ranked[selection.index]
    if entry.failed:
        runtime.notifier.notify(f"{entry.name}: {entry.error}", "critical", NOTIFY_ERROR_DURATION_MS)
        return EXIT_FAILURE

    binding = None if selection.binding is None else config.keybindings[selection.binding]
    runner = ActionRunner(
        config,
        automation=runtime.automation,
        clipboard=runtime.clipboard,
        clear_scheduler=runtime.clear_scheduler,
        picker=runtime.picker,
    )
    try:
        perform_binding(runner, entry, binding, window)
    except ActionCancelled:
        logger.info("Action cancelled")
        return EXIT_OK
    except (ActionError, AutomationError) as exc:
        runtime.notifier.notify(str(exc), "critical", NOTIFY_ERROR_DURATION_MS)
        return EXIT_FAILURE
    return EXIT_OK


def perform_binding(runner: ActionRunner, entry: Entry, binding: Keybinding | None, window: Window | None) -> None:
    """Dispatch the picker keybinding (None is the accept key, autotype slot 0)."""
    action = ACTION_AUTOTYPE if binding is None else binding.action
    if action == ACTION_COPY_PASSWORD:
        runner.copy_password(entry)
        return
    if action == ACTION_COPY_OTP:
        runner.copy_otp(entry)
        return

    if window is None:
        raise ActionError("No focused window to type into")
    if action == ACTION_TAN:
        runner.type_tan(entry, window)
    else:
        runner.autotype(entry, 0 if binding is None else binding.slot, window)


def run_sync(config: PasstypeConfig, runtime: Runtime) -> tuple[SyncReport, bool]:
    """Refresh the cache without showing the picker; returns the report and whether it was written."""
    cache = build_cache(config, runtime)
    cache.load()
    report = cache.sync()
    return report, cache.persist()


def list_entries(config: PasstypeConfig, runtime: Runtime, title: str) -> list[Entry]:
    cache = build_cache(config, runtime)
    cache.refresh()
    return rank_entries(cache.entries.values(), title)


def clear_clipboard_after(delay: float, clipboard: Clipboard, pid_file: Path | None = None) -> None:
    """Body of the detached clear helper: wait, clear, and release the pid file."""
    time.sleep(delay)
    clipboard.clear()
    if pid_file is not None and read_pid_file(pid_file) == os.getpid():
        with suppress(FileNotFoundError):
            pid_file.unlink()


def keybinding_help(bindings: tuple[Keybinding, ...]) -> str:
    """Render the picker help line, e.g. ``Alt+1: autotype 1 | Alt+c: copy password``."""
    parts = []
    for binding in bindings:
        if binding.is_autotype:
            label = f"autotype {binding.slot}"
        else:
            label = binding.action.replace("_", " ")
        parts.append(f"{binding.key}: {label}")
    return " | ".join(parts)


def _focused_window(runtime: Runtime) -> Window | None:
    try:
        return runtime.automation.active_window()
    except AutomationError as exc:
        logger.warning("Cannot determine the focused window: %s", exc)
        return None
