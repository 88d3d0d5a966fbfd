"""Tests for CLI parsing, exit codes and the picker flow."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeAutomation, FakeCipher, FakeClipboard, FakeNotifier, FakePicker, FakeScheduler, FakeStore

from passtype.cli import main as cli_main
from passtype.cli.handlers import keybinding_help, list_entries, run_pick, run_sync
from passtype.cli.main import build_parser, main
from passtype.cli.runtime import Runtime
from passtype.config import PasstypeConfig
from passtype.constants.cli import EXIT_CONFIG, EXIT_FAILURE, EXIT_OK
from passtype.exceptions import AutomationError
from passtype.integrations.base import Selection, Window


def _runtime(store: FakeStore, picker: FakePicker, automation: FakeAutomation | None = None) -> Runtime:
    return Runtime(
        store=store,
        cipher=FakeCipher(),
        automation=automation or FakeAutomation(),
        clipboard=FakeClipboard(),
        clear_scheduler=FakeScheduler(),
        notifier=FakeNotifier(),
        picker=picker,
    )


@pytest.fixture
def populated(store: FakeStore) -> FakeStore:
    store.write("Calendar", "cal-secret\nuser: carol\n")
    store.write("web/Mail", "hunter2\nuser: alice\ntan: |\n  111\n  222\n")
    store.write("broken", "x\nuser: [oops\n")
    return store


def test_parser_defaults_to_pick() -> None:
    args = build_parser().parse_args([])

    assert args.command is None
    assert args.config is None


def test_parser_accepts_global_flags_and_list_title(tmp_path: Path) -> None:
    args = build_parser().parse_args(["-c", str(tmp_path / "c.yaml"), "-v", "list", "--title", "Mail"])

    assert args.config == tmp_path / "c.yaml"
    assert args.verbose is True
    assert args.title == "Mail"


def test_missing_config_is_scaffolded(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_path = tmp_path / "passtype" / "config.yaml"

    assert main(["-c", str(config_path)]) == EXIT_CONFIG
    assert config_path.is_file()
    assert "Edit it" in capsys.readouterr().err


def test_invalid_config_exits_with_config_code(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("PASSTYPE_GPG_KEY", raising=False)
    monkeypatch.setenv("PASSWORD_STORE_DIR", str(tmp_path))
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert main(["-c", str(config_path), "sync"]) == EXIT_CONFIG
    assert "cache.recipient" in capsys.readouterr().err


def test_main_sync_reports_changes(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, populated: FakeStore, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PASSWORD_STORE_DIR", str(populated.root))
    monkeypatch.setenv("PASSTYPE_GPG_KEY", "ABCDEF0123456789")
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setattr(cli_main, "build_runtime", lambda config: _runtime(populated, FakePicker()))
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    assert main(["-c", str(config_path), "sync"]) == EXIT_OK
    assert "3 reloaded, 1 with errors" in capsys.readouterr().out


def test_no_selection_exits_cleanly(config: PasstypeConfig, populated: FakeStore) -> None:
    picker = FakePicker(selection=None)
    runtime = _runtime(populated, picker)

    assert run_pick(config, runtime) == EXIT_OK
    assert picker.shown == ["Mail", "Calendar", "broken"]
    assert picker.urgent == [2]
    assert picker.bindings == ["Alt+1", "Alt+2", "Alt+3", "Alt+c", "Alt+t", "Alt+o"]


def test_selecting_error_entry_notifies_and_fails(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=2)))

    assert run_pick(config, runtime) == EXIT_FAILURE
    severity, message = runtime.notifier.messages[0]
    assert severity == "critical"
    assert message.startswith("broken: Invalid metadata")
    assert runtime.automation.calls == []


def test_accept_key_autotypes_primary_slot(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=0)))

    assert run_pick(config, runtime) == EXIT_OK
    assert runtime.automation.calls == [
        ("focus", "42"),
        ("type", "alice"),
        ("keys", "Tab"),
        ("type", "hunter2"),
    ]


def test_custom_binding_runs_alternate_slot(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=0, binding=0)))

    assert run_pick(config, runtime) == EXIT_OK
    assert runtime.automation.calls == [("focus", "42"), ("type", "hunter2")]


def test_copy_binding_uses_clipboard(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=1, binding=3)))

    assert run_pick(config, runtime) == EXIT_OK
    assert runtime.clipboard.sets == ["cal-secret"]
    assert runtime.clear_scheduler.scheduled == [45.0]


def test_tan_binding_types_selected_code(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=0, binding=4), answers=["2"]))

    assert run_pick(config, runtime) == EXIT_OK
    assert runtime.automation.calls == [("focus", "42"), ("type", "222")]


def test_cancelled_tan_exits_cleanly(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=0, binding=4), answers=[None]))

    assert run_pick(config, runtime) == EXIT_OK
    assert runtime.automation.calls == []
    assert runtime.notifier.messages == []


def test_action_error_is_notified(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker(selection=Selection(index=1, binding=5)))

    assert run_pick(config, runtime) == EXIT_FAILURE
    assert "no OTP secret" in runtime.notifier.messages[0][1]


def test_unknown_window_still_allows_copy(config: PasstypeConfig, populated: FakeStore) -> None:
    class NoWindow(FakeAutomation):
        def active_window(self) -> Window:
            raise AutomationError("xdotool exited with status 1")

    picker = FakePicker(selection=Selection(index=0, binding=3))
    runtime = _runtime(populated, picker, NoWindow())

    assert run_pick(config, runtime) == EXIT_OK
    assert picker.shown == ["Calendar", "broken", "Mail"]
    assert runtime.clipboard.sets == ["cal-secret"]


def test_run_sync_is_idempotent(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker())

    first, first_written = run_sync(config, runtime)
    second, second_written = run_sync(config, runtime)

    assert len(first.reloaded) == 3
    assert first_written is True
    assert second.reloaded == []
    assert second_written is False


def test_list_entries_ranks_by_title(config: PasstypeConfig, populated: FakeStore) -> None:
    runtime = _runtime(populated, FakePicker())

    names = [entry.name for entry in list_entries(config, runtime, "Calendar - Week")]

    assert names == ["Calendar", "broken", "web/Mail"]


def test_keybinding_help(config: PasstypeConfig) -> None:
    assert keybinding_help(config.keybindings[2:4]) == "Alt+3: autotype 3 | Alt+c: copy password"
