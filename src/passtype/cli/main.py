"""CLI entrypoint for Passtype."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from passtype import __version__
from passtype.cli.handlers import clear_clipboard_after, list_entries, run_pick, run_sync
from passtype.cli.runtime import build_runtime
from passtype.config import default_config_path, load_config, scaffold_config
from passtype.constants.branding import CLI_DESCRIPTION
from passtype.constants.cli import EXIT_CONFIG, EXIT_FAILURE, EXIT_OK, NOTIFY_ERROR_DURATION_MS
from passtype.exceptions import ConfigError, PasstypeError
from passtype.integrations.clipboard import CLEAR_COMMAND_MARKER, PyperclipClipboard


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(prog="passtype", description=CLI_DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Config file (default: XDG config dir)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug diagnostics to stderr")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("pick", help="Show the picker and perform the chosen action (default)")
    subparsers.add_parser("sync", help="Refresh the metadata cache and report what changed")

    listing = subparsers.add_parser("list", help="Print entries in picker order")
    listing.add_argument("-t", "--title", default="", help="Window title to rank entries against")

    clear = subparsers.add_parser(CLEAR_COMMAND_MARKER, help=argparse.SUPPRESS)
    clear.add_argument("--after", type=float, required=True, help="Seconds to wait before clearing")
    clear.add_argument("--pid-file", type=Path, default=None, help="Pid file to release after clearing")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "pick"

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if command == CLEAR_COMMAND_MARKER:
        clear_clipboard_after(args.after, PyperclipClipboard(), args.pid_file)
        return EXIT_OK

    config_path = args.config or default_config_path()
    if not config_path.exists():
        scaffold_config(config_path)
        print(
            f"Created a default configuration at {config_path}. "
            "Edit it (at least cache.recipient) and run passtype again.",
            file=sys.stderr,
        )
        return EXIT_CONFIG

    try:
        config = load_config(config_path)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    if not args.verbose:
        logging.getLogger().setLevel(config.log_level)

    runtime = build_runtime(config)
    try:
        if command == "sync":
            report, written = run_sync(config, runtime)
            print(
                f"{len(report.reloaded)} reloaded, {len(report.failed)} with errors, "
                f"{len(report.skipped)} skipped, {len(report.orphans)} orphaned; "
                f"cache {'written' if written else 'unchanged'}"
            )
            return EXIT_OK
        if command == "list":
            for entry in list_entries(config, runtime, args.title):
                print(f"{entry.name}\t{entry.error}" if entry.failed else entry.name)
            return EXIT_OK
        return run_pick(config, runtime)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG
    except PasstypeError as exc:
        print(f"passtype error: {exc}", file=sys.stderr)
        runtime.notifier.notify(str(exc), "critical", NOTIFY_ERROR_DURATION_MS)
        return EXIT_FAILURE


if __name__ == "__main__":
    raise SystemExit(main())
