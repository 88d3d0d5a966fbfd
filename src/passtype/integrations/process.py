"""Subprocess helper shared by the command-line collaborators."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence

from passtype.exceptions.base import PasstypeError

logger = logging.getLogger(__name__)


def run_command(
    command: Sequence[str],
    *,
    error: type[PasstypeError],
    input_bytes: bytes | None = None,
) -> bytes:
    """Run ``command`` and return its stdout, raising ``error`` on failure.

    Calls block until the program exits; no timeout is applied.
    """
    logger.debug("Running %s", command[0])
    try:
        result = subprocess.run(
            list(command),
            input=input_bytes,
            capture_output=True,
            check=False,
        )
    except OSError as exc:
        raise error(f"Failed to run {command[0]}: {exc}") from exc

    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace").strip()
        raise error(f"{command[0]} exited with status {result.returncode}: {stderr}")
    return result.stdout
