"""Child process helpers for cargo invocations and process replacement."""

from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import NoReturn, Sequence

from denim.errors import ExecutionFailed, ExternalToolFailure

logger = logging.getLogger(__name__)

# shell convention for "command not found"
_NOT_FOUND_STATUS = 127


def _subcommand(command: Sequence[str]) -> str:
    return command[1] if len(command) > 1 else command[0]


def run_silent(command: Sequence[str], cwd: Path | None = None) -> str:
    """Run a command with its output captured; surface it only on failure.

    Returns:
        Captured stdout
    """
    logger.debug("Running %s (silent) in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExternalToolFailure(_subcommand(command), _NOT_FOUND_STATUS, str(exc)) from exc
    if result.returncode != 0:
        output = "\n".join(part for part in (result.stdout, result.stderr) if part)
        raise ExternalToolFailure(_subcommand(command), result.returncode, output)
    return result.stdout


def run_streamed(command: Sequence[str], cwd: Path | None = None, capture_stdout: bool = False) -> str:
    """Run a command with stderr (and optionally stdout) going to the terminal.

    Args:
        command: Command line
        cwd: Working directory
        capture_stdout: If True, stdout is collected instead of shown

    Returns:
        Captured stdout, or "" when stdout was streamed
    """
    logger.debug("Running %s (streamed) in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            list(command),
            cwd=cwd,
            stdout=subprocess.PIPE if capture_stdout else None,
            text=True,
            check=False,
        )
    except OSError as exc:
        raise ExternalToolFailure(_subcommand(command), _NOT_FOUND_STATUS, str(exc)) from exc
    if result.returncode != 0:
        raise ExternalToolFailure(_subcommand(command), result.returncode)
    return result.stdout or ""


def exec_with_name(path: Path, name: str, arguments: Sequence[str]) -> NoReturn:
    """Replace the current process image with ``path``.

    ``name`` becomes argv[0]; environment, standard streams and working
    directory are inherited. Only returns by raising ExecutionFailed.
    """
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        os.execv(path, [name, *arguments])
    except OSError as exc:
        raise ExecutionFailed(f"{exc} while executing compiled binary {str(path)!r}") from exc
