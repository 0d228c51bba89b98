"""Error taxonomy and exit code mapping for CLI."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator


class DenimError(Exception):
    """Base error for deterministic CLI exit codes."""

    exit_code: int = 1


class ValidationError(DenimError):
    """Invalid user input, command usage or configuration."""

    exit_code = 2


class RuntimeFailure(DenimError):
    """Unexpected runtime failure."""

    exit_code = 1


class IOFailure(DenimError):
    """Filesystem or I/O failure."""

    exit_code = 3


class PathResolutionError(ValidationError):
    """Script path does not resolve to a usable file."""


class ScriptNotFound(PathResolutionError):
    """Script path does not exist."""


class ScriptNotAFile(PathResolutionError):
    """Script path exists but is not a regular file."""


class PathEncodingError(PathResolutionError):
    """Script path is not valid UTF-8."""


class ManifestNotFound(ValidationError):
    """Script carries no (or an empty) embedded Cargo.toml block."""


class ExternalToolFailure(DenimError):
    """Cargo exited with a non-zero status."""

    exit_code = 4

    def __init__(self, subcommand: str, returncode: int, output: str = "") -> None:
        self.subcommand = subcommand
        self.returncode = returncode
        self.output = output
        message = f"cargo {subcommand} exited with status {returncode}"
        if output:
            message = f"{message}\n{output.rstrip()}"
        super().__init__(message)


class ArtifactPathNotResolved(DenimError):
    """Build succeeded but no executable was reported by cargo."""

    exit_code = 4


class ExecutionFailed(DenimError):
    """Compiled binary could not replace the current process."""

    exit_code = 5


class ProjectLocked(DenimError):
    """Another invocation holds the project lock."""

    exit_code = 6


def exit_code_for_exception(exc: BaseException) -> int:
    """Resolve a deterministic exit code for an exception."""
    if isinstance(exc, DenimError):
        return exc.exit_code
    if isinstance(exc, OSError):
        return IOFailure.exit_code
    return RuntimeFailure.exit_code


@contextmanager
def while_doing(description: str) -> Iterator[None]:
    """Re-raise filesystem errors as IOFailure naming the operation in progress."""
    try:
        yield
    except OSError as exc:
        raise IOFailure(f"{exc} while {description}") from exc
