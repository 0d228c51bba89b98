"""Unit tests for the error taxonomy and exit codes."""

from __future__ import annotations

import pytest

from denim.errors import (
    ArtifactPathNotResolved,
    ExecutionFailed,
    ExternalToolFailure,
    IOFailure,
    ManifestNotFound,
    ProjectLocked,
    RuntimeFailure,
    ScriptNotFound,
    ValidationError,
    exit_code_for_exception,
    while_doing,
)


@pytest.mark.parametrize(
    "exc, code",
    [
        (ValidationError("bad"), 2),
        (ScriptNotFound("missing"), 2),
        (ManifestNotFound("none"), 2),
        (IOFailure("disk"), 3),
        (OSError("raw"), 3),
        (ExternalToolFailure("build", 101), 4),
        (ArtifactPathNotResolved("none"), 4),
        (ExecutionFailed("exec"), 5),
        (ProjectLocked("busy"), 6),
        (RuntimeFailure("boom"), 1),
        (ValueError("other"), 1),
    ],
)
def test_exit_codes(exc: BaseException, code: int) -> None:
    assert exit_code_for_exception(exc) == code


def test_external_tool_failure_carries_details() -> None:
    exc = ExternalToolFailure("build", 101, "error[E0425]: cannot find value\n")
    assert exc.subcommand == "build"
    assert exc.returncode == 101
    assert str(exc) == "cargo build exited with status 101\nerror[E0425]: cannot find value"


def test_while_doing_wraps_os_errors() -> None:
    with pytest.raises(IOFailure, match="while writing new main.rs file") as excinfo:
        with while_doing("writing new main.rs file"):
            raise PermissionError("denied")
    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_while_doing_leaves_other_errors_alone() -> None:
    with pytest.raises(ManifestNotFound):
        with while_doing("updating project"):
            raise ManifestNotFound("none")
