"""Build and exec commands - stage a script binary and optionally run it."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import NoReturn

from denim.core.project import Project
from denim.core.state import CargoMode


def run_build(args: Namespace, *, settings) -> int:
    """Build and stage the script binary for fast execution."""
    project = Project.resolve(Path(args.script), settings)
    project.cargo().ensure_built(CargoMode.VERBOSE)
    return 0


def run_exec(args: Namespace, *, settings) -> NoReturn:
    """Build, stage and execute the script binary.

    Only returns by raising: on success the process is replaced.
    """
    project = Project.resolve(Path(args.script), settings)
    project.cargo().ensure_built(CargoMode.VERBOSE)
    project.execute(args.arguments)


def run_script(script: Path, arguments: list[str], *, settings) -> NoReturn:
    """Shebang entry: build quietly when needed, then execute."""
    project = Project.resolve(script, settings)
    project.cargo().ensure_built(CargoMode.SILENT)
    project.execute(arguments)
