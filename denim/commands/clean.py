"""Clean commands - remove cached build files."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from denim.core.project import Project


def run_clean(args: Namespace, *, settings) -> int:
    """Remove all cached build files related to one script."""
    Project.resolve(Path(args.script), settings).clean()
    return 0


def run_clean_all(args: Namespace, *, settings) -> int:
    """Remove the whole cache root."""
    Project.clean_all(settings)
    return 0
