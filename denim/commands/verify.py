"""Check and test commands - run cargo check/test on the updated project."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from denim.core.project import Project


def run_check(args: Namespace, *, settings) -> int:
    project = Project.resolve(Path(args.script), settings)
    project.cargo().check()
    return 0


def run_test(args: Namespace, *, settings) -> int:
    project = Project.resolve(Path(args.script), settings)
    project.cargo().test()
    return 0
