"""Command-line interface for denim."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__

SCRIPT_SUFFIX = ".rs"

_FAILURE_ACTIONS = {
    "new": "write script template",
    "check": "check script",
    "build": "build script binary",
    "exec": "build and execute script binary",
    "test": "test script",
    "clean": "clean script repository",
    "clean-all": "clean script repositories",
}


def _configure_logging(verbosity: int, quiet: bool = False) -> None:
    if quiet:
        level = logging.ERROR
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _load_settings(config_path: Optional[Path]):
    from .settings import default_config_path, default_dotenv_path, load_settings

    path = config_path.expanduser() if config_path else default_config_path()
    return load_settings(path, dotenv_path=default_dotenv_path())


def _fail(action: str, exc: BaseException) -> int:
    from .errors import exit_code_for_exception

    print(f"Failed to {action}: {exc}", file=sys.stderr)
    return exit_code_for_exception(exc)


def run_script_fast(argv: Sequence[str]) -> int:
    """Shebang path: ``denim script.rs [ARGS...]`` with no option parsing."""
    _configure_logging(0)
    try:
        settings = _load_settings(None)
        from .commands.build import run_script

        run_script(Path(argv[0]), list(argv[1:]), settings=settings)
    except Exception as exc:
        return _fail("run script", exc)
    return 1  # pragma: no cover - run_script replaces the process


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="denim",
        description="Single file Rust scripts",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"denim {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log errors",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings path (default: ~/.config/denim/settings.json)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    new_parser = subparsers.add_parser("new", help="Create new script from template")
    new_parser.add_argument("script", type=Path, help="Path to script file")

    check_parser = subparsers.add_parser("check", help="Run `cargo check`")
    check_parser.add_argument("script", type=Path, help="Path to script file")

    build_parser_ = subparsers.add_parser("build", help="Build and stage for fast execution")
    build_parser_.add_argument("script", type=Path, help="Path to script file")

    exec_parser = subparsers.add_parser("exec", help="Build, stage for fast execution and execute")
    exec_parser.add_argument("script", type=Path, help="Path to script file")
    exec_parser.add_argument(
        "arguments",
        nargs=argparse.REMAINDER,
        help="Arguments for the script",
    )

    test_parser = subparsers.add_parser("test", help="Build and run tests")
    test_parser.add_argument("script", type=Path, help="Path to script file")

    clean_parser = subparsers.add_parser(
        "clean",
        help="Remove all cached build files related to script file",
    )
    clean_parser.add_argument("script", type=Path, help="Path to script file")

    subparsers.add_parser("clean-all", help="Remove all cached build files")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)

    # Shebang invocation: skip argument parsing so flags reach the script
    if argv and not argv[0].startswith("-") and argv[0].endswith(SCRIPT_SUFFIX):
        return run_script_fast(argv)

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    _configure_logging(args.verbose, args.quiet)
    action = _FAILURE_ACTIONS.get(args.command, args.command)

    try:
        settings = _load_settings(args.config)
        # Import here to avoid slow startup
        if args.command == "new":
            from .commands.new import run_new
            return run_new(args, settings=settings)
        elif args.command == "check":
            from .commands.verify import run_check
            return run_check(args, settings=settings)
        elif args.command == "build":
            from .commands.build import run_build
            return run_build(args, settings=settings)
        elif args.command == "exec":
            from .commands.build import run_exec
            run_exec(args, settings=settings)
        elif args.command == "test":
            from .commands.verify import run_test
            return run_test(args, settings=settings)
        elif args.command == "clean":
            from .commands.clean import run_clean
            return run_clean(args, settings=settings)
        elif args.command == "clean-all":
            from .commands.clean import run_clean_all
            return run_clean_all(args, settings=settings)
        else:
            parser.print_help()
            return 1
    except Exception as exc:
        return _fail(action, exc)
    return 1  # pragma: no cover - exec replaces the process


if __name__ == "__main__":
    sys.exit(main())
