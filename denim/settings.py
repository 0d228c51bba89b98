"""Application settings and environment overrides."""

from __future__ import annotations

from dataclasses import dataclass
import json
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import dotenv_values

from .errors import ValidationError


_DEFAULT_CARGO = "cargo"
_DEFAULT_EDITION = "2021"
_DEFAULT_LOCK_POLICY = "wait"
_ALLOWED_EDITIONS = {"2015", "2018", "2021", "2024"}
_ALLOWED_LOCK_POLICIES = {"wait", "fail"}


@dataclass(frozen=True)
class Settings:
    cargo: str = _DEFAULT_CARGO
    cache_dir: Optional[Path] = None
    edition: str = _DEFAULT_EDITION
    lock_policy: str = _DEFAULT_LOCK_POLICY

    @property
    def cache_root(self) -> Path:
        """Directory holding every project home."""
        if self.cache_dir is not None:
            return self.cache_dir
        return default_cache_root()


def default_config_path() -> Path:
    return Path.home() / ".config" / "denim" / "settings.json"


def default_dotenv_path() -> Path:
    return Path.home() / ".config" / "denim" / "denim.env"


def default_cache_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    environ = os.environ if environ is None else environ
    xdg = environ.get("XDG_CACHE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return base / "denim"


def load_environment(dotenv_path: Optional[Path]) -> dict[str, str]:
    """Return dotenv values overlaid with the process environment.

    The dotenv file is only read, never exported: compiled scripts must
    inherit the caller's environment untouched.
    """
    values: dict[str, str] = {}
    if dotenv_path and dotenv_path.exists():
        values.update({k: v for k, v in dotenv_values(dotenv_path).items() if v is not None})
    values.update(os.environ)
    return values


def load_settings(
    path: Optional[Path],
    *,
    dotenv_path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Load settings from JSON config file, with environment variable overrides.

    Priority order:
    1. Environment variables (process environment, then dotenv file)
    2. JSON config file
    3. Defaults

    Args:
        path: Path to JSON config file, or None to use defaults only
        dotenv_path: Optional dotenv file supplying DENIM_* variables
        environ: Environment mapping (default: process env + dotenv file)

    Returns:
        Settings object with resolved values
    """
    json_settings = {}
    if path and path.exists():
        try:
            json_settings = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Invalid settings file {path}: {exc}") from exc

    env = load_environment(dotenv_path) if environ is None else environ

    cargo = env.get("DENIM_CARGO") or json_settings.get("cargo", _DEFAULT_CARGO)

    cache_dir_value = env.get("DENIM_CACHE_DIR") or json_settings.get("cache_dir")
    cache_dir = Path(cache_dir_value).expanduser() if cache_dir_value else None
    if cache_dir is None:
        cache_dir = default_cache_root(env)

    edition = env.get("DENIM_EDITION") or str(json_settings.get("edition", _DEFAULT_EDITION))
    if edition not in _ALLOWED_EDITIONS:
        raise ValidationError(f"Unsupported Rust edition: {edition}")

    lock_policy = env.get("DENIM_LOCK_POLICY") or json_settings.get("lock_policy", _DEFAULT_LOCK_POLICY)
    if lock_policy not in _ALLOWED_LOCK_POLICIES:
        raise ValidationError(f"Unsupported lock policy: {lock_policy}")

    return Settings(
        cargo=cargo,
        cache_dir=cache_dir,
        edition=edition,
        lock_policy=lock_policy,
    )
