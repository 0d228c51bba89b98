"""Script identity helpers for stable project cache locations."""

from __future__ import annotations

import hashlib
from pathlib import Path

from denim.errors import PathEncodingError, ScriptNotAFile, ScriptNotFound

DIGEST_LENGTH = 16
PROJECT_DIR_PREFIX = "project"


def hex_digest(data: str | bytes) -> str:
    """Return the sha256 hex digest of text or bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def hex_digest_file(path: Path) -> str | None:
    """Return the sha256 hex digest of a file, or None if it does not exist."""
    hasher = hashlib.sha256()
    try:
        with path.open("rb") as handle:
            for chunk in iter(lambda: handle.read(65536), b""):
                hasher.update(chunk)
    except FileNotFoundError:
        return None
    return hasher.hexdigest()


def resolve_script(path: Path) -> Path:
    """Canonicalize a script path, requiring an existing regular file."""
    try:
        script = Path(path).resolve(strict=True)
    except FileNotFoundError as exc:
        raise ScriptNotFound(f"Script {str(path)!r} does not exist") from exc
    except OSError as exc:
        raise ScriptNotFound(f"{exc} while accessing script file path {str(path)!r}") from exc

    if not script.is_file():
        raise ScriptNotAFile(f"Script {str(script)!r} is not a file")
    return script


def _utf8(value: str, what: str) -> str:
    # surrogateescape leaves undecodable bytes as lone surrogates
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathEncodingError(f"Script {what} is not UTF-8 compatible") from exc
    return value


def project_name(script: Path) -> str:
    """Project name is the script's file stem."""
    stem = script.stem
    if not stem:
        raise PathEncodingError(f"Script path {str(script)!r} has no file stem")
    return _utf8(stem, "stem")


def parent_digest(script: Path) -> str:
    """Truncated digest of the script's parent directory."""
    parent = _utf8(str(script.parent), "parent path")
    return hex_digest(parent)[:DIGEST_LENGTH]


def project_dir_name(script: Path) -> str:
    """Return the cache directory name for a canonical script path.

    Depends only on the script's location and stem, never on its content,
    so edits keep reusing the same project home.
    """
    return f"{PROJECT_DIR_PREFIX}-{parent_digest(script)}-{project_name(script)}"
