"""Application cache directory handling."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from denim.errors import IOFailure

logger = logging.getLogger(__name__)


def ensure_cache_root(root: Path) -> None:
    """Create the cache root on demand."""
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure(f"{exc} while creating cache directory {str(root)!r}") from exc


def remove_tree(path: Path) -> None:
    """Delete a cache directory tree; a missing tree is an error."""
    logger.info("Removing content of %s", path)
    if not path.is_dir():
        raise IOFailure(f"Cache directory {str(path)!r} does not exist")
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise IOFailure(f"{exc} while removing {str(path)!r}") from exc
