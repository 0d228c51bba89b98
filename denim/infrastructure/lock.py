"""Advisory per-project locking."""

from __future__ import annotations

import fcntl
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from denim.errors import IOFailure, ProjectLocked

logger = logging.getLogger(__name__)

LOCK_FILE_NAME = ".denim.lock"


@contextmanager
def project_lock(home: Path, wait: bool = True) -> Iterator[None]:
    """Hold an exclusive lock on a project home for the duration of the context.

    Uses a sidecar lock file inside the home so the project files themselves
    can be rewritten and renamed freely while the lock is held. Only
    invocations that update or build take the lock.

    Args:
        home: Project home directory (created if missing)
        wait: Block until the lock is free; otherwise raise ProjectLocked
    """
    lock_path = home / LOCK_FILE_NAME
    try:
        home.mkdir(parents=True, exist_ok=True)
        lock_handle = lock_path.open("a+", encoding="utf-8")
    except OSError as exc:
        raise IOFailure(f"{exc} while opening lock file {str(lock_path)!r}") from exc

    with lock_handle:
        flags = fcntl.LOCK_EX if wait else fcntl.LOCK_EX | fcntl.LOCK_NB
        try:
            fcntl.flock(lock_handle.fileno(), flags)
        except BlockingIOError as exc:
            raise ProjectLocked(f"Project {str(home)!r} is being built by another process") from exc
        logger.debug("Acquired lock %s", lock_path)
        try:
            yield
        finally:
            fcntl.flock(lock_handle.fileno(), fcntl.LOCK_UN)
