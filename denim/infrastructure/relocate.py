"""Atomic placement of build artifacts."""

from __future__ import annotations

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def replace_file(src: Path, dst: Path) -> None:
    """Move ``src`` over ``dst`` so readers never see a partial file.

    A same-filesystem move is a single rename. Across filesystems the
    content is copied to a temporary file next to ``dst``, synced, renamed
    into place, and only then is ``src`` removed.
    """
    try:
        os.replace(src, dst)
        return
    except OSError as exc:
        if exc.errno != errno.EXDEV:
            raise

    logger.debug("Cross-filesystem move from %s to %s", src, dst)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{dst.name}.", dir=dst.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as out, src.open("rb") as source:
            shutil.copyfileobj(source, out)
            out.flush()
            os.fsync(out.fileno())
        shutil.copymode(src, tmp_path)
        os.replace(tmp_path, dst)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    src.unlink()
