"""Cached project states and build modes."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class CargoMode(str, Enum):
    """How cargo build output reaches the terminal."""

    SILENT = "SILENT"
    VERBOSE = "VERBOSE"


class CargoState(str, Enum):
    """Staleness of a cached project relative to its script."""

    SCRIPT_DIFFERS = "SCRIPT_DIFFERS"
    NO_BINARY = "NO_BINARY"
    BINARY_OUTDATED = "BINARY_OUTDATED"
    UP_TO_DATE = "UP_TO_DATE"

    @property
    def needs_update(self) -> bool:
        return self is CargoState.SCRIPT_DIFFERS

    @property
    def needs_build(self) -> bool:
        return self is not CargoState.UP_TO_DATE


def classify(
    *,
    script_digest: str,
    main_digest: Optional[str],
    binary_mtime: Optional[float],
    script_mtime: float,
) -> CargoState:
    """Derive the project state.

    Args:
        script_digest: Digest of the script content
        main_digest: Digest of the materialized main.rs (None if missing)
        binary_mtime: Modification time of the stable binary (None if missing)
        script_mtime: Modification time of the script

    Returns:
        CargoState; equal modification times count as up to date
    """
    if main_digest is None or script_digest != main_digest:
        return CargoState.SCRIPT_DIFFERS
    if binary_mtime is None:
        return CargoState.NO_BINARY
    # binary older than the script means a failed build of the edited script
    if binary_mtime < script_mtime:
        return CargoState.BINARY_OUTDATED
    return CargoState.UP_TO_DATE
