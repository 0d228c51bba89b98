"""Project identity, manifest, state and cargo orchestration."""

from .cargo import Cargo, find_executable
from .manifest import MANIFEST_CLOSING, MANIFEST_OPENING, extract_manifest
from .project import Project
from .state import CargoMode, CargoState, classify

__all__ = [
    "Cargo",
    "CargoMode",
    "CargoState",
    "MANIFEST_CLOSING",
    "MANIFEST_OPENING",
    "Project",
    "classify",
    "extract_manifest",
    "find_executable",
]
