"""Cached project bound to a single script file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, Sequence

from denim.core.identity import parent_digest, project_dir_name, project_name, resolve_script
from denim.infrastructure.cache import remove_tree
from denim.infrastructure.process import exec_with_name
from denim.settings import Settings

if TYPE_CHECKING:
    from denim.core.cargo import Cargo

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Project:
    """A script and its persistent build directory."""

    name: str
    home: Path
    script: Path
    settings: Settings

    @classmethod
    def resolve(cls, script: Path, settings: Settings) -> Project:
        """Resolve a script path to its project.

        The home directory is derived from the script's location and stem
        only; it is not created here.
        """
        script = resolve_script(script)
        logger.debug("Script path: %s", script)
        logger.debug("Parent path: %s (digest: %s)", script.parent, parent_digest(script))

        name = project_name(script)
        logger.debug("Project name: %s", name)

        home = settings.cache_root / project_dir_name(script)
        logger.debug("Project home: %s", home)
        return cls(name=name, home=home, script=script, settings=settings)

    def cargo(self) -> Cargo:
        """Return the cargo driver for this project."""
        from denim.core.cargo import Cargo

        return Cargo(self)

    @property
    def binary_path(self) -> Path:
        return self.home / self.name

    def has_binary(self) -> bool:
        """True if there is a binary to execute."""
        return self.binary_path.is_file()

    def execute(self, arguments: Sequence[str]) -> NoReturn:
        """Replace this process with the compiled binary."""
        exec_with_name(self.binary_path, self.name, arguments)

    def clean(self) -> None:
        remove_tree(self.home)

    @staticmethod
    def clean_all(settings: Settings) -> None:
        remove_tree(settings.cache_root)
