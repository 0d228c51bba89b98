"""Cargo project materialization, staleness checks and builds."""

from __future__ import annotations

import json
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Optional

from denim.core.identity import hex_digest, hex_digest_file
from denim.core.manifest import extract_manifest
from denim.core.state import CargoMode, CargoState, classify
from denim.errors import ArtifactPathNotResolved, while_doing
from denim.infrastructure.cache import ensure_cache_root
from denim.infrastructure.lock import project_lock
from denim.infrastructure.process import run_silent, run_streamed
from denim.infrastructure.relocate import replace_file

if TYPE_CHECKING:
    from denim.core.project import Project

logger = logging.getLogger(__name__)


def find_executable(messages: Iterable[str]) -> Optional[Path]:
    """Find the produced executable in cargo's JSON message stream.

    The stream is scanned from the end. A ``compiler-artifact`` message
    naming an executable is preferred; any other message carrying an
    ``executable`` string is the fallback. Non-JSON lines are ignored.
    """
    fallback: Optional[Path] = None
    for line in reversed(list(messages)):
        line = line.strip()
        if not line.startswith("{"):
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError:
            continue
        if not isinstance(message, dict):
            continue
        executable = message.get("executable")
        if not isinstance(executable, str) or not executable:
            continue
        if message.get("reason") == "compiler-artifact":
            return Path(executable)
        if fallback is None:
            fallback = Path(executable)
    return fallback


class Cargo:
    """Cargo view of a project: init, update, build, check and test."""

    def __init__(self, project: Project) -> None:
        self.project = project
        self.settings = project.settings

    @property
    def main_path(self) -> Path:
        return self.project.home / "src" / "main.rs"

    @property
    def manifest_path(self) -> Path:
        return self.project.home / "Cargo.toml"

    def _command(self, *args: str) -> list[str]:
        return [self.settings.cargo, *args]

    @contextmanager
    def _locked(self) -> Iterator[None]:
        ensure_cache_root(self.settings.cache_root)
        with project_lock(self.project.home, wait=self.settings.lock_policy == "wait"):
            yield

    def _prepare(self) -> None:
        # a script without manifest must fail before cargo is ever invoked
        self.manifest_content()
        self.ensure_initialized()

    def script_content(self) -> bytes:
        with while_doing("reading script contents"):
            return self.project.script.read_bytes()

    def manifest_content(self, content: Optional[bytes] = None) -> str:
        if content is None:
            content = self.script_content()
        return extract_manifest(content.decode("utf-8", errors="replace"))

    def ensure_initialized(self) -> None:
        """Create the cargo skeleton once; an existing ``src`` is trusted."""
        home = self.project.home
        if (home / "src").exists():
            return
        logger.info("Initializing cargo project in %s", home)
        run_silent(
            self._command(
                "init",
                "--quiet",
                "--vcs",
                "none",
                "--name",
                self.project.name,
                "--bin",
                "--edition",
                self.settings.edition,
                str(home),
            ),
            cwd=home,
        )

    def state(self) -> CargoState:
        """Check state of the cached project against the script."""
        with while_doing("checking project state"):
            binary_path = self.project.binary_path
            try:
                binary_mtime = binary_path.stat().st_mtime
            except FileNotFoundError:
                binary_mtime = None
            return classify(
                script_digest=hex_digest(self.script_content()),
                main_digest=hex_digest_file(self.main_path),
                binary_mtime=binary_mtime,
                script_mtime=self.project.script.stat().st_mtime,
            )

    def update(self) -> None:
        """Write the script and its manifest into the project."""
        logger.info("Updating project")
        content = self.script_content()
        manifest = self.manifest_content(content)
        with while_doing("writing new main.rs file"):
            self.main_path.parent.mkdir(parents=True, exist_ok=True)
            self.main_path.write_bytes(content)
        with while_doing("writing new Cargo.toml file"):
            self.manifest_path.write_text(manifest + "\n", encoding="utf-8")

    def build(self, mode: CargoMode) -> None:
        """Build the release binary and move it to its stable path."""
        logger.info("Building release target")
        home = self.project.home
        if mode is CargoMode.SILENT:
            output = run_silent(
                self._command("build", "--release", "--message-format=json-render-diagnostics"),
                cwd=home,
            )
        else:
            output = run_streamed(
                self._command(
                    "build",
                    "--color",
                    "always",
                    "--release",
                    "--message-format=json-render-diagnostics",
                ),
                cwd=home,
                capture_stdout=True,
            )

        executable = find_executable(output.splitlines())
        if executable is None:
            raise ArtifactPathNotResolved("Could not find compiled executable path in cargo build output")
        if not executable.is_absolute():
            executable = home / executable
        logger.debug("Compiled executable: %s", executable)

        with while_doing("moving compiled target to final location"):
            replace_file(executable, self.project.binary_path)
            # cargo may hand back an untouched artifact from an earlier link
            os.utime(self.project.binary_path)

    def ensure_updated(self) -> None:
        """Update the project if the script changed."""
        with self._locked():
            if self.state().needs_update:
                self._prepare()
                self.update()

    def ensure_built(self, mode: CargoMode) -> None:
        """Update and build the project as its current state requires.

        The state is derived under the lock on every call, so a build
        finished by a concurrent invocation is not repeated.
        """
        with self._locked():
            state = self.state()
            logger.debug("State: %s", state.value)
            if state.needs_update:
                self._prepare()
                self.update()
            if state.needs_build:
                self.build(mode)

    def check(self) -> None:
        """Run ``cargo check`` on the updated project."""
        with self._locked():
            self._prepare()
            self.update()
            run_streamed(self._command("check", "--color", "always"), cwd=self.project.home)

    def test(self) -> None:
        """Run ``cargo test`` on the updated project."""
        with self._locked():
            self._prepare()
            self.update()
            run_streamed(self._command("test", "--color", "always"), cwd=self.project.home)
