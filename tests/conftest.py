"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from denim.core.project import Project
from denim.settings import Settings
from tests.helpers.scripts import ScriptFixture, write_fake_cargo, write_script


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    have_cargo = shutil.which("cargo") is not None
    for item in items:
        if "requires_cargo" in item.keywords and not have_cargo:
            item.add_marker(pytest.mark.skip(reason="cargo toolchain not available"))


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep user config and real caches out of every test."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg-cache"))
    for name in ("DENIM_CARGO", "DENIM_CACHE_DIR", "DENIM_EDITION", "DENIM_LOCK_POLICY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cache_root(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def fake_cargo(tmp_path: Path) -> Path:
    return write_fake_cargo(tmp_path / "bin")


@pytest.fixture
def settings(cache_root: Path, fake_cargo: Path) -> Settings:
    return Settings(cargo=str(fake_cargo), cache_dir=cache_root)


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scripts"
    path.mkdir()
    return path


@pytest.fixture
def script(scripts_dir: Path) -> ScriptFixture:
    return write_script(scripts_dir)


@pytest.fixture
def project(script: ScriptFixture, settings: Settings) -> Project:
    return Project.resolve(script.path, settings)
