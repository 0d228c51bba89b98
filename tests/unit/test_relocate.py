"""Unit tests for artifact placement."""

from __future__ import annotations

import errno
import os
import stat
from pathlib import Path

import pytest

from denim.infrastructure import relocate
from denim.infrastructure.relocate import replace_file


def _make_executable(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(0o755)
    return path


def test_replace_moves_and_overwrites(tmp_path: Path) -> None:
    src = _make_executable(tmp_path / "target" / "release" / "tool-bin", "new")
    dst = _make_executable(tmp_path / "tool", "old")

    replace_file(src, dst)

    assert not src.exists()
    assert dst.read_text() == "new"


def test_cross_device_fallback_copies_then_removes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    src = _make_executable(tmp_path / "elsewhere" / "tool-bin", "built")
    dst = _make_executable(tmp_path / "home" / "tool", "stale")
    real_replace = os.replace
    calls: list[tuple[str, str]] = []

    def fake_replace(a, b):
        calls.append((str(a), str(b)))
        if Path(a) == src:
            raise OSError(errno.EXDEV, "Invalid cross-device link")
        return real_replace(a, b)

    monkeypatch.setattr(relocate.os, "replace", fake_replace)
    replace_file(src, dst)

    assert not src.exists()
    assert dst.read_text() == "built"
    assert dst.stat().st_mode & stat.S_IXUSR
    assert len(calls) == 2
    # temporary file lives next to the destination
    assert Path(calls[1][0]).parent == dst.parent
    assert [p.name for p in dst.parent.iterdir()] == ["tool"]


def test_other_errors_propagate(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        replace_file(tmp_path / "missing", tmp_path / "dst")
