"""Test helper utilities."""

from .scripts import FAKE_CARGO, ScriptFixture, build_count, write_fake_cargo, write_script

__all__ = [
    "FAKE_CARGO",
    "ScriptFixture",
    "build_count",
    "write_fake_cargo",
    "write_script",
]
