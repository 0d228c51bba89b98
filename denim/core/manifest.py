"""Embedded Cargo.toml extraction.

The manifest lives in a block comment at the top of the script::

    /* Cargo.toml
    [package]
    name = "hello"
    */

Extraction is a plain-text scan for trimmed lines equal to the sentinels.
It knows nothing about Rust syntax, so sentinel text inside an unrelated
string literal is picked up as well.
"""

from __future__ import annotations

from itertools import dropwhile, takewhile

from denim.errors import ManifestNotFound

MANIFEST_OPENING = "/* Cargo.toml"
MANIFEST_CLOSING = "*/"


def extract_manifest(
    text: str,
    opening: str = MANIFEST_OPENING,
    closing: str = MANIFEST_CLOSING,
) -> str:
    """Return the trimmed, newline-joined lines between the sentinels."""
    lines = (line.strip() for line in text.splitlines())
    after_opening = dropwhile(lambda line: line != opening, lines)
    if next(after_opening, None) is None:
        raise ManifestNotFound("Cargo.toml manifest not found in the script")

    manifest = "\n".join(takewhile(lambda line: line != closing, after_opening))
    if not manifest:
        raise ManifestNotFound("Cargo.toml manifest in the script is empty")
    return manifest
