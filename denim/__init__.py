"""Single file Rust scripts with cached release builds."""

__version__ = "0.1.0"
