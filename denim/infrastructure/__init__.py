"""Filesystem, process and locking primitives."""
