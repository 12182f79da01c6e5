"""Adapters - I/O implementations of ports."""

from .file_snapshot import FileSnapshotStore, SnapshotError

__all__ = [
    "FileSnapshotStore",
    "SnapshotError",
]
