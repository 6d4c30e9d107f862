"""Persistence layer for Storage Quest: the versioned JSON snapshot."""

from .snapshot_storage import SnapshotStorage

__all__ = ["SnapshotStorage"]
