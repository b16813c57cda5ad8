"""State engine: snapshot store, temporal log and board persistence."""

from __future__ import annotations

from .storage import BoardStorage
from .store import SnapshotShapeError, SnapshotStore
from .temporal import HistoryAction, HistoryChange, TemporalLog

__all__ = [
    "BoardStorage",
    "HistoryAction",
    "HistoryChange",
    "SnapshotShapeError",
    "SnapshotStore",
    "TemporalLog",
]
