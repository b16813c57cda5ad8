"""Snapshot contracts re-exported for convenience."""

from __future__ import annotations

from .board import (
    STATUSES,
    BoardSnapshot,
    ChecklistItem,
    Project,
    Status,
    Task,
    TaskPriority,
    snapshots_equal,
)

__all__ = [
    "BoardSnapshot",
    "ChecklistItem",
    "Project",
    "STATUSES",
    "Status",
    "Task",
    "TaskPriority",
    "snapshots_equal",
]
