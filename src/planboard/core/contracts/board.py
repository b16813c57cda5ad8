"""Board contracts: the immutable snapshot of all projects and their tasks.

This module defines the Pydantic v2 models that make up one *snapshot* of the
domain state:

- `ChecklistItem`: a single sub-step inside a task.
- `Task`         : a card on a project board.
- `Project`      : a named board owning an ordered tuple of tasks.
- `BoardSnapshot`: the root value recorded by the temporal log.

Immutability
------------
All models are frozen and collections are tuples, so a snapshot handed to a
history subscriber can never be mutated behind the log's back. New snapshots
are produced with ``model_copy(update=...)``.

Equality
--------
Snapshots compare by value (Pydantic model equality is field-wise and deep).
Two snapshots built independently from the same data are equal, which is what
the temporal log relies on to coalesce redundant commits.

Serialization
-------------
JSON documents use camelCase keys (``createdAt``, ``dueDate``...) to match the
persisted board format; both camelCase and snake_case are accepted on input.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Status = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high"]

STATUSES: tuple[Status, ...] = ("todo", "in-progress", "done")


class _Frozen(BaseModel):
    """Shared configuration for every snapshot model."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class ChecklistItem(_Frozen):
    """A single checklist entry inside a task."""

    id: str
    text: str
    done: bool = False


class Task(_Frozen):
    """A task card. ``id`` is stable across edits and reorders."""

    id: str
    title: str
    description: str = ""
    status: Status = "todo"
    priority: TaskPriority = "medium"
    starred: bool = False
    tags: tuple[str, ...] = ()
    checklist: tuple[ChecklistItem, ...] = ()
    url: str | None = None
    url2: str | None = None
    start_date: str | None = Field(default=None, description="ISO date (YYYY-MM-DD)")
    due_date: str | None = Field(default=None, description="ISO date (YYYY-MM-DD)")
    created_at: int = Field(default=0, description="Creation time in epoch milliseconds")


class Project(_Frozen):
    """A project board with an ordered tuple of tasks."""

    id: str
    name: str
    theme: str = "default"
    tasks: tuple[Task, ...] = ()
    created_at: int = 0
    start_date: str | None = None
    deadline: str | None = None

    def task(self, task_id: str) -> Task | None:
        """Return the task with ``task_id``, or ``None``."""
        return next((t for t in self.tasks if t.id == task_id), None)


class BoardSnapshot(_Frozen):
    """The whole tracked domain state at one instant."""

    projects: tuple[Project, ...] = ()

    def project(self, project_id: str) -> Project | None:
        """Return the project with ``project_id``, or ``None``."""
        return next((p for p in self.projects if p.id == project_id), None)

    def to_json_dict(self) -> dict[str, object]:
        """Return a JSON-safe dict using the persisted camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def snapshots_equal(a: BoardSnapshot, b: BoardSnapshot) -> bool:
    """Return True when both snapshots serialize to the same JSON document."""
    return a.model_dump(mode="json") == b.model_dump(mode="json")


__all__ = [
    "BoardSnapshot",
    "snapshots_equal",
    "ChecklistItem",
    "Project",
    "STATUSES",
    "Status",
    "Task",
    "TaskPriority",
]
