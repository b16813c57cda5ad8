"""
Board actions: the mutations that feed the temporal log.

Each action reads the log's current snapshot, builds a *new* frozen snapshot
with the change applied, and commits it. Nothing is mutated in place, so the
previous snapshot stays valid as an undo target. The one exception is
``amend_task``, which folds a follow-up edit into the latest entry through
``TemporalLog.amend``.

An action aimed at an unknown project or task id produces a snapshot equal to
the current one; the log coalesces it and no history entry appears. Actions
never undo, redo or clear; those belong to the user via shortcuts and the
history panel.

Field updates are re-validated through the Pydantic models, so a bad status
or priority fails loudly at the call site instead of poisoning history.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any, TypeVar

from pydantic import BaseModel

from planboard.core.contracts.board import BoardSnapshot, Project, Status, Task
from planboard.core.state.temporal import TemporalLog

M = TypeVar("M", bound=BaseModel)

_IMMUTABLE_FIELDS = frozenset({"id", "created_at"})


def _now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


def _patch(model: M, changes: dict[str, Any]) -> M:
    """Return a validated copy of ``model`` with ``changes`` applied."""
    frozen = _IMMUTABLE_FIELDS.intersection(changes)
    if frozen:
        raise ValueError(f"cannot change {sorted(frozen)}")
    return type(model).model_validate({**model.model_dump(), **changes})


def _reorder(items: Sequence[M], order: Sequence[str]) -> tuple[M, ...]:
    by_id = {getattr(item, "id"): item for item in items}
    if sorted(order) != sorted(by_id):
        raise ValueError("reorder must list every existing id exactly once")
    return tuple(by_id[i] for i in order)


class BoardActions:
    """
    Project/task mutations committed to a temporal log.

    Parameters
    ----------
    log:
        Where new snapshots are committed.
    clock:
        Source of the current time (creation stamps, default start dates).
    id_factory:
        Source of new project/task ids.
    """

    def __init__(
        self,
        log: TemporalLog[BoardSnapshot],
        *,
        clock: Callable[[], datetime] = _now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._log = log
        self._clock = clock
        self._new_id = id_factory

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._log.current

    def _stamp(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _commit(self, projects: Sequence[Project], *, amend: bool = False) -> bool:
        snapshot = self.snapshot.model_copy(update={"projects": tuple(projects)})
        return self._log.amend(snapshot) if amend else self._log.commit(snapshot)

    def _map_project(
        self, project_id: str, fn: Callable[[Project], Project], *, amend: bool = False
    ) -> bool:
        projects = [fn(p) if p.id == project_id else p for p in self.snapshot.projects]
        return self._commit(projects, amend=amend)

    def _map_task(
        self, project_id: str, task_id: str, fn: Callable[[Task], Task], *, amend: bool = False
    ) -> bool:
        def apply(project: Project) -> Project:
            tasks = tuple(fn(t) if t.id == task_id else t for t in project.tasks)
            return project.model_copy(update={"tasks": tasks})

        return self._map_project(project_id, apply, amend=amend)

    # ------------------------------- Projects -------------------------------

    def add_project(
        self,
        name: str,
        theme: str = "default",
        *,
        start_date: str | None = None,
        deadline: str | None = None,
    ) -> Project:
        """Append a new, empty project and return it."""
        project = Project(
            id=self._new_id(),
            name=name,
            theme=theme,
            start_date=start_date or self._clock().date().isoformat(),
            deadline=deadline,
            created_at=self._stamp(),
        )
        self._commit([*self.snapshot.projects, project])
        return project

    def update_project(self, project_id: str, **changes: Any) -> bool:
        return self._map_project(project_id, lambda p: _patch(p, changes))

    def delete_project(self, project_id: str) -> bool:
        return self._commit([p for p in self.snapshot.projects if p.id != project_id])

    def reorder_projects(self, order: Sequence[str]) -> bool:
        return self._commit(_reorder(self.snapshot.projects, order))

    # -------------------------------- Tasks ---------------------------------

    def add_task(self, project_id: str, title: str, **fields: Any) -> Task | None:
        """Append a task to ``project_id``; ``None`` if the project is unknown."""
        if self.snapshot.project(project_id) is None:
            return None
        task = Task.model_validate(
            {**fields, "id": self._new_id(), "title": title, "created_at": self._stamp()}
        )
        self._map_project(
            project_id, lambda p: p.model_copy(update={"tasks": (*p.tasks, task)})
        )
        return task

    def update_task(self, project_id: str, task_id: str, **changes: Any) -> bool:
        return self._map_task(project_id, task_id, lambda t: _patch(t, changes))

    def amend_task(self, project_id: str, task_id: str, **changes: Any) -> bool:
        """Fold ``changes`` into the latest history entry instead of adding one.

        Used for follow-up edits that belong to the previous step, such as
        confirming the dates of a task that was just dragged.
        """
        return self._map_task(project_id, task_id, lambda t: _patch(t, changes), amend=True)

    def update_task_status(self, project_id: str, task_id: str, status: Status) -> bool:
        return self.update_task(project_id, task_id, status=status)

    def toggle_star(self, project_id: str, task_id: str) -> bool:
        return self._map_task(
            project_id, task_id, lambda t: t.model_copy(update={"starred": not t.starred})
        )

    def delete_task(self, project_id: str, task_id: str) -> bool:
        return self._map_project(
            project_id,
            lambda p: p.model_copy(update={"tasks": tuple(t for t in p.tasks if t.id != task_id)}),
        )

    def reorder_tasks(self, project_id: str, order: Sequence[str]) -> bool:
        return self._map_project(
            project_id, lambda p: p.model_copy(update={"tasks": _reorder(p.tasks, order)})
        )


__all__ = ["BoardActions"]
