"""
Scripted sessions: run a list of board actions and history steps.

A replay script is a JSON array of steps. Each step names an action and its
arguments; ``as`` gives the created project/task a short reference that later
steps can use instead of the generated id::

    [
      {"action": "add_project", "args": {"name": "Roadmap"}, "as": "road"},
      {"action": "add_task", "args": {"project": "road", "title": "Draft"}, "as": "t1"},
      {"action": "update_task_status", "args": {"project": "road", "task": "t1", "status": "done"}},
      {"action": "undo"},
      {"action": "redo"}
    ]

History steps (``undo``, ``redo``, ``jump_to_past``, ``jump_to_future``,
``clear``) go straight to the temporal log, so a script exercises the same
paths as the keyboard and the history panel.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from planboard.workspace import Workspace


class ReplayStep(BaseModel):
    """One scripted step."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    action: str = Field(description="Action name, e.g. 'add_task' or 'undo'")
    args: dict[str, Any] = Field(default_factory=dict)
    ref: str | None = Field(default=None, alias="as", description="Reference for created items")


_STEPS = TypeAdapter(list[ReplayStep])


def load_script(path: Path) -> list[ReplayStep]:
    """Parse a JSON replay script; raises ``ValueError`` on malformed input."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    return _STEPS.validate_python(data)


class ScriptRunner:
    """Apply replay steps to a workspace, resolving ``as`` references."""

    def __init__(self, workspace: Workspace) -> None:
        self._ws = workspace
        self._refs: dict[str, str] = {}
        self._handlers: dict[str, Callable[[dict[str, Any]], str | None]] = {
            "add_project": self._add_project,
            "update_project": lambda a: self._call("update_project", a, "project", "changes"),
            "delete_project": lambda a: self._call("delete_project", a, "project"),
            "reorder_projects": self._reorder_projects,
            "add_task": self._add_task,
            "update_task": lambda a: self._call("update_task", a, "project", "task", "changes"),
            "amend_task": lambda a: self._call("amend_task", a, "project", "task", "changes"),
            "update_task_status": self._update_task_status,
            "toggle_star": lambda a: self._call("toggle_star", a, "project", "task"),
            "delete_task": lambda a: self._call("delete_task", a, "project", "task"),
            "reorder_tasks": self._reorder_tasks,
            "undo": self._undo,
            "redo": self._redo,
            "jump_to_past": self._jump_to_past,
            "jump_to_future": self._jump_to_future,
            "clear": self._clear,
        }

    def resolve(self, ref: str) -> str:
        """Map a script reference to a real id (unknown refs pass through)."""
        return self._refs.get(ref, ref)

    def run(self, steps: list[ReplayStep]) -> None:
        for number, step in enumerate(steps, start=1):
            handler = self._handlers.get(step.action)
            if handler is None:
                raise ValueError(f"step {number}: unknown action {step.action!r}")
            try:
                created = handler(step.args)
            except KeyError as e:
                raise ValueError(f"step {number} ({step.action}): missing argument {e}") from e
            if step.ref and created:
                self._refs[step.ref] = created

    # ------------------------------- Handlers -------------------------------

    def _call(self, name: str, args: dict[str, Any], *keys: str) -> None:
        method = getattr(self._ws.actions, name)
        positional = [self.resolve(args[k]) for k in keys if k != "changes"]
        changes: dict[str, Any] = args.get("changes", {}) if "changes" in keys else {}
        method(*positional, **changes)

    def _add_project(self, args: dict[str, Any]) -> str:
        project = self._ws.actions.add_project(
            args["name"],
            args.get("theme", "default"),
            start_date=args.get("start_date"),
            deadline=args.get("deadline"),
        )
        return project.id

    def _add_task(self, args: dict[str, Any]) -> str | None:
        fields = {k: v for k, v in args.items() if k not in ("project", "title")}
        task = self._ws.actions.add_task(self.resolve(args["project"]), args["title"], **fields)
        return task.id if task else None

    def _update_task_status(self, args: dict[str, Any]) -> None:
        self._ws.actions.update_task_status(
            self.resolve(args["project"]), self.resolve(args["task"]), args["status"]
        )

    def _reorder_projects(self, args: dict[str, Any]) -> None:
        self._ws.actions.reorder_projects([self.resolve(r) for r in args["order"]])

    def _reorder_tasks(self, args: dict[str, Any]) -> None:
        self._ws.actions.reorder_tasks(
            self.resolve(args["project"]), [self.resolve(r) for r in args["order"]]
        )

    def _undo(self, args: dict[str, Any]) -> None:
        self._ws.log.undo(int(args.get("steps", 1)))

    def _redo(self, args: dict[str, Any]) -> None:
        self._ws.log.redo(int(args.get("steps", 1)))

    def _jump_to_past(self, args: dict[str, Any]) -> None:
        self._ws.log.jump_to_past(int(args["index"]))

    def _jump_to_future(self, args: dict[str, Any]) -> None:
        self._ws.log.jump_to_future(int(args["index"]))

    def _clear(self, _args: dict[str, Any]) -> None:
        self._ws.log.clear()


__all__ = ["ReplayStep", "ScriptRunner", "load_script"]
