"""
Change descriptions: a short human label for the step between two snapshots.

:func:`describe` compares two board snapshots and returns the first matching
label from an ordered list of structural heuristics:

1. a project was added / deleted,
2. inside a project present in both snapshots (in the newer order):
   a task was added / deleted, a task's status or star changed, a task was
   otherwise edited, the tasks were reordered, or a project field changed,
3. the projects were reordered,
4. anything else is ``"State changed"``.

The function is pure: it only looks at the two values it is given and never
at the temporal log.

Names and titles are shortened for the history list. Text containing CJK
characters is cut at 8 characters, anything else at 15, because CJK glyphs
render about twice as wide.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from planboard.core.contracts.board import BoardSnapshot, Project, Task

INITIAL_LABEL = "Initial state"
FALLBACK_LABEL = "State changed"
ELLIPSIS = "..."

CJK_LIMIT = 8
DEFAULT_LIMIT = 15

# Han, Hiragana, Katakana, Hangul syllables.
_CJK_RE = re.compile(r"[\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff\uac00-\ud7af]")


def has_cjk(text: str) -> bool:
    """Return True if ``text`` contains any CJK code point."""
    return _CJK_RE.search(text) is not None


def truncate_name(text: str) -> str:
    """Shorten ``text`` for display, appending ``"..."`` when cut."""
    limit = CJK_LIMIT if has_cjk(text) else DEFAULT_LIMIT
    if len(text) > limit:
        return f"{text[:limit]}{ELLIPSIS}"
    return text


_Items = Sequence[Project] | Sequence[Task]


def _ids(items: _Items) -> list[str]:
    return [item.id for item in items]


def _reordered(before: _Items, after: _Items) -> bool:
    """Same id set, different order."""
    a, b = _ids(before), _ids(after)
    return a != b and sorted(a) == sorted(b)


def _describe_project(prev: Project, curr: Project) -> str | None:
    prev_tasks, curr_tasks = prev.tasks, curr.tasks

    if len(curr_tasks) > len(prev_tasks):
        known = set(_ids(prev_tasks))
        added = next((t for t in curr_tasks if t.id not in known), None)
        return f"Added task: {truncate_name(added.title)}" if added else "Added task"

    if len(curr_tasks) < len(prev_tasks):
        return "Deleted task"

    for task in curr_tasks:
        before = prev.task(task.id)
        if before is None:
            continue
        if before.status != task.status:
            return f"{truncate_name(task.title)} → {task.status}"
        if before.starred != task.starred:
            verb = "Starred" if task.starred else "Unstarred"
            return f"{verb}: {truncate_name(task.title)}"
        if before != task:
            return f"Edited: {truncate_name(task.title)}"

    if _reordered(prev_tasks, curr_tasks):
        return "Reordered tasks"

    if prev != curr:
        return f"Updated: {truncate_name(curr.name)}"

    return None


def describe(prev: BoardSnapshot | None, curr: BoardSnapshot) -> str:
    """
    Return a short label for the transition ``prev -> curr``.

    Parameters
    ----------
    prev : BoardSnapshot | None
        The earlier snapshot, or ``None`` for the very first state.
    curr : BoardSnapshot
        The later snapshot.

    Returns
    -------
    str
        e.g. ``"Added project: Roadmap"``, ``"Fix login → done"``,
        ``"Reordered tasks"``.
    """
    if prev is None:
        return INITIAL_LABEL

    prev_projects, curr_projects = prev.projects, curr.projects

    if len(curr_projects) > len(prev_projects):
        known = set(_ids(prev_projects))
        added = next((p for p in curr_projects if p.id not in known), None)
        return f"Added project: {truncate_name(added.name)}" if added else "Added project"

    if len(curr_projects) < len(prev_projects):
        remaining = set(_ids(curr_projects))
        deleted = next((p for p in prev_projects if p.id not in remaining), None)
        return f"Deleted project: {truncate_name(deleted.name)}" if deleted else "Deleted project"

    for project in curr_projects:
        before = prev.project(project.id)
        if before is None:
            continue
        label = _describe_project(before, project)
        if label is not None:
            return label

    if _reordered(prev_projects, curr_projects):
        return "Reordered projects"

    return FALLBACK_LABEL


__all__ = [
    "CJK_LIMIT",
    "DEFAULT_LIMIT",
    "FALLBACK_LABEL",
    "INITIAL_LABEL",
    "describe",
    "has_cjk",
    "truncate_name",
]
