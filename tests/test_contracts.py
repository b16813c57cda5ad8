"""Contract tests for the board snapshot models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from planboard.core.contracts.board import BoardSnapshot, Project, Task, snapshots_equal


def test_snapshots_compare_by_value() -> None:
    a = BoardSnapshot(projects=(Project(id="p1", name="Home", tasks=(Task(id="t1", title="A"),)),))
    b = BoardSnapshot(projects=(Project(id="p1", name="Home", tasks=(Task(id="t1", title="A"),)),))
    assert a is not b
    assert a == b
    assert snapshots_equal(a, b)
    assert not snapshots_equal(a, BoardSnapshot())


def test_snapshots_are_frozen() -> None:
    snap = BoardSnapshot(projects=(Project(id="p1", name="Home"),))
    with pytest.raises(ValidationError):
        snap.projects[0].name = "Work"  # type: ignore[misc]


def test_json_uses_camel_case_and_reads_both_spellings() -> None:
    task = Task(id="t1", title="Ship", due_date="2026-01-31", created_at=5)
    dumped = BoardSnapshot(projects=(Project(id="p1", name="P", tasks=(task,)),)).to_json_dict()

    stored = dumped["projects"][0]["tasks"][0]  # type: ignore[index]
    assert stored["dueDate"] == "2026-01-31"
    assert stored["createdAt"] == 5
    assert "due_date" not in stored

    assert BoardSnapshot.model_validate(dumped).projects[0].tasks[0] == task


def test_invalid_status_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Task(id="t1", title="x", status="blocked")  # type: ignore[arg-type]


def test_lookup_helpers() -> None:
    snap = BoardSnapshot(projects=(Project(id="p1", name="P", tasks=(Task(id="t1", title="x"),)),))
    proj = snap.project("p1")
    assert proj is not None and proj.task("t1") is not None
    assert snap.project("nope") is None
    assert proj.task("nope") is None
