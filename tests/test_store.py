"""Unit tests for the snapshot store."""

from __future__ import annotations

import pytest

from planboard.core.contracts.board import BoardSnapshot, Project
from planboard.core.state.store import SnapshotShapeError, SnapshotStore


def test_get_and_replace_notify_listeners() -> None:
    store = SnapshotStore(BoardSnapshot(), schema=BoardSnapshot)
    seen: list[tuple[int, int]] = []
    unsubscribe = store.subscribe(lambda new, old: seen.append((len(new.projects), len(old.projects))))

    nxt = BoardSnapshot(projects=(Project(id="p1", name="P"),))
    store.replace(nxt)
    assert store.get() is nxt
    assert seen == [(1, 0)]

    unsubscribe()
    store.replace(BoardSnapshot())
    assert seen == [(1, 0)]


def test_wrong_shape_fails_loudly() -> None:
    store = SnapshotStore(BoardSnapshot(), schema=BoardSnapshot)
    with pytest.raises(SnapshotShapeError):
        store.replace({"projects": []})  # type: ignore[arg-type]
    with pytest.raises(SnapshotShapeError):
        SnapshotStore("not a board", schema=BoardSnapshot)  # type: ignore[arg-type]


def test_schema_is_optional() -> None:
    store: SnapshotStore[int] = SnapshotStore(1)
    store.replace(2)
    assert store.get() == 2
