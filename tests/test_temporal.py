"""Unit tests for the temporal log (bounded linear undo/redo).

Integers stand in for snapshots here; the log is generic over the value it
stores and only needs an equality predicate.
"""

from __future__ import annotations

import pytest

from planboard.core.contracts.board import BoardSnapshot, Project
from planboard.core.state.store import SnapshotShapeError, SnapshotStore
from planboard.core.state.temporal import HistoryChange, TemporalLog


def _log(initial: int = 0, limit: int | None = 20) -> TemporalLog[int]:
    return TemporalLog(SnapshotStore(initial), limit=limit)


def _record(log: TemporalLog[int]) -> list[HistoryChange[int]]:
    seen: list[HistoryChange[int]] = []
    log.subscribe(seen.append)
    return seen


def test_commit_pushes_previous_value() -> None:
    log = _log(1)
    assert log.commit(2) is True
    assert log.past == (1,)
    assert log.current == 2
    assert log.store.get() == 2
    assert log.future == ()


def test_equal_commit_is_coalesced() -> None:
    log = _log(1)
    log.commit(2)
    seen = _record(log)

    assert log.commit(2) is False
    assert log.past == (1,)
    assert log.future == ()
    assert seen == []


def test_limit_is_respected_without_eviction() -> None:
    log = _log(1, limit=5)
    for value in range(2, 6):  # c2..c5, n - 1 = 4 <= limit
        log.commit(value)
    assert len(log.past) == 4
    assert log.current == 5


def test_limit_evicts_oldest_entry() -> None:
    limit = 3
    log = _log(1, limit=limit)
    n = 7
    for value in range(2, n + 1):
        log.commit(value)
    assert len(log.past) == limit
    assert log.past[0] == n - limit
    assert log.past == (4, 5, 6)
    assert log.current == n


def test_undo_then_redo_round_trips() -> None:
    log = _log(0)
    log.commit(1)
    log.commit(2)
    before = (log.past, log.current, log.future)

    assert log.undo() is True
    assert log.current == 1
    assert log.future == (2,)

    assert log.redo() is True
    assert (log.past, log.current, log.future) == before


def test_new_commit_after_undo_discards_future() -> None:
    log = _log(0)
    log.commit(10)  # a
    log.commit(20)  # b
    log.undo()
    log.commit(30)  # c
    assert log.future == ()
    assert log.past == (0, 10)
    assert log.current == 30


def test_commit_after_undo_with_seed_matches_linear_model() -> None:
    """commit(a); commit(b); undo(); commit(c) leaves past == [a] when a seeds the log."""
    log = _log(10)  # a
    log.commit(20)  # b
    log.undo()
    log.commit(30)  # c
    assert log.past == (10,)
    assert log.future == ()
    assert log.current == 30


def test_multi_step_undo_and_redo() -> None:
    log = _log(0)
    for value in (1, 2, 3, 4):
        log.commit(value)

    assert log.undo(3) is True
    assert log.current == 1
    assert log.past == (0,)
    assert log.future == (2, 3, 4)

    assert log.redo(2) is True
    assert log.current == 3
    assert log.future == (4,)


@pytest.mark.parametrize("steps", [0, -1, 5])
def test_out_of_range_steps_are_noops(steps: int) -> None:
    log = _log(0)
    log.commit(1)
    log.commit(2)
    seen = _record(log)

    assert log.undo(steps) is False
    assert log.redo(steps) is False
    assert log.current == 2
    assert seen == []


def test_undo_and_redo_on_empty_log_are_noops() -> None:
    log = _log(7)
    assert log.undo() is False
    assert log.redo() is False
    assert log.current == 7
    assert not log.can_undo and not log.can_redo


def test_jump_helpers() -> None:
    log = _log(0)
    for value in (1, 2, 3):
        log.commit(value)

    assert log.jump_to_past(1) is True
    assert log.current == 1
    assert log.future == (2, 3)

    assert log.jump_to_future(1) is True
    assert log.current == 3
    assert log.future == ()

    # Index at or beyond len(past) is the current state itself.
    assert log.jump_to_past(len(log.past)) is False
    assert log.jump_to_future(0) is False


def test_amend_replaces_current_without_history() -> None:
    log = _log(0)
    log.commit(1)
    log.commit(2)
    log.undo()
    seen = _record(log)

    assert log.amend(11) is True
    assert log.current == 11
    assert log.past == (0,)
    assert log.future == (2,)
    assert [c.action for c in seen] == ["amend"]

    assert log.amend(11) is False


def test_clear_drops_both_stacks_and_keeps_current() -> None:
    log = _log(0)
    log.commit(1)
    log.commit(2)
    log.undo()
    seen = _record(log)

    log.clear()
    assert log.past == ()
    assert log.future == ()
    assert log.current == 1
    assert seen[-1].action == "clear"


def test_subscribers_receive_immutable_changes() -> None:
    log = _log(0)
    seen = _record(log)

    log.commit(1)
    log.commit(2)
    log.undo()
    log.redo()

    assert [c.action for c in seen] == ["commit", "commit", "undo", "redo"]
    undo = seen[2]
    assert isinstance(undo.past, tuple) and isinstance(undo.future, tuple)
    assert (undo.past, undo.current, undo.future) == ((0,), 1, (2,))
    assert undo.can_undo and undo.can_redo
    # Later operations never rewrite what was already emitted.
    assert seen[1].past == (0, 1)


def test_unsubscribe_stops_notifications() -> None:
    log = _log(0)
    seen: list[HistoryChange[int]] = []
    unsubscribe = log.subscribe(seen.append)
    log.commit(1)
    unsubscribe()
    log.commit(2)
    assert len(seen) == 1


def test_custom_equality_controls_coalescing() -> None:
    log: TemporalLog[str] = TemporalLog(
        SnapshotStore("a"), equality=lambda x, y: x.lower() == y.lower()
    )
    assert log.commit("A") is False
    assert log.commit("b") is True
    assert log.past == ("a",)


def test_invalid_limit_is_rejected() -> None:
    with pytest.raises(ValueError):
        _log(0, limit=0)


def test_unbounded_log() -> None:
    log = _log(0, limit=None)
    for value in range(1, 101):
        log.commit(value)
    assert len(log.past) == 100
    assert log.limit is None


def test_rejected_commit_leaves_history_untouched() -> None:
    store = SnapshotStore(BoardSnapshot(), schema=BoardSnapshot)
    log: TemporalLog[BoardSnapshot] = TemporalLog(store)
    log.commit(BoardSnapshot(projects=(Project(id="p1", name="A"),)))
    log.undo()
    seen = _record(log)  # type: ignore[arg-type]

    with pytest.raises(SnapshotShapeError):
        log.commit("not a board")  # type: ignore[arg-type]

    assert log.past == ()
    assert len(log.future) == 1
    assert log.current == BoardSnapshot()
    assert seen == []
