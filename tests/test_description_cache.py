"""Tests for the description cache kept in sync with the temporal log."""

from __future__ import annotations

from planboard.core.contracts.board import BoardSnapshot, Project, snapshots_equal
from planboard.core.state.store import SnapshotStore
from planboard.core.state.temporal import TemporalLog
from planboard.history.cache import MISSING_LABEL, DescriptionCache
from planboard.history.describe import describe


def _board(*names: str) -> BoardSnapshot:
    return BoardSnapshot(projects=tuple(Project(id=n.lower(), name=n) for n in names))


def _wired(limit: int = 20) -> tuple[TemporalLog[BoardSnapshot], DescriptionCache]:
    log = TemporalLog(SnapshotStore(BoardSnapshot()), limit=limit, equality=snapshots_equal)
    cache = DescriptionCache()
    cache.attach(log)
    return log, cache


def test_labels_follow_commits() -> None:
    log, cache = _wired()
    log.commit(_board("P1"))
    log.commit(_board("P1", "P2"))
    assert cache.past_labels() == ["Added project: P1", "Added project: P2"]
    assert cache.future_labels() == []


def test_undo_redo_keeps_future_label() -> None:
    log, cache = _wired()
    log.commit(_board("P1"))
    log.commit(_board("P1", "P2"))

    log.undo()
    assert cache.past_labels() == ["Added project: P1"]
    assert cache.future_labels() == ["Added project: P2"]

    log.redo()
    assert cache.past_labels() == ["Added project: P1", "Added project: P2"]


def test_future_label_describes_the_undone_transition() -> None:
    log, cache = _wired()
    a, b = _board("A"), _board("A", "B")
    log.commit(a)
    log.commit(b)
    log.undo()
    assert cache.label_for_future(0) == describe(a, b)


def test_multi_step_undo_exposes_all_future_labels() -> None:
    log, cache = _wired()
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.commit(_board("A", "B", "C"))
    log.undo(2)
    assert cache.past_labels() == ["Added project: A"]
    assert cache.future_labels() == ["Added project: B", "Added project: C"]


def test_commit_after_undo_drops_stale_future_labels() -> None:
    log, cache = _wired()
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.undo()
    log.commit(_board("A", "C"))
    assert cache.past_labels() == ["Added project: A", "Added project: C"]
    assert cache.labels == ("Added project: A", "Added project: C")


def test_labels_stay_aligned_at_the_limit() -> None:
    log, cache = _wired(limit=2)
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.commit(_board("A", "B", "C"))
    assert len(log.past) == 2
    assert cache.past_labels() == ["Added project: B", "Added project: C"]

    log.undo()
    assert cache.future_labels() == ["Added project: C"]


def test_amend_recomputes_prefix_and_keeps_future() -> None:
    log, cache = _wired()
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.undo()

    log.amend(_board("Renamed"))
    assert cache.past_labels() == ["Added project: Renamed"]
    assert cache.future_labels() == ["Added project: B"]


def test_clear_empties_labels() -> None:
    log, cache = _wired()
    log.commit(_board("A"))
    log.clear()
    assert cache.labels == ()
    assert cache.past_labels() == []


def test_late_attach_falls_back_for_unknown_future() -> None:
    log = TemporalLog(SnapshotStore(BoardSnapshot()), equality=snapshots_equal)
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.undo()

    cache = DescriptionCache()
    cache.attach(log)
    assert cache.past_labels() == ["Added project: A"]
    assert cache.future_labels() == [MISSING_LABEL]


def test_custom_describer_and_unsubscribe() -> None:
    log = TemporalLog(SnapshotStore(BoardSnapshot()), equality=snapshots_equal)
    cache = DescriptionCache(lambda prev, curr: f"{len(curr.projects)} project(s)")
    unsubscribe = cache.attach(log)
    log.commit(_board("A"))
    assert cache.past_labels() == ["1 project(s)"]

    unsubscribe()
    log.commit(_board("A", "B"))
    assert cache.labels == ("1 project(s)",)


def test_out_of_range_lookups() -> None:
    _, cache = _wired()
    assert cache.label_for_past(3) == MISSING_LABEL
    assert cache.label_for_future(-1) == MISSING_LABEL
    assert cache.label_for_future(0) == MISSING_LABEL
