"""Tests for the UI-free history panel model."""

from __future__ import annotations

from planboard.core.contracts.board import BoardSnapshot, Project, snapshots_equal
from planboard.core.state.store import SnapshotStore
from planboard.core.state.temporal import TemporalLog
from planboard.history.cache import DescriptionCache
from planboard.history.panel import CLEAR_PROMPT, CURRENT_LABEL, HistoryPanel
from planboard.keyboard.priority import Priority, PriorityRegistry


def _board(*names: str) -> BoardSnapshot:
    return BoardSnapshot(projects=tuple(Project(id=n.lower(), name=n) for n in names))


def _panel() -> tuple[TemporalLog[BoardSnapshot], HistoryPanel, PriorityRegistry]:
    log = TemporalLog(SnapshotStore(BoardSnapshot()), equality=snapshots_equal)
    cache = DescriptionCache()
    cache.attach(log)
    registry = PriorityRegistry()
    return log, HistoryPanel(log, cache, registry), registry


def _populated() -> tuple[TemporalLog[BoardSnapshot], HistoryPanel, PriorityRegistry]:
    log, panel, registry = _panel()
    log.commit(_board("A"))
    log.commit(_board("A", "B"))
    log.commit(_board("A", "B", "C"))
    log.undo()
    return log, panel, registry


def test_empty_panel() -> None:
    _, panel, _ = _panel()
    assert panel.is_empty
    assert [r.kind for r in panel.entries()] == ["current"]


def test_rows_run_oldest_to_newest() -> None:
    _, panel, _ = _populated()
    rows = panel.entries()

    assert [(r.kind, r.index, r.offset) for r in rows] == [
        ("past", 0, -2),
        ("past", 1, -1),
        ("current", -1, 0),
        ("future", 0, 1),
    ]
    assert [r.label for r in rows] == [
        "Added project: A",
        "Added project: B",
        CURRENT_LABEL,
        "Added project: C",
    ]
    assert (panel.undo_count, panel.redo_count) == (2, 1)
    assert not panel.is_empty


def test_selecting_rows_jumps() -> None:
    log, panel, _ = _populated()

    assert panel.select(panel.entries()[0]) is True
    assert log.current == BoardSnapshot()
    assert len(log.future) == 3

    future_rows = [r for r in panel.entries() if r.kind == "future"]
    assert panel.select(future_rows[-1]) is True
    assert log.current == _board("A", "B", "C")

    current = next(r for r in panel.entries() if r.kind == "current")
    assert panel.select(current) is False


def test_focus_moves_clamps_and_resets() -> None:
    log, panel, _ = _populated()
    assert panel.focus == 2
    assert panel.focused_row().kind == "current"

    panel.move_focus(-10)
    assert panel.focus == 0
    panel.move_focus(+10)
    assert panel.focus == 3

    panel.move_focus(-3)
    assert panel.activate_focused() is True
    assert log.current == BoardSnapshot()
    assert panel.focused_row().kind == "current"

    panel.move_focus(1)
    log.redo()  # triggered from outside the panel
    assert panel.focus == len(log.past)


def test_open_close_drive_the_registry() -> None:
    _, panel, registry = _populated()
    assert not panel.is_open

    panel.move_focus(-1)
    panel.open()
    assert panel.is_open
    assert registry.top_priority() is Priority.HISTORY
    assert panel.focus == 2

    panel.toggle()
    assert not panel.is_open
    assert registry.top_priority() is Priority.NONE


def test_clear_requires_confirmation() -> None:
    log, panel, _ = _populated()
    prompts: list[str] = []

    def refuse(prompt: str) -> bool:
        prompts.append(prompt)
        return False

    assert panel.request_clear(refuse) is False
    assert prompts == [CLEAR_PROMPT]
    assert len(log.past) == 2

    assert panel.request_clear(lambda _: True) is True
    assert panel.is_empty
    assert log.current == _board("A", "B")


def test_dispose_detaches_from_the_log() -> None:
    log, panel, _ = _populated()
    panel.move_focus(-2)
    panel.dispose()
    log.redo()
    assert panel.focus == 0
