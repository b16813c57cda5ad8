"""
History panel model: the list a user scrolls through to time-travel.

The panel itself draws nothing. It joins three collaborators:

- the :class:`~planboard.core.state.temporal.TemporalLog` (what exists),
- the :class:`~planboard.history.cache.DescriptionCache` (what to call it),
- the :class:`~planboard.keyboard.priority.PriorityRegistry` (whether the
  panel is open and therefore owns the keyboard).

Rows run oldest → newest: every ``past`` entry, the current state, then every
``future`` entry. Selecting a row jumps there with ``jump_to_past`` /
``jump_to_future``. The focus cursor returns to the current row after each
log change, including undo/redo triggered from elsewhere.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from planboard.core.contracts.board import BoardSnapshot
from planboard.core.state.temporal import HistoryChange, TemporalLog
from planboard.keyboard.priority import PriorityRegistry

from .cache import DescriptionCache

RowKind = Literal["past", "current", "future"]
ConfirmFn = Callable[[str], bool]

CURRENT_LABEL = "Current state"
CLEAR_PROMPT = "Delete all history?"


@dataclass(frozen=True, slots=True)
class HistoryRow:
    """
    One line of the history list.

    Attributes
    ----------
    kind : RowKind
        Which side of the current state the row is on.
    index : int
        Position in ``past`` or ``future``; ``-1`` for the current row.
    offset : int
        Steps from the current state (negative = undo, positive = redo).
    label : str
        Description of the transition the row stands for.
    """

    kind: RowKind
    index: int
    offset: int
    label: str


class HistoryPanel:
    """UI-free state of the history panel."""

    def __init__(
        self,
        log: TemporalLog[BoardSnapshot],
        cache: DescriptionCache,
        registry: PriorityRegistry,
    ) -> None:
        self._log = log
        self._cache = cache
        self._registry = registry
        self._focus = len(log.past)
        self._unsubscribe = log.subscribe(self._on_change)

    # ------------------------------ Open/close ------------------------------

    @property
    def is_open(self) -> bool:
        return self._registry.flags.history

    def open(self) -> None:
        self._focus = len(self._log.past)
        self._registry.set_history_open(True)

    def close(self) -> None:
        self._registry.set_history_open(False)

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    # -------------------------------- Rows ----------------------------------

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to undo or redo."""
        return not (self._log.can_undo or self._log.can_redo)

    @property
    def undo_count(self) -> int:
        return len(self._log.past)

    @property
    def redo_count(self) -> int:
        return len(self._log.future)

    def entries(self) -> list[HistoryRow]:
        """Return every row, oldest first."""
        past_len = len(self._log.past)
        rows = [
            HistoryRow("past", i, i - past_len, self._cache.label_for_past(i))
            for i in range(past_len)
        ]
        rows.append(HistoryRow("current", -1, 0, CURRENT_LABEL))
        rows.extend(
            HistoryRow("future", i, i + 1, self._cache.label_for_future(i))
            for i in range(len(self._log.future))
        )
        return rows

    @property
    def focus(self) -> int:
        """Row index (into :meth:`entries`) under the cursor."""
        return self._focus

    def focused_row(self) -> HistoryRow:
        return self.entries()[self._focus]

    def move_focus(self, delta: int) -> None:
        last = len(self._log.past) + len(self._log.future)
        self._focus = max(0, min(last, self._focus + delta))

    # ------------------------------- Actions --------------------------------

    def select(self, row: HistoryRow) -> bool:
        """Jump to ``row``; the current row is a no-op."""
        if row.kind == "past":
            return self._log.jump_to_past(row.index)
        if row.kind == "future":
            return self._log.jump_to_future(row.index)
        return False

    def activate_focused(self) -> bool:
        return self.select(self.focused_row())

    def request_clear(self, confirm: ConfirmFn) -> bool:
        """Clear all history only if ``confirm`` approves."""
        if not confirm(CLEAR_PROMPT):
            return False
        self._log.clear()
        return True

    def dispose(self) -> None:
        self._unsubscribe()

    def _on_change(self, change: HistoryChange[BoardSnapshot]) -> None:
        self._focus = len(change.past)


__all__ = ["CLEAR_PROMPT", "CURRENT_LABEL", "ConfirmFn", "HistoryPanel", "HistoryRow"]
