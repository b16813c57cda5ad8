"""
Temporal log: bounded, linear undo/redo over a snapshot store.

The log wraps a :class:`~planboard.core.state.store.SnapshotStore` and keeps
two stacks of earlier and later snapshots around the store's current value::

    past[0] ... past[-1]  |  current  |  future[0] ... future[-1]
    (oldest)                                            (furthest redo)

Operations
----------
- ``commit(snapshot)``: record a new current value. Deep-equal values are
  coalesced (no entry, no notification). The previous value is pushed onto
  ``past``; the oldest entry is evicted once ``limit`` is exceeded; ``future``
  is discarded because a new edit invalidates the redo branch.
- ``undo(steps)`` / ``redo(steps)``: move ``steps`` entries across. Step
  counts beyond what is available are silent no-ops so a double-fired
  shortcut can never raise.
- ``jump_to_past(index)`` / ``jump_to_future(index)``: positional helpers for
  the history panel built on ``undo`` / ``redo``.
- ``amend(snapshot)``: replace the current value without touching history
  (drag previews, or folding a follow-up edit into the last entry).
- ``clear()``: forget all history; the current value stays.

Every successful operation notifies subscribers with a :class:`HistoryChange`
built from tuples, so listeners can keep it without copying.

Branching history is not supported: after an undo, a different new edit
drops the old future for good.
"""

from __future__ import annotations

import operator
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from planboard.core.settings import DEFAULT_HISTORY_LIMIT, get_logger

from .store import SnapshotStore

S = TypeVar("S")

HistoryAction = Literal["commit", "undo", "redo", "amend", "clear"]

_log = get_logger("planboard.state")


@dataclass(frozen=True, slots=True)
class HistoryChange(Generic[S]):
    """
    Immutable view of the log emitted after every successful operation.

    Attributes
    ----------
    action : HistoryAction
        Which operation produced this change.
    past : tuple[S, ...]
        Undo stack, oldest first.
    future : tuple[S, ...]
        Redo stack, next redo target first.
    current : S
        The store's value after the operation.
    """

    action: HistoryAction
    past: tuple[S, ...]
    future: tuple[S, ...]
    current: S

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


HistoryListener = Callable[[HistoryChange[S]], None]


class TemporalLog(Generic[S]):
    """
    Bounded undo/redo history over a snapshot store.

    Parameters
    ----------
    store : SnapshotStore[S]
        Holder of the current value. The log writes through it on every
        operation that changes the current value.
    limit : int | None
        Maximum length of ``past``. ``None`` keeps unbounded history.
    equality : Callable[[S, S], bool]
        Predicate deciding whether an incoming snapshot is "no change".
        Defaults to ``==``.
    """

    def __init__(
        self,
        store: SnapshotStore[S],
        *,
        limit: int | None = DEFAULT_HISTORY_LIMIT,
        equality: Callable[[S, S], bool] = operator.eq,
    ) -> None:
        if limit is not None and limit < 1:
            raise ValueError(f"history limit must be >= 1, got {limit}")
        self._store = store
        self._limit = limit
        self._equality = equality
        # maxlen makes append() drop the oldest entry once the limit is hit.
        self._past: deque[S] = deque(maxlen=limit)
        self._future: deque[S] = deque()
        self._listeners: list[HistoryListener[S]] = []

    # ------------------------------- Read API -------------------------------

    @property
    def store(self) -> SnapshotStore[S]:
        return self._store

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def current(self) -> S:
        return self._store.get()

    @property
    def past(self) -> tuple[S, ...]:
        """Undo stack, oldest first."""
        return tuple(self._past)

    @property
    def future(self) -> tuple[S, ...]:
        """Redo stack, next redo target first."""
        return tuple(self._future)

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def snapshot(self, action: HistoryAction) -> HistoryChange[S]:
        """Return the current state of the log tagged with ``action``."""
        return HistoryChange(
            action=action,
            past=tuple(self._past),
            future=tuple(self._future),
            current=self._store.get(),
        )

    # ------------------------------ Mutations -------------------------------

    def commit(self, snapshot: S) -> bool:
        """
        Record ``snapshot`` as the new current value.

        Returns
        -------
        bool
            ``False`` when the snapshot equals the current value and the
            commit was coalesced, ``True`` otherwise.
        """
        current = self._store.get()
        if self._equality(snapshot, current):
            _log.debug("commit coalesced: snapshot equals current value")
            return False
        # Store first: a rejected snapshot must not touch past or future.
        self._store.replace(snapshot)
        self._past.append(current)
        self._future.clear()
        _log.debug("commit: past=%d", len(self._past))
        self._emit("commit")
        return True

    def undo(self, steps: int = 1) -> bool:
        """Step back ``steps`` entries; a no-op if not enough history exists."""
        if steps < 1 or steps > len(self._past):
            _log.debug("undo(%d) ignored: past=%d", steps, len(self._past))
            return False
        current = self._store.get()
        for _ in range(steps):
            previous = self._past.pop()
            self._future.appendleft(current)
            current = previous
        self._store.replace(current)
        _log.debug("undo(%d): past=%d future=%d", steps, len(self._past), len(self._future))
        self._emit("undo")
        return True

    def redo(self, steps: int = 1) -> bool:
        """Step forward ``steps`` entries; a no-op if not enough future exists."""
        if steps < 1 or steps > len(self._future):
            _log.debug("redo(%d) ignored: future=%d", steps, len(self._future))
            return False
        current = self._store.get()
        for _ in range(steps):
            following = self._future.popleft()
            self._past.append(current)
            current = following
        self._store.replace(current)
        _log.debug("redo(%d): past=%d future=%d", steps, len(self._past), len(self._future))
        self._emit("redo")
        return True

    def jump_to_past(self, index: int) -> bool:
        """Make ``past[index]`` current by undoing ``len(past) - index`` steps."""
        steps = len(self._past) - index
        if steps <= 0:
            return False
        return self.undo(steps)

    def jump_to_future(self, index: int) -> bool:
        """Make ``future[index]`` current by redoing ``index + 1`` steps."""
        return self.redo(index + 1)

    def amend(self, snapshot: S) -> bool:
        """Replace the current value without creating a history entry."""
        if self._equality(snapshot, self._store.get()):
            return False
        self._store.replace(snapshot)
        self._emit("amend")
        return True

    def clear(self) -> None:
        """Drop all past and future entries; the current value is kept."""
        self._past.clear()
        self._future.clear()
        _log.debug("history cleared")
        self._emit("clear")

    # ---------------------------- Subscriptions -----------------------------

    def subscribe(self, listener: HistoryListener[S]) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, action: HistoryAction) -> None:
        change = self.snapshot(action)
        for listener in tuple(self._listeners):
            listener(change)


__all__ = ["HistoryAction", "HistoryChange", "HistoryListener", "TemporalLog"]
