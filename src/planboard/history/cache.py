"""
Description cache: stable labels for every history transition.

Labels are indexed by position along the whole timeline, not just the part
that is currently in ``past``::

    index:   0          1          ...   P-1              P          P+1
    label:   past[0]->  past[1]->        past[P-1]->      future[0]->  future[1]->
             past[1]    past[2]          current          future[1]    future[2]

where ``P == len(past)``. So the label of ``future[i]`` is ``labels[P + i]``.

Why a cache at all: a future entry's label describes a transition that was
computed *before* the undo that exposed it. Recomputing it afterwards would
compare the wrong pair of snapshots, so the cache reconciles per operation:

- ``commit``: the timeline was rewritten (new edit, maybe an eviction), so
  every label is recomputed from ``past + [current]``.
- ``redo`` / ``amend``: labels up to the new ``len(past)`` are recomputed;
  labels beyond it still describe the remaining future and are kept as-is.
- ``undo``: nothing changes; existing labels already cover both sides.
- ``clear``: everything is dropped.

A future index with no cached label (e.g. the cache was attached after the
undo happened) reads as :data:`MISSING_LABEL` instead of failing.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from planboard.core.contracts.board import BoardSnapshot
from planboard.core.state.temporal import HistoryChange, TemporalLog

from .describe import describe

#: Shown for a future entry whose label was never computed.
MISSING_LABEL = "State change"

Describer = Callable[[BoardSnapshot | None, BoardSnapshot], str]


class DescriptionCache:
    """
    Keep one label per transition in sync with a temporal log.

    Parameters
    ----------
    describer : Describer
        Function computing a label for ``(prev, curr)``; defaults to
        :func:`~planboard.history.describe.describe`.
    """

    def __init__(self, describer: Describer = describe) -> None:
        self._describe = describer
        self._labels: list[str] = []
        self._past_length = 0
        self._future_length = 0

    @property
    def labels(self) -> tuple[str, ...]:
        """Every cached label, including those kept for future entries."""
        return tuple(self._labels)

    def attach(self, log: TemporalLog[BoardSnapshot]) -> Callable[[], None]:
        """Seed the cache from ``log`` and follow its changes.

        Returns the unsubscribe callable of the underlying subscription.
        """
        self._labels = self._compute(log.past, log.current)
        self._past_length = len(log.past)
        self._future_length = len(log.future)
        return log.subscribe(self.apply)

    def apply(self, change: HistoryChange[BoardSnapshot]) -> None:
        """Reconcile the labels with one log change."""
        if change.action == "commit":
            self._labels = self._compute(change.past, change.current)
        elif change.action in ("redo", "amend"):
            fresh = self._compute(change.past, change.current)
            self._labels = fresh + self._labels[len(fresh) :]
        elif change.action == "clear":
            self._labels = []
        # "undo" keeps every label: the exposed future was labelled before.

        if len(self._labels) < len(change.past):
            self._labels = self._compute(change.past, change.current)

        self._past_length = len(change.past)
        self._future_length = len(change.future)

    def _compute(self, past: Sequence[BoardSnapshot], current: BoardSnapshot) -> list[str]:
        out: list[str] = []
        for i, before in enumerate(past):
            after = past[i + 1] if i + 1 < len(past) else current
            out.append(self._describe(before, after))
        return out

    # ------------------------------- Lookups --------------------------------

    def label_for_past(self, index: int) -> str:
        """Label of the transition leaving ``past[index]``."""
        if 0 <= index < len(self._labels):
            return self._labels[index]
        return MISSING_LABEL

    def label_for_future(self, index: int) -> str:
        """Label of the transition that reaches ``future[index]``."""
        cache_index = self._past_length + index
        if 0 <= index and cache_index < len(self._labels):
            return self._labels[cache_index]
        return MISSING_LABEL

    def past_labels(self) -> list[str]:
        return [self.label_for_past(i) for i in range(self._past_length)]

    def future_labels(self) -> list[str]:
        return [self.label_for_future(i) for i in range(self._future_length)]


__all__ = ["DescriptionCache", "Describer", "MISSING_LABEL"]
