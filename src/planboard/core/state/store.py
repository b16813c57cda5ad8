"""
In-memory snapshot store: the single holder of the current domain state.

This module implements the leaf of the state engine. It stores exactly one
value, the *current* snapshot, and provides:

- ``get()``: return the current snapshot.
- ``replace(value)``: swap in a new snapshot and notify listeners.
- ``subscribe(listener)``: register a ``(new, old)`` callback; the returned
  callable unsubscribes it.

The store does not know about history. The temporal log wraps it and decides
*when* a replacement is also a history entry.

Design Goals
------------
- **Minimal API**: Keep the surface area small (`get`/`replace`/`subscribe`).
- **Fail loudly on shape errors**: when a ``schema`` type is given, replacing
  the snapshot with anything else raises :class:`SnapshotShapeError`. A
  malformed snapshot is a bug in the caller and cannot be repaired here.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

S = TypeVar("S")

StoreListener = Callable[[S, S], None]


class SnapshotShapeError(TypeError):
    """Raised when a collaborator hands the store a value of the wrong type."""


class SnapshotStore(Generic[S]):
    """
    Holder of the current snapshot with synchronous change notification.

    Attributes
    ----------
    _value : S
        The current snapshot.
    _schema : type[S] | None
        Optional type every stored value must be an instance of.
    _listeners : list[StoreListener]
        Callbacks invoked as ``listener(new, old)`` after each replacement.
    """

    __slots__ = ("_value", "_schema", "_listeners")

    def __init__(self, initial: S, *, schema: type[S] | None = None) -> None:
        self._schema = schema
        self._check(initial)
        self._value: S = initial
        self._listeners: list[StoreListener[S]] = []

    def _check(self, value: object) -> None:
        if self._schema is not None and not isinstance(value, self._schema):
            raise SnapshotShapeError(
                f"expected {self._schema.__name__}, got {type(value).__name__}"
            )

    def get(self) -> S:
        """Return the current snapshot."""
        return self._value

    def replace(self, value: S) -> None:
        """
        Replace the current snapshot and notify listeners.

        Parameters
        ----------
        value : S
            The new snapshot. Must be an instance of the configured schema.

        Raises
        ------
        SnapshotShapeError
            If ``value`` does not match the store's schema.
        """
        self._check(value)
        old = self._value
        self._value = value
        for listener in tuple(self._listeners):
            listener(value, old)

    def subscribe(self, listener: StoreListener[S]) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


__all__ = ["SnapshotStore", "SnapshotShapeError", "StoreListener"]
