"""
Surface priority: which open overlay owns the keyboard.

Several overlays can be open at the same time (a date picker inside an edit
modal, the command palette over the history panel...). Every shortcut router
asks the registry who is on top before reacting, so exactly one of them
handles a given keystroke.

Precedence, highest first::

    palette > history > picker > modal > none

The registry does not enforce mutual exclusion; any combination of flags is
legal and only the reading order matters. The ordering lives in the
:class:`Priority` enum and the pure :func:`resolve_priority` function so the
full truth table can be tested without any UI.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum


class Priority(str, Enum):
    """Keyboard owners in descending precedence (declaration order)."""

    PALETTE = "palette"
    HISTORY = "history"
    PICKER = "picker"
    MODAL = "modal"
    NONE = "none"


_ORDER: tuple[Priority, ...] = tuple(Priority)


@dataclass(frozen=True, slots=True)
class SurfaceFlags:
    """Immutable set of "is open" flags, one per overlay surface."""

    palette: bool = False
    history: bool = False
    picker: bool = False
    modal: bool = False

    def is_open(self, surface: Priority) -> bool:
        if surface is Priority.NONE:
            return False
        return bool(getattr(self, surface.value))


def resolve_priority(flags: SurfaceFlags) -> Priority:
    """Return the highest-precedence open surface, or ``Priority.NONE``."""
    for surface in _ORDER:
        if flags.is_open(surface):
            return surface
    return Priority.NONE


FlagsListener = Callable[[SurfaceFlags], None]


class PriorityRegistry:
    """
    Process-wide "which surface is open" state.

    One instance is created by the workspace and handed to every surface and
    router; there is no module-level global.
    """

    def __init__(self) -> None:
        self._flags = SurfaceFlags()
        self._listeners: list[FlagsListener] = []

    @property
    def flags(self) -> SurfaceFlags:
        return self._flags

    def set_open(self, surface: Priority, is_open: bool) -> None:
        """Set the flag for ``surface``; listeners fire only on a real change."""
        if surface is Priority.NONE:
            raise ValueError("'none' is not a surface")
        updated = replace(self._flags, **{surface.value: bool(is_open)})
        if updated == self._flags:
            return
        self._flags = updated
        for listener in tuple(self._listeners):
            listener(updated)

    def set_palette_open(self, is_open: bool) -> None:
        self.set_open(Priority.PALETTE, is_open)

    def set_history_open(self, is_open: bool) -> None:
        self.set_open(Priority.HISTORY, is_open)

    def set_picker_open(self, is_open: bool) -> None:
        self.set_open(Priority.PICKER, is_open)

    def set_modal_open(self, is_open: bool) -> None:
        self.set_open(Priority.MODAL, is_open)

    def top_priority(self) -> Priority:
        """Return the surface that currently owns the keyboard."""
        return resolve_priority(self._flags)

    def subscribe(self, listener: FlagsListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe


__all__ = ["FlagsListener", "Priority", "PriorityRegistry", "SurfaceFlags", "resolve_priority"]
