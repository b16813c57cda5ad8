"""
Shortcut routers: one keyboard listener per UI surface.

Every router is attached to the same :class:`~planboard.keyboard.events.KeyDispatcher`
and receives every keydown. Before doing anything it asks the
:class:`~planboard.keyboard.priority.PriorityRegistry` for the top surface:

- a surface router reacts only when its own surface is on top;
- the base :class:`UndoRedoRouter` reacts only when nothing is open.

That check, not the order in which routers were attached, decides who owns a
keystroke. A router that handles a key consumes the event
(``prevent_default`` + ``stop_immediate_propagation``), and every router
skips an event that is already stopped. A handler usually closes its own
surface, so a later router would otherwise see a new top surface and react to
the same key.

Bindings
--------
========  =====================================  ===============================
Surface   Keys                                   Effect
========  =====================================  ===============================
palette   Escape / Enter / ArrowUp / ArrowDown   close / run selection / move
history   Escape / Enter / ArrowUp / ArrowDown   close / jump to focused / move
history   Cmd+Backspace, Delete                  clear history (after confirm)
picker    Escape / Enter                         cancel / confirm
modal     Cmd+Enter / Escape                     save / close
none      Cmd+Z, Cmd+Shift+Z, Cmd+Y, Escape      undo, redo, redo, back
========  =====================================  ===============================

Enter pressed during IME composition confirms the composition and is ignored.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

from planboard.core.contracts.board import BoardSnapshot
from planboard.core.state.temporal import TemporalLog
from planboard.history.panel import ConfirmFn, HistoryPanel

from .events import KeyDispatcher, KeyEvent
from .priority import Priority, PriorityRegistry

Action = Callable[[], None]


class ShortcutRouter(ABC):
    """Base class: gate every event on the registry, then :meth:`handle` it."""

    surface: ClassVar[Priority]

    def __init__(self, registry: PriorityRegistry) -> None:
        self._registry = registry
        self._detach: Callable[[], None] | None = None

    def attach(self, dispatcher: KeyDispatcher) -> None:
        """Start listening on ``dispatcher`` (idempotent)."""
        if self._detach is None:
            self._detach = dispatcher.add_listener(self.on_key)

    def detach(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    @property
    def attached(self) -> bool:
        return self._detach is not None

    def on_key(self, event: KeyEvent) -> None:
        if event.propagation_stopped:
            return
        if self._registry.top_priority() is not self.surface:
            return
        if self.handle(event):
            event.consume()

    @abstractmethod
    def handle(self, event: KeyEvent) -> bool:
        """React to ``event``; return True if it was one of this router's keys."""


def _is_enter(event: KeyEvent) -> bool:
    return event.key == "Enter" and not event.is_composing


class PaletteRouter(ShortcutRouter):
    """Command palette: close, run the selected item, move the selection."""

    surface = Priority.PALETTE

    def __init__(
        self,
        registry: PriorityRegistry,
        *,
        on_close: Action,
        on_confirm: Action,
        on_move: Callable[[int], None] | None = None,
    ) -> None:
        super().__init__(registry)
        self._on_close = on_close
        self._on_confirm = on_confirm
        self._on_move = on_move

    def handle(self, event: KeyEvent) -> bool:
        if event.key == "Escape":
            self._on_close()
            return True
        if _is_enter(event):
            self._on_confirm()
            return True
        if self._on_move is not None and event.key in ("ArrowDown", "ArrowUp"):
            self._on_move(1 if event.key == "ArrowDown" else -1)
            return True
        return False


class HistoryRouter(ShortcutRouter):
    """History panel: navigate, jump, close, and confirm-gated clear."""

    surface = Priority.HISTORY

    def __init__(self, registry: PriorityRegistry, *, panel: HistoryPanel, confirm: ConfirmFn) -> None:
        super().__init__(registry)
        self._panel = panel
        self._confirm = confirm

    def handle(self, event: KeyEvent) -> bool:
        if event.key == "Escape":
            self._panel.close()
            return True
        if _is_enter(event):
            self._panel.activate_focused()
            return True
        if event.key in ("ArrowDown", "ArrowUp"):
            self._panel.move_focus(1 if event.key == "ArrowDown" else -1)
            return True
        if (event.command and event.key == "Backspace") or event.key == "Delete":
            self._panel.request_clear(self._confirm)
            return True
        return False


class PickerRouter(ShortcutRouter):
    """Date/time picker: Enter confirms, Escape cancels."""

    surface = Priority.PICKER

    def __init__(self, registry: PriorityRegistry, *, on_confirm: Action, on_cancel: Action) -> None:
        super().__init__(registry)
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel

    def handle(self, event: KeyEvent) -> bool:
        if event.key == "Escape":
            self._on_cancel()
            return True
        if _is_enter(event):
            self._on_confirm()
            return True
        return False


class ModalRouter(ShortcutRouter):
    """Edit modal: Cmd/Ctrl+Enter saves, Escape closes."""

    surface = Priority.MODAL

    def __init__(self, registry: PriorityRegistry, *, on_save: Action, on_close: Action) -> None:
        super().__init__(registry)
        self._on_save = on_save
        self._on_close = on_close

    def handle(self, event: KeyEvent) -> bool:
        if event.command and _is_enter(event):
            self._on_save()
            return True
        if event.key == "Escape":
            self._on_close()
            return True
        return False


class UndoRedoRouter(ShortcutRouter):
    """
    Base-level shortcuts, active only while no surface is open.

    Parameters
    ----------
    log:
        The temporal log to undo/redo.
    on_back:
        Optional navigation callback for a bare Escape (e.g. board → dashboard).
    on_feedback:
        Optional callback receiving ``"Undo"`` / ``"Redo"`` after a step that
        actually moved, for toast-style confirmation.
    """

    surface = Priority.NONE

    def __init__(
        self,
        registry: PriorityRegistry,
        *,
        log: TemporalLog[BoardSnapshot],
        on_back: Action | None = None,
        on_feedback: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(registry)
        self._log = log
        self._on_back = on_back
        self._on_feedback = on_feedback

    def handle(self, event: KeyEvent) -> bool:
        if event.command and not event.alt:
            if event.matches("z") and not event.shift:
                self._step("Undo", self._log.undo())
                return True
            if (event.matches("z") and event.shift) or event.matches("y"):
                self._step("Redo", self._log.redo())
                return True
            return False
        if self._on_back is not None and event.key == "Escape" and not event.any_modifier:
            self._on_back()
            return True
        return False

    def _step(self, label: str, moved: bool) -> None:
        if moved and self._on_feedback is not None:
            self._on_feedback(label)


__all__ = [
    "HistoryRouter",
    "ModalRouter",
    "PaletteRouter",
    "PickerRouter",
    "ShortcutRouter",
    "UndoRedoRouter",
]
