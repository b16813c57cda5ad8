"""Key events and the global dispatcher every shortcut router listens on.

`KeyEvent` mirrors the parts of a DOM keydown that routers care about: the key
name, modifier state, whether an input-method composition is in progress,
and the ``prevent_default`` / ``stop_propagation`` flags a handler sets.

`KeyDispatcher` stands in for the window-level event target: it calls every
listener in registration order and only stops early when a listener calls
``stop_immediate_propagation``. Routers must not depend on that order; they
consult the priority registry instead.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

KeyListener = Callable[["KeyEvent"], None]


@dataclass
class KeyEvent:
    """A single keydown.

    Parameters
    ----------
    key:
        Key name as reported by the platform (``"z"``, ``"Enter"``, ``"Escape"``...).
    meta, ctrl, shift, alt:
        Modifier state.
    is_composing:
        True while an IME composition session is active; an Enter in that
        state confirms the composition and is not a command.
    """

    key: str
    meta: bool = False
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    is_composing: bool = False
    default_prevented: bool = field(default=False, init=False)
    propagation_stopped: bool = field(default=False, init=False)
    immediate_propagation_stopped: bool = field(default=False, init=False)

    @property
    def command(self) -> bool:
        """True when Cmd (macOS) or Ctrl (elsewhere) is held."""
        return self.meta or self.ctrl

    @property
    def any_modifier(self) -> bool:
        return self.meta or self.ctrl or self.alt

    def matches(self, key: str) -> bool:
        """Case-insensitive key comparison (``"Z"`` with shift matches ``"z"``)."""
        return self.key.lower() == key.lower()

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True

    def stop_immediate_propagation(self) -> None:
        self.propagation_stopped = True
        self.immediate_propagation_stopped = True

    def consume(self) -> None:
        """Mark the event handled: no default action, no other listener runs."""
        self.prevent_default()
        self.stop_immediate_propagation()


class KeyDispatcher:
    """Window-level keydown target shared by all routers."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    def add_listener(self, listener: KeyListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return remove

    def __len__(self) -> int:
        return len(self._listeners)

    def dispatch(self, event: KeyEvent) -> KeyEvent:
        """Deliver ``event`` to every listener and return it."""
        for listener in tuple(self._listeners):
            listener(event)
            if event.immediate_propagation_stopped:
                break
        return event


__all__ = ["KeyDispatcher", "KeyEvent", "KeyListener"]
