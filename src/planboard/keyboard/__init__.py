"""Keyboard arbitration: surface priority registry, key events and routers."""

from __future__ import annotations

from .events import KeyDispatcher, KeyEvent
from .priority import Priority, PriorityRegistry, SurfaceFlags, resolve_priority

__all__ = [
    "KeyDispatcher",
    "KeyEvent",
    "Priority",
    "PriorityRegistry",
    "SurfaceFlags",
    "resolve_priority",
]
