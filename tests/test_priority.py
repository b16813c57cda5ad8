"""Tests for the surface priority registry."""

from __future__ import annotations

from itertools import product

import pytest

from planboard.keyboard.priority import (
    Priority,
    PriorityRegistry,
    SurfaceFlags,
    resolve_priority,
)


def _expected(palette: bool, history: bool, picker: bool, modal: bool) -> Priority:
    if palette:
        return Priority.PALETTE
    if history:
        return Priority.HISTORY
    if picker:
        return Priority.PICKER
    if modal:
        return Priority.MODAL
    return Priority.NONE


@pytest.mark.parametrize(
    ("palette", "history", "picker", "modal"), list(product([False, True], repeat=4))
)
def test_truth_table(palette: bool, history: bool, picker: bool, modal: bool) -> None:
    flags = SurfaceFlags(palette=palette, history=history, picker=picker, modal=modal)
    assert resolve_priority(flags) is _expected(palette, history, picker, modal)

    registry = PriorityRegistry()
    registry.set_palette_open(palette)
    registry.set_history_open(history)
    registry.set_picker_open(picker)
    registry.set_modal_open(modal)
    assert registry.top_priority() is _expected(palette, history, picker, modal)


def test_closing_the_top_surface_reveals_the_next() -> None:
    registry = PriorityRegistry()
    registry.set_modal_open(True)
    registry.set_picker_open(True)
    assert registry.top_priority() is Priority.PICKER
    registry.set_picker_open(False)
    assert registry.top_priority() is Priority.MODAL
    registry.set_modal_open(False)
    assert registry.top_priority() is Priority.NONE


def test_listeners_fire_only_on_change() -> None:
    registry = PriorityRegistry()
    seen: list[SurfaceFlags] = []
    unsubscribe = registry.subscribe(seen.append)

    registry.set_history_open(True)
    registry.set_history_open(True)
    registry.set_history_open(False)
    assert [f.history for f in seen] == [True, False]

    unsubscribe()
    registry.set_history_open(True)
    assert len(seen) == 2


def test_none_is_not_a_surface() -> None:
    with pytest.raises(ValueError):
        PriorityRegistry().set_open(Priority.NONE, True)


def test_declaration_order_is_precedence() -> None:
    assert [p.value for p in Priority] == [
        "palette",
        "history",
        "picker",
        "modal",
        "none",
    ]
