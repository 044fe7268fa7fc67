"""Tests for drag/toggle cell selection."""

from __future__ import annotations

from plotmapper.core.settings import DragPolicy
from plotmapper.services.selection import SelectionController, SelectionMode


def test_press_starts_fresh_drag_selection() -> None:
    selection = SelectionController()
    selection.toggle(4, 4)

    selection.pointer_down(0, 0)

    assert selection.cells() == [(0, 0)]
    assert selection.mode is SelectionMode.DRAGGING


def test_drag_extends_selection_until_release() -> None:
    selection = SelectionController()
    selection.pointer_down(0, 0)

    assert selection.pointer_enter(1, 0) is True
    assert selection.pointer_enter(1, 1) is True
    assert selection.pointer_enter(1, 0) is False
    selection.pointer_up()

    assert selection.pointer_enter(2, 2) is False
    assert selection.cells() == [(0, 0), (1, 0), (1, 1)]
    assert not selection.is_dragging


def test_enter_without_press_does_nothing() -> None:
    selection = SelectionController()

    assert selection.pointer_enter(0, 0) is False
    assert len(selection) == 0


def test_shift_press_toggles_without_dragging() -> None:
    selection = SelectionController()
    selection.pointer_down(0, 0)
    selection.pointer_up()

    selection.pointer_down(2, 1, additive=True)
    assert selection.contains(2, 1)
    assert selection.contains(0, 0)
    assert not selection.is_dragging

    selection.pointer_down(2, 1, additive=True)
    assert not selection.contains(2, 1)
    assert selection.pointer_enter(3, 1) is False

    selection.pointer_down(2, 1, additive=True)
    assert selection.contains(2, 1)
    assert selection.contains(0, 0)


def test_column_locked_drag_stays_in_anchor_column() -> None:
    selection = SelectionController(DragPolicy.COLUMN_LOCKED)
    selection.pointer_down(0, 2)

    assert selection.pointer_enter(1, 3) is False
    assert selection.pointer_enter(1, 2) is True
    assert selection.cells() == [(0, 2), (1, 2)]


def test_tap_toggles_single_cell() -> None:
    selection = SelectionController()

    assert selection.tap(1, 1) is True
    assert (1, 1) in selection
    assert selection.tap(1, 1) is False
    assert (1, 1) not in selection
    assert selection.tap(1, 1) is True
    assert (1, 1) in selection
    assert selection.mode is SelectionMode.IDLE


def test_clear_resets_everything() -> None:
    selection = SelectionController()
    selection.pointer_down(0, 0)
    selection.pointer_enter(0, 1)

    selection.clear()

    assert len(selection) == 0
    assert not selection.is_dragging
