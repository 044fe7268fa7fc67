"""Pointer/touch driven cell selection."""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterator, Optional

from plotmapper.core.settings import DragPolicy

Coord = tuple[int, int]


class SelectionMode(Enum):
    IDLE = auto()
    DRAGGING = auto()


class SelectionController:
    """Tracks the selected ``(row, col)`` pairs for the map editor.

    Mouse gestures follow the editor conventions: a plain press starts a new
    drag selection, Shift+press toggles a single cell, and entering cells
    while the button is held extends the selection. Touch taps toggle.
    """

    def __init__(self, policy: DragPolicy = DragPolicy.FREE) -> None:
        self.policy = policy
        self.mode = SelectionMode.IDLE
        self._anchor_col: Optional[int] = None
        # dict keeps insertion order for display and export
        self._cells: dict[Coord, None] = {}

    # Queries ------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Coord]:
        return iter(list(self._cells))

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def contains(self, row: int, col: int) -> bool:
        return (row, col) in self._cells

    def cells(self) -> list[Coord]:
        return list(self._cells)

    @property
    def is_dragging(self) -> bool:
        return self.mode is SelectionMode.DRAGGING

    # Mutations ----------------------------------------------------------

    def clear(self) -> None:
        self._cells.clear()
        self.mode = SelectionMode.IDLE
        self._anchor_col = None

    def toggle(self, row: int, col: int) -> bool:
        """Flip membership of ``(row, col)``; return True when it is now selected."""
        key = (row, col)
        if key in self._cells:
            del self._cells[key]
            return False
        self._cells[key] = None
        return True

    def pointer_down(self, row: int, col: int, additive: bool = False) -> None:
        if additive:
            self.toggle(row, col)
            self.mode = SelectionMode.IDLE
            self._anchor_col = None
            return
        self._cells.clear()
        self._cells[(row, col)] = None
        self._anchor_col = col
        self.mode = SelectionMode.DRAGGING

    def pointer_enter(self, row: int, col: int) -> bool:
        """Extend a drag selection; return True if the cell was added."""
        if self.mode is not SelectionMode.DRAGGING:
            return False
        if self.policy is DragPolicy.COLUMN_LOCKED and col != self._anchor_col:
            return False
        key = (row, col)
        if key in self._cells:
            return False
        self._cells[key] = None
        return True

    def pointer_up(self) -> None:
        self.mode = SelectionMode.IDLE

    def tap(self, row: int, col: int) -> bool:
        """Touch tap: toggle regardless of modifiers, never starts a drag."""
        self.mode = SelectionMode.IDLE
        return self.toggle(row, col)
