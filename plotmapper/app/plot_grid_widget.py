"""Painted plot grid with drag selection and genotype tooltips."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QEvent, QPoint, QRect, QSize, Qt, Signal
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QToolTip, QWidget

from plotmapper.services.editor_state import MapViewState

CELL_SIZE = 30
CELL_GAP = 4
MARGIN = 10
AXIS_SIZE = 26

COLOR_EMPTY = QColor("#f9f9f9")
COLOR_SELECTED = QColor("#b3e5fc")
COLOR_BORDER = QColor("#888888")
COLOR_AXIS_TEXT = QColor(33, 37, 41)


def _text_color_for(base: QColor) -> QColor:
    luminance = 0.299 * base.red() + 0.587 * base.green() + 0.114 * base.blue()
    return QColor(248, 249, 250) if luminance < 150 else QColor(33, 37, 41)


def _axis_label(number: int) -> str:
    """Only the first index and every fifth one get a label."""
    return str(number) if number == 1 or number % 5 == 0 else ""


class PlotGridWidget(QWidget):
    """Renders a ``PlotGrid`` column by column.

    When ``editable`` is set the widget drives the state's selection
    controller: press starts a drag, Shift+press toggles, entering cells with
    the button held extends the drag, and touch taps toggle single cells.
    """

    selectionChanged = Signal()

    def __init__(
        self,
        state: MapViewState,
        parent: QWidget | None = None,
        *,
        editable: bool = True,
        bottom_up: bool = False,
        show_axis_labels: bool = False,
    ) -> None:
        super().__init__(parent)
        self._state = state
        self._editable = editable
        self._bottom_up = bottom_up
        self._show_axis = show_axis_labels
        self._hovered: Optional[tuple[int, int]] = None

        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents, editable)
        self.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)

    # Geometry -----------------------------------------------------------

    def _dimensions(self) -> tuple[int, int]:
        grid = self._state.grid
        if grid is None:
            return 0, 0
        return grid.column_count, grid.rows_per_column

    def _origin(self) -> QPoint:
        offset = MARGIN + (AXIS_SIZE if self._show_axis else 0)
        return QPoint(offset, offset)

    def sizeHint(self) -> QSize:  # noqa: N802
        columns, rows = self._dimensions()
        pitch = CELL_SIZE + CELL_GAP
        extra = 2 * (MARGIN + (AXIS_SIZE if self._show_axis else 0))
        return QSize(columns * pitch + extra, rows * pitch + extra)

    def minimumSizeHint(self) -> QSize:  # noqa: N802
        return self.sizeHint()

    def _display_row(self, row: int) -> int:
        _, rows = self._dimensions()
        return rows - 1 - row if self._bottom_up else row

    def cell_rect(self, row: int, col: int) -> QRect:
        origin = self._origin()
        pitch = CELL_SIZE + CELL_GAP
        x = origin.x() + col * pitch + CELL_GAP // 2
        y = origin.y() + self._display_row(row) * pitch + CELL_GAP // 2
        return QRect(x, y, CELL_SIZE, CELL_SIZE)

    def cell_at(self, pos: QPoint) -> Optional[tuple[int, int]]:
        """Return ``(row, col)`` under ``pos`` or ``None``."""
        columns, rows = self._dimensions()
        if not columns or not rows:
            return None
        origin = self._origin()
        pitch = CELL_SIZE + CELL_GAP
        dx = pos.x() - origin.x()
        dy = pos.y() - origin.y()
        if dx < 0 or dy < 0:
            return None
        col = dx // pitch
        display_row = dy // pitch
        if col >= columns or display_row >= rows:
            return None
        row = rows - 1 - display_row if self._bottom_up else display_row
        if not self.cell_rect(row, col).contains(pos):
            return None  # in the gap between cells
        return row, col

    def refresh(self) -> None:
        self.updateGeometry()
        self.adjustSize()
        self.update()

    # Painting -----------------------------------------------------------

    def paintEvent(self, event) -> None:  # noqa: N802
        grid = self._state.grid
        if grid is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        font = QFont(self.font())
        font.setBold(True)
        font.setPointSize(8)
        painter.setFont(font)

        selection = getattr(self._state, "selection", None)
        for cell in grid.iter_cells():
            rect = self.cell_rect(cell.row, cell.col)
            if not rect.intersects(event.rect()):
                continue
            if selection is not None and selection.contains(cell.row, cell.col):
                fill = COLOR_SELECTED
            else:
                record = self._state.lookup(cell.row, cell.col)
                fill = QColor(record.display_color) if record and record.display_color else COLOR_EMPTY
            painter.fillRect(rect, fill)
            painter.setPen(QPen(COLOR_BORDER, 1))
            painter.drawRect(rect.adjusted(0, 0, -1, -1))
            if cell.plot_number is not None:
                painter.setPen(_text_color_for(fill))
                painter.drawText(rect, Qt.AlignCenter, str(cell.plot_number))

        if self._show_axis:
            self._paint_axis_labels(painter)
        painter.end()

    def _paint_axis_labels(self, painter: QPainter) -> None:
        columns, rows = self._dimensions()
        painter.setPen(COLOR_AXIS_TEXT)
        font = QFont("Monospace", 8)
        font.setBold(True)
        font.setStyleHint(QFont.TypeWriter)
        painter.setFont(font)

        origin = self._origin()
        pitch = CELL_SIZE + CELL_GAP
        for col in range(columns):
            text = _axis_label(col + 1)
            if not text:
                continue
            x = origin.x() + col * pitch + CELL_GAP // 2
            painter.drawText(
                QRect(x, origin.y() - AXIS_SIZE, CELL_SIZE, AXIS_SIZE), Qt.AlignCenter, text
            )
            painter.drawText(
                QRect(x, origin.y() + rows * pitch, CELL_SIZE, AXIS_SIZE), Qt.AlignCenter, text
            )

        for row in range(rows):
            text = _axis_label(row + 1)
            if not text:
                continue
            first = self.cell_rect(row, 0)
            last = self.cell_rect(row, columns - 1)
            painter.drawText(
                QRect(first.x() - AXIS_SIZE, first.y(), AXIS_SIZE, CELL_SIZE),
                Qt.AlignCenter,
                text,
            )
            painter.drawText(
                QRect(last.right() + 1, last.y(), AXIS_SIZE, CELL_SIZE),
                Qt.AlignCenter,
                text,
            )

    # Tooltips -----------------------------------------------------------

    def _update_hover(self, cell: Optional[tuple[int, int]], global_pos: QPoint) -> None:
        if cell == self._hovered:
            return
        self._hovered = cell
        if cell is None:
            QToolTip.hideText()
            return
        lines = self._state.tooltip_lines(*cell)
        if not lines:
            QToolTip.hideText()
            return
        QToolTip.showText(global_pos, "\n".join(lines), self, self.cell_rect(*cell))

    def leaveEvent(self, event) -> None:  # noqa: N802
        self._hovered = None
        QToolTip.hideText()
        super().leaveEvent(event)

    # Mouse / touch --------------------------------------------------------

    def _selection(self):
        if not self._editable:
            return None
        return getattr(self._state, "selection", None)

    def mousePressEvent(self, event) -> None:  # noqa: N802
        selection = self._selection()
        if selection is None or event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        cell = self.cell_at(event.position().toPoint())
        if cell is None:
            super().mousePressEvent(event)
            return
        additive = bool(event.modifiers() & Qt.ShiftModifier)
        selection.pointer_down(*cell, additive=additive)
        self.update()
        self.selectionChanged.emit()
        event.accept()

    def mouseMoveEvent(self, event) -> None:  # noqa: N802
        pos = event.position().toPoint()
        cell = self.cell_at(pos)
        self._update_hover(cell, event.globalPosition().toPoint())

        selection = self._selection()
        if selection is not None and cell is not None and selection.is_dragging:
            if selection.pointer_enter(*cell):
                self.update()
                self.selectionChanged.emit()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:  # noqa: N802
        # The press grabbed the mouse, so releases outside the grid land here too.
        selection = self._selection()
        if selection is not None and event.button() == Qt.LeftButton:
            selection.pointer_up()
        super().mouseReleaseEvent(event)

    def event(self, event: QEvent) -> bool:
        if event.type() in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd):
            return self._handle_touch(event)
        return super().event(event)

    def _handle_touch(self, event) -> bool:
        selection = self._selection()
        if selection is None:
            return False
        # Accepting TouchBegin stops Qt from synthesizing mouse presses.
        event.accept()
        if event.type() != QEvent.TouchEnd:
            return True
        points = event.points()
        if len(points) != 1:
            return True
        cell = self.cell_at(points[0].position().toPoint())
        if cell is not None:
            selection.tap(*cell)
            self.update()
            self.selectionChanged.emit()
        return True
