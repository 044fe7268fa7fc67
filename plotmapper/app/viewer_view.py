"""Read-only page rendering an imported map."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from plotmapper.app.plot_grid_widget import PlotGridWidget
from plotmapper.services.editor_state import MapViewState


class MapViewerView(QWidget):
    """Shows a map bottom-up with row/column numbers and hover details."""

    loadRequested = Signal()

    def __init__(self, state: MapViewState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._setup_ui()
        self.refresh()

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        title = QLabel("Map Viewer", self)
        title_font = title.font()
        title_font.setPointSize(title_font.pointSize() + 6)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        row = QHBoxLayout()
        self.btn_load = QPushButton("Load Map JSON", self)
        self.btn_load.clicked.connect(self.loadRequested)
        row.addWidget(self.btn_load)
        self.lbl_summary = QLabel(self)
        row.addWidget(self.lbl_summary)
        row.addStretch()
        layout.addLayout(row)

        self.grid_widget = PlotGridWidget(
            self._state,
            self,
            editable=False,
            bottom_up=True,
            show_axis_labels=True,
        )
        scroll = QScrollArea(self)
        scroll.setWidget(self.grid_widget)
        scroll.setWidgetResizable(False)
        scroll.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        layout.addWidget(scroll, 1)

    def refresh(self) -> None:
        grid = self._state.grid
        if grid is None:
            self.lbl_summary.setText("No map loaded.")
            self.grid_widget.setVisible(False)
        else:
            plots = grid.plot_numbers()
            self.lbl_summary.setText(
                f"{grid.column_count} columns x {grid.rows_per_column} plants, "
                f"{len(plots)} plots"
            )
            self.grid_widget.setVisible(True)
        self.grid_widget.refresh()
