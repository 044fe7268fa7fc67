"""Map creation page: grid setup, selection and genotype assignment."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QComboBox,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from plotmapper.app.plot_grid_widget import PlotGridWidget
from plotmapper.services.editor_state import MapEditorState

SPIN_MAX = 10_000
PLOT_NUMBER_MAX = 10_000_000


class MapCreatorView(QWidget):
    """Editor page bound to a ``MapEditorState``.

    File actions (export/import) live on the main window; this page emits
    ``exportJsonRequested``/``exportExcelRequested``/``importRequested`` from
    its buttons and ``mapChanged`` after any grid mutation.
    """

    mapChanged = Signal()
    exportJsonRequested = Signal()
    exportExcelRequested = Signal()
    importRequested = Signal()

    def __init__(self, state: MapEditorState, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._setup_ui()
        self.refresh()

    # UI construction ----------------------------------------------------

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        title = QLabel("Experiment Map Planner", self)
        title_font = title.font()
        title_font.setPointSize(title_font.pointSize() + 6)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        layout.addLayout(self._build_controls())

        self.grid_widget = PlotGridWidget(self._state, self, editable=True)
        self.grid_widget.selectionChanged.connect(self._on_selection_changed)
        scroll = QScrollArea(self)
        scroll.setWidget(self.grid_widget)
        scroll.setWidgetResizable(False)
        scroll.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        layout.addWidget(scroll, 1)

        layout.addWidget(self._build_assign_panel())

    def _spin(self, value: int, maximum: int) -> QSpinBox:
        spin = QSpinBox(self)
        spin.setRange(1, maximum)
        spin.setValue(value)
        return spin

    def _build_controls(self) -> QHBoxLayout:
        row = QHBoxLayout()
        row.setSpacing(8)

        self.spin_columns = self._spin(self._state.column_count, SPIN_MAX)
        self.spin_rows = self._spin(self._state.rows_per_column, SPIN_MAX)
        self.spin_start = self._spin(self._state.starting_plot_number, PLOT_NUMBER_MAX)
        self.spin_start.valueChanged.connect(self._on_starting_number_changed)

        for text, widget in (
            ("Columns:", self.spin_columns),
            ("Plants per column:", self.spin_rows),
            ("Starting plot number:", self.spin_start),
        ):
            row.addWidget(QLabel(text, self))
            row.addWidget(widget)

        self.btn_create = QPushButton("Create Map", self)
        self.btn_create.clicked.connect(self._on_create_clicked)
        self.btn_export = QPushButton("Export Map", self)
        self.btn_export.clicked.connect(self.exportJsonRequested)
        self.btn_export_excel = QPushButton("Export to Excel", self)
        self.btn_export_excel.clicked.connect(self.exportExcelRequested)
        self.btn_import = QPushButton("Import Map", self)
        self.btn_import.clicked.connect(self.importRequested)

        for button in (self.btn_create, self.btn_export, self.btn_export_excel, self.btn_import):
            row.addWidget(button)
        row.addStretch()
        return row

    def _build_assign_panel(self) -> QWidget:
        self.assign_panel = QGroupBox("Assign Genotype to Selected Blocks", self)
        layout = QHBoxLayout(self.assign_panel)

        self.cmb_genotype = QComboBox(self.assign_panel)
        self.cmb_genotype.setSizeAdjustPolicy(QComboBox.AdjustToContents)
        self.cmb_genotype.currentIndexChanged.connect(self._on_genotype_changed)
        layout.addWidget(self.cmb_genotype)

        self.btn_approve = QPushButton("Approve", self.assign_panel)
        self.btn_approve.clicked.connect(self._on_approve_clicked)
        layout.addWidget(self.btn_approve)

        self.lbl_next_plot = QLabel(self.assign_panel)
        layout.addWidget(self.lbl_next_plot)
        layout.addStretch()

        self.assign_panel.setVisible(False)
        return self.assign_panel

    # State -> UI ----------------------------------------------------------

    def refresh(self) -> None:
        """Re-sync every widget with the state."""
        has_grid = self._state.has_grid
        for button in (self.btn_export, self.btn_export_excel, self.btn_import):
            button.setEnabled(has_grid)

        for spin, value in (
            (self.spin_columns, self._state.column_count),
            (self.spin_rows, self._state.rows_per_column),
        ):
            spin.blockSignals(True)
            spin.setValue(value)
            spin.blockSignals(False)

        self.populate_genotypes()
        self.grid_widget.refresh()
        self._sync_assign_panel()

    def populate_genotypes(self) -> None:
        self.cmb_genotype.blockSignals(True)
        self.cmb_genotype.clear()
        self.cmb_genotype.addItem("Select genotype", None)
        for record in self._state.catalog:
            self.cmb_genotype.addItem(record.identifier, record.identifier)
        index = 0
        if self._state.genotype_to_assign:
            found = self.cmb_genotype.findData(self._state.genotype_to_assign)
            index = max(found, 0)
        self.cmb_genotype.setCurrentIndex(index)
        self.cmb_genotype.blockSignals(False)

    def _sync_assign_panel(self) -> None:
        has_selection = len(self._state.selection) > 0
        self.assign_panel.setVisible(has_selection)
        self.btn_approve.setEnabled(bool(self._state.genotype_to_assign))
        self.lbl_next_plot.setText(f"Plot number: {self._state.current_plot_number}")
        if not self._state.genotype_to_assign and self.cmb_genotype.currentIndex() != 0:
            self.cmb_genotype.blockSignals(True)
            self.cmb_genotype.setCurrentIndex(0)
            self.cmb_genotype.blockSignals(False)

    # Handlers -------------------------------------------------------------

    def _on_create_clicked(self) -> None:
        self._state.create_grid(self.spin_columns.value(), self.spin_rows.value())
        self.refresh()
        self.mapChanged.emit()

    def _on_starting_number_changed(self, value: int) -> None:
        self._state.set_starting_plot_number(value)
        self._sync_assign_panel()

    def _on_selection_changed(self) -> None:
        self._sync_assign_panel()

    def _on_genotype_changed(self, index: int) -> None:
        identifier = self.cmb_genotype.itemData(index)
        self._state.choose_genotype(identifier if identifier else None)
        self.btn_approve.setEnabled(bool(self._state.genotype_to_assign))

    def _on_approve_clicked(self) -> None:
        if not self._state.confirm_assignment():
            return
        self.grid_widget.update()
        self._sync_assign_panel()
        self.mapChanged.emit()
