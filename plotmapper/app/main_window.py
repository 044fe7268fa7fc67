"""Main application window for PlotMapper."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from PySide6.QtCore import QSettings, QTimer
from PySide6.QtGui import QAction, QCloseEvent, QGuiApplication, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog,
    QMainWindow,
    QMessageBox,
    QStackedWidget,
    QStatusBar,
)

from plotmapper import APP_NAME
from plotmapper.app.creator_view import MapCreatorView
from plotmapper.app.viewer_view import MapViewerView
from plotmapper.core.map_manager import (
    DEFAULT_MAP_FILENAME,
    INVALID_FORMAT_MESSAGE,
    MapFileManager,
    MapFormatError,
)
from plotmapper.core.settings import (
    DragPolicy,
    ExportGrouping,
    GridOrder,
    load_settings,
    save_settings,
)
from plotmapper.services.catalog import VIEWER_COLORS, load_genotype_catalog
from plotmapper.services.editor_state import MapEditorState, MapViewState
from plotmapper.services.excel_io import DEFAULT_EXPORT_FILENAME, export_map_xlsx

logger = logging.getLogger(__name__)

JSON_FILTER = "Map files (*.json);;All files (*)"
EXCEL_FILTER = "Excel workbooks (*.xlsx);;All files (*)"
CATALOG_FILTER = "Excel workbooks (*.xlsx *.xls);;All files (*)"


class MainWindow(QMainWindow):
    """Hosts the Map Creator and Map Viewer pages."""

    def __init__(self) -> None:
        super().__init__()
        self.base_title = APP_NAME
        self._settings = QSettings(APP_NAME, APP_NAME)
        self.settings = load_settings(self._settings)

        self.editor_state = MapEditorState(self.settings)
        self.viewer_state = MapViewState(VIEWER_COLORS)
        self.map_manager = MapFileManager(self._on_dirty_changed)
        self.viewer_files = MapFileManager()

        self.setWindowTitle(self.base_title)
        self._apply_initial_geometry()
        self._create_actions()
        self._setup_menu_bar()
        self._setup_central_widget()
        self._setup_status_bar()
        self._update_actions_enabled()

        QTimer.singleShot(0, self._load_catalog)

    def _apply_initial_geometry(self) -> None:
        screen = QGuiApplication.primaryScreen()
        if screen is None:
            self.resize(1100, 750)
            return
        geometry = screen.availableGeometry()
        self.resize(int(geometry.width() * 0.8), int(geometry.height() * 0.8))

    # Actions and menus --------------------------------------------------

    def _create_actions(self) -> None:
        action_specs: List[tuple[str, str, Callable[..., object], str, Optional[QKeySequence]]] = [
            (
                "new_map_action",
                "New Map",
                self._on_new_map,
                "Create an empty map with the configured dimensions.",
                QKeySequence.New,
            ),
            (
                "import_map_action",
                "Import Map...",
                self._on_import_map,
                "Load a map exported as JSON.",
                QKeySequence.Open,
            ),
            (
                "export_map_action",
                "Export Map...",
                self._on_export_map,
                "Save the current map as JSON.",
                QKeySequence.Save,
            ),
            (
                "export_excel_action",
                "Export to Excel...",
                self._on_export_excel,
                "Write plot assignments to an Excel workbook.",
                QKeySequence("Ctrl+E"),
            ),
            (
                "load_catalog_action",
                "Load Genotype List...",
                self._on_choose_catalog,
                "Pick the reference genotype spreadsheet.",
                None,
            ),
            (
                "quit_action",
                "Quit",
                self.close,
                "Close the application.",
                QKeySequence.Quit,
            ),
            (
                "show_creator_action",
                "Map Creator",
                self._show_creator,
                "Switch to the map editor.",
                QKeySequence("Ctrl+1"),
            ),
            (
                "show_viewer_action",
                "Map Viewer",
                self._show_viewer,
                "Switch to the read-only map viewer.",
                QKeySequence("Ctrl+2"),
            ),
        ]
        for attr_name, text, handler, tip, shortcut in action_specs:
            action = QAction(text, self)
            action.setStatusTip(tip)
            if shortcut is not None:
                action.setShortcut(shortcut)
            action.triggered.connect(handler)  # type: ignore[arg-type]
            setattr(self, attr_name, action)

        self.column_lock_action = QAction("Lock Drag to One Column", self)
        self.column_lock_action.setCheckable(True)
        self.column_lock_action.setChecked(
            self.settings.drag_policy is DragPolicy.COLUMN_LOCKED
        )
        self.column_lock_action.toggled.connect(self._on_column_lock_toggled)

        self.grouped_export_action = QAction("Group Excel Rows by Plot", self)
        self.grouped_export_action.setCheckable(True)
        self.grouped_export_action.setChecked(
            self.settings.export_grouping is ExportGrouping.BY_PLOT_AND_COLUMN
        )
        self.grouped_export_action.toggled.connect(self._on_grouped_export_toggled)

        self.legacy_row_major_action = QAction("Legacy Files Are Row-Major", self)
        self.legacy_row_major_action.setCheckable(True)
        self.legacy_row_major_action.setChecked(
            self.settings.legacy_grid_order is GridOrder.ROW_MAJOR
        )
        self.legacy_row_major_action.toggled.connect(self._on_legacy_order_toggled)

    def _setup_menu_bar(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("File")
        file_menu.addAction(self.new_map_action)
        file_menu.addAction(self.import_map_action)
        file_menu.addSeparator()
        file_menu.addAction(self.export_map_action)
        file_menu.addAction(self.export_excel_action)
        file_menu.addSeparator()
        file_menu.addAction(self.load_catalog_action)
        file_menu.addSeparator()
        file_menu.addAction(self.quit_action)

        view_menu = menu_bar.addMenu("View")
        view_menu.addAction(self.show_creator_action)
        view_menu.addAction(self.show_viewer_action)

        options_menu = menu_bar.addMenu("Options")
        options_menu.addAction(self.column_lock_action)
        options_menu.addAction(self.grouped_export_action)
        options_menu.addAction(self.legacy_row_major_action)

    def _setup_central_widget(self) -> None:
        self.creator_view = MapCreatorView(self.editor_state, self)
        self.creator_view.mapChanged.connect(self._on_map_changed)
        self.creator_view.exportJsonRequested.connect(self._on_export_map)
        self.creator_view.exportExcelRequested.connect(self._on_export_excel)
        self.creator_view.importRequested.connect(self._on_import_map)

        self.viewer_view = MapViewerView(self.viewer_state, self)
        self.viewer_view.loadRequested.connect(self._on_viewer_load)

        self.central_stack = QStackedWidget(self)
        self.central_stack.addWidget(self.creator_view)
        self.central_stack.addWidget(self.viewer_view)
        self.central_stack.setCurrentWidget(self.creator_view)
        self.central_stack.currentChanged.connect(lambda _idx: self._update_actions_enabled())
        self.setCentralWidget(self.central_stack)

    def _setup_status_bar(self) -> None:
        status_bar = QStatusBar(self)
        status_bar.showMessage("Ready")
        self.setStatusBar(status_bar)

    def _show_creator(self, checked: bool = False) -> None:  # noqa: ARG002
        self.central_stack.setCurrentWidget(self.creator_view)

    def _show_viewer(self, checked: bool = False) -> None:  # noqa: ARG002
        self.central_stack.setCurrentWidget(self.viewer_view)

    def _in_viewer(self) -> bool:
        return self.central_stack.currentWidget() is self.viewer_view

    # Catalog ------------------------------------------------------------

    def _load_catalog(self) -> None:
        path = self.settings.catalog_path
        editor_token = self.editor_state.begin_catalog_load()
        viewer_token = self.viewer_state.begin_catalog_load()
        records = load_genotype_catalog(path)
        self.editor_state.finish_catalog_load(editor_token, records)
        self.viewer_state.finish_catalog_load(viewer_token, records)
        self.creator_view.refresh()
        self.viewer_view.refresh()
        self.statusBar().showMessage(
            f"{len(records)} genotypes loaded from {Path(path).name}"
            if records
            else "No genotype list loaded.",
            5000,
        )

    def _on_choose_catalog(self, checked: bool = False) -> None:  # noqa: ARG002
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Load genotype list",
            str(self.settings.catalog_path.parent),
            CATALOG_FILTER,
        )
        if not path:
            return
        self.settings.catalog_path = Path(path)
        self._load_catalog()
        self._store_settings()

    # Map lifecycle --------------------------------------------------------

    def _on_new_map(self, checked: bool = False) -> None:  # noqa: ARG002
        if not self._confirm_discard_changes():
            return
        self._show_creator()
        self.creator_view.btn_create.click()

    def _on_map_changed(self) -> None:
        self.map_manager.mark_dirty(True)
        self._update_actions_enabled()

    def _pick_map_file(self, title: str, manager: MapFileManager) -> Optional[Path]:
        start = manager.current_path or Path.cwd()
        path, _ = QFileDialog.getOpenFileName(self, title, str(start), JSON_FILTER)
        return Path(path) if path else None

    def _read_map(self, manager: MapFileManager, path: Path):
        try:
            return manager.load(path, self.settings.legacy_grid_order)
        except MapFormatError as exc:
            logger.error("Failed to import map '%s': %s", path, exc)
            QMessageBox.critical(self, "Import map", INVALID_FORMAT_MESSAGE)
            return None

    def _on_import_map(self, checked: bool = False) -> None:  # noqa: ARG002
        if self._in_viewer():
            self._on_viewer_load()
            return
        if not self._confirm_discard_changes():
            return
        path = self._pick_map_file("Import map", self.map_manager)
        if path is None:
            return
        token = self.editor_state.begin_import()
        grid = self._read_map(self.map_manager, path)
        if grid is None:
            return
        if self.editor_state.finish_import(token, grid):
            self.creator_view.refresh()
            self._update_actions_enabled()
            self._update_window_title()
            self.statusBar().showMessage(f"Map imported: {path.name}", 5000)

    def _on_viewer_load(self) -> None:
        path = self._pick_map_file("Load map JSON", self.viewer_files)
        if path is None:
            return
        token = self.viewer_state.begin_import()
        grid = self._read_map(self.viewer_files, path)
        if grid is None:
            return
        if self.viewer_state.finish_import(token, grid):
            self.viewer_view.refresh()
            self.statusBar().showMessage(f"Map loaded: {path.name}", 5000)

    def _on_export_map(self, checked: bool = False) -> bool:  # noqa: ARG002
        grid = self.editor_state.grid
        if grid is None:
            QMessageBox.information(self, "Export map", "Create or import a map first.")
            return False
        suggested = self.map_manager.current_path or Path.cwd() / DEFAULT_MAP_FILENAME
        path, _ = QFileDialog.getSaveFileName(
            self, "Export map", str(suggested), JSON_FILTER
        )
        if not path:
            return False
        try:
            saved = self.map_manager.save(grid, Path(path))
        except OSError as exc:
            logger.error("Failed to export map: %s", exc, exc_info=True)
            QMessageBox.critical(self, "Export map", f"Could not write the map: {exc}")
            return False
        self._update_window_title()
        self.statusBar().showMessage(f"Map exported: {saved.name}", 5000)
        return True

    def _on_export_excel(self, checked: bool = False) -> bool:  # noqa: ARG002
        grid = self.editor_state.grid
        if grid is None:
            QMessageBox.information(self, "Export to Excel", "Create or import a map first.")
            return False
        base = self.map_manager.current_path
        suggested = (
            base.with_suffix(".xlsx") if base is not None else Path.cwd() / DEFAULT_EXPORT_FILENAME
        )
        path, _ = QFileDialog.getSaveFileName(
            self, "Export to Excel", str(suggested), EXCEL_FILTER
        )
        if not path:
            return False
        try:
            final_path = export_map_xlsx(
                grid,
                self.editor_state.catalog,
                Path(path),
                self.settings.export_grouping,
            )
        except (OSError, ValueError) as exc:
            logger.error("Failed to export workbook: %s", exc, exc_info=True)
            QMessageBox.critical(
                self, "Export to Excel", f"Could not export the workbook: {exc}"
            )
            return False
        self.statusBar().showMessage(f"Workbook exported: {final_path.name}", 5000)
        return True

    # Options --------------------------------------------------------------

    def _on_column_lock_toggled(self, checked: bool) -> None:
        self.settings.drag_policy = DragPolicy.COLUMN_LOCKED if checked else DragPolicy.FREE
        self.editor_state.set_drag_policy(self.settings.drag_policy)

    def _on_grouped_export_toggled(self, checked: bool) -> None:
        self.settings.export_grouping = (
            ExportGrouping.BY_PLOT_AND_COLUMN if checked else ExportGrouping.PER_CELL
        )

    def _on_legacy_order_toggled(self, checked: bool) -> None:
        self.settings.legacy_grid_order = (
            GridOrder.ROW_MAJOR if checked else GridOrder.COLUMN_MAJOR
        )

    # Window state ---------------------------------------------------------

    def _on_dirty_changed(self, is_dirty: bool) -> None:  # noqa: ARG002
        self._update_window_title()

    def _update_actions_enabled(self) -> None:
        has_grid = self.editor_state.has_grid
        in_viewer = self._in_viewer()
        self.export_map_action.setEnabled(has_grid and not in_viewer)
        self.export_excel_action.setEnabled(has_grid and not in_viewer)
        self.new_map_action.setEnabled(not in_viewer)

    def _update_window_title(self) -> None:
        title = self.base_title
        if self.map_manager.current_path:
            title = f"{title} - {self.map_manager.current_path.name}"
        if self.map_manager.is_dirty:
            title = f"{title} *"
        self.setWindowTitle(title)

    def _confirm_discard_changes(self) -> bool:
        if not self.map_manager.is_dirty:
            return True
        response = QMessageBox.question(
            self,
            "Unsaved changes",
            "The current map has unsaved changes. Export it before continuing?",
            QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel,
        )
        if response == QMessageBox.Yes:
            return self._on_export_map()
        return response == QMessageBox.No

    def _store_settings(self) -> None:
        self.settings.column_count = self.creator_view.spin_columns.value()
        self.settings.rows_per_column = self.creator_view.spin_rows.value()
        self.settings.starting_plot_number = self.creator_view.spin_start.value()
        save_settings(self.settings, self._settings)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        if not self._confirm_discard_changes():
            event.ignore()
            return
        self._store_settings()
        super().closeEvent(event)
