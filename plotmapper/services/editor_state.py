"""Mutable application state shared by the map editor and viewer."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from plotmapper.app.models import GenotypeRecord, PlotGrid, lookup_genotype
from plotmapper.core.settings import DragPolicy, MapSettings
from plotmapper.services.catalog import DISTINCT_COLORS, assign_display_colors
from plotmapper.services.selection import SelectionController

logger = logging.getLogger(__name__)


class MapViewState:
    """Catalog and grid of a read-only map view."""

    def __init__(self, palette: Sequence[str] = DISTINCT_COLORS) -> None:
        self.palette: tuple[str, ...] = tuple(palette)
        self.catalog: list[GenotypeRecord] = []
        self.grid: Optional[PlotGrid] = None
        self._catalog_token = 0
        self._import_token = 0

    # Catalog ------------------------------------------------------------

    def set_catalog(self, records: Iterable[GenotypeRecord]) -> None:
        self.catalog = assign_display_colors(records, self.palette)

    def begin_catalog_load(self) -> int:
        self._catalog_token += 1
        return self._catalog_token

    def finish_catalog_load(self, token: int, records: Iterable[GenotypeRecord]) -> bool:
        """Apply a completed load unless a newer one was started since."""
        if token != self._catalog_token:
            logger.debug("Discarding stale catalog load %d (latest %d).", token, self._catalog_token)
            return False
        self.set_catalog(records)
        return True

    def find_genotype(self, identifier: str) -> Optional[GenotypeRecord]:
        wanted = str(identifier)
        return next((g for g in self.catalog if str(g.identifier) == wanted), None)

    # Grid -----------------------------------------------------------------

    @property
    def has_grid(self) -> bool:
        return self.grid is not None

    def replace_grid(self, grid: PlotGrid) -> None:
        self.grid = grid

    def begin_import(self) -> int:
        self._import_token += 1
        return self._import_token

    def finish_import(self, token: int, grid: PlotGrid) -> bool:
        if token != self._import_token:
            logger.debug("Discarding stale import %d (latest %d).", token, self._import_token)
            return False
        self.replace_grid(grid)
        return True

    def lookup(self, row: int, col: int) -> Optional[GenotypeRecord]:
        return lookup_genotype(self.grid, self.catalog, row, col)

    def tooltip_lines(self, row: int, col: int) -> list[str]:
        record = self.lookup(row, col)
        if record is None:
            return []
        lines = [
            f"Genotype: {record.identifier}",
            f"Male donor: {record.male_parent}",
            f"Female receptor: {record.female_parent}",
        ]
        cell = self.grid.cell(row, col) if self.grid is not None else None
        if cell is not None and cell.plot_number is not None:
            lines.append(f"Plot number: {cell.plot_number}")
        return lines


class MapEditorState(MapViewState):
    """Adds selection, plot numbering and assignment on top of ``MapViewState``."""

    def __init__(
        self,
        settings: Optional[MapSettings] = None,
        palette: Sequence[str] = DISTINCT_COLORS,
    ) -> None:
        super().__init__(palette)
        settings = settings or MapSettings()
        self.selection = SelectionController(settings.drag_policy)
        self.column_count = settings.column_count
        self.rows_per_column = settings.rows_per_column
        self.starting_plot_number = settings.starting_plot_number
        self.current_plot_number = settings.starting_plot_number
        self.genotype_to_assign: Optional[str] = None

    def set_catalog(self, records: Iterable[GenotypeRecord]) -> None:
        super().set_catalog(records)
        if self.genotype_to_assign and self.find_genotype(self.genotype_to_assign) is None:
            self.genotype_to_assign = None

    # Grid -----------------------------------------------------------------

    def set_dimensions(self, column_count: int, rows_per_column: int) -> None:
        self.column_count = int(column_count)
        self.rows_per_column = int(rows_per_column)

    def create_grid(
        self,
        column_count: Optional[int] = None,
        rows_per_column: Optional[int] = None,
    ) -> PlotGrid:
        if column_count is not None and rows_per_column is not None:
            self.set_dimensions(column_count, rows_per_column)
        self.grid = PlotGrid.create(self.column_count, self.rows_per_column)
        self.selection.clear()
        self.genotype_to_assign = None
        self.current_plot_number = self.starting_plot_number
        logger.info("Created %dx%d map.", self.column_count, self.rows_per_column)
        return self.grid

    def replace_grid(self, grid: PlotGrid) -> None:
        """Swap in an imported grid; the plot counter is left untouched."""
        super().replace_grid(grid)
        self.column_count = grid.column_count
        self.rows_per_column = grid.rows_per_column
        self.selection.clear()

    # Plot numbering and assignment ---------------------------------------

    def set_drag_policy(self, policy: DragPolicy) -> None:
        self.selection.policy = policy

    def set_starting_plot_number(self, value: int) -> None:
        self.starting_plot_number = int(value)
        self.current_plot_number = self.starting_plot_number

    def choose_genotype(self, identifier: Optional[str]) -> None:
        self.genotype_to_assign = identifier or None

    def confirm_assignment(self) -> bool:
        """Assign the chosen genotype and current plot number to the selection."""
        if not self.genotype_to_assign or self.grid is None or not len(self.selection):
            return False
        plot_number = self.current_plot_number
        updated = self.grid.assign(
            self.selection.cells(), self.genotype_to_assign, plot_number
        )
        logger.info(
            "Assigned genotype '%s' / plot %d to %d cells.",
            self.genotype_to_assign,
            plot_number,
            updated,
        )
        self.selection.clear()
        self.genotype_to_assign = None
        self.current_plot_number = plot_number + 1
        return True
