"""Excel export of plot assignments."""

from __future__ import annotations

import logging
from collections import OrderedDict
from pathlib import Path
from typing import Sequence

import pandas as pd

from plotmapper.app.models import GenotypeRecord, PlotCell, PlotGrid, lookup_genotype
from plotmapper.core.settings import ExportGrouping

logger = logging.getLogger(__name__)

MAP_SHEET = "Map"
DEFAULT_EXPORT_FILENAME = "experiment_map.xlsx"

COL_PLOT_NUMBER = "Plot number"
COL_COLUMN = "Column"
COL_GENOTYPE = "Genotype"
COL_MALE_DONOR = "Male donor"
COL_FEMALE_RECEPTOR = "Female receptor"
COL_PLANTS_PER_PLOT = "Number of plants per plot"
MAP_HEADER: tuple[str, ...] = (
    COL_PLOT_NUMBER,
    COL_COLUMN,
    COL_GENOTYPE,
    COL_MALE_DONOR,
    COL_FEMALE_RECEPTOR,
    COL_PLANTS_PER_PLOT,
)


def _row_for(
    grid: PlotGrid,
    catalog: Sequence[GenotypeRecord],
    cell: PlotCell,
    plants: int,
) -> dict:
    info = lookup_genotype(grid, catalog, cell.row, cell.col)
    return {
        COL_PLOT_NUMBER: cell.plot_number if cell.plot_number is not None else "",
        COL_COLUMN: cell.col + 1,
        COL_GENOTYPE: cell.genotype,
        COL_MALE_DONOR: info.male_parent if info else "",
        COL_FEMALE_RECEPTOR: info.female_parent if info else "",
        COL_PLANTS_PER_PLOT: plants,
    }


def build_map_rows(
    grid: PlotGrid,
    catalog: Sequence[GenotypeRecord],
    grouping: ExportGrouping = ExportGrouping.PER_CELL,
) -> list[dict]:
    """Flatten populated cells into spreadsheet rows, column-major.

    With ``ExportGrouping.BY_PLOT_AND_COLUMN`` cells sharing a plot number
    within one column collapse into a single row whose plant count is the
    number of cells; the row keeps the position of the group's first cell.
    """
    populated = grid.populated_cells()
    if grouping is ExportGrouping.PER_CELL:
        return [_row_for(grid, catalog, cell, 1) for cell in populated]

    groups: "OrderedDict[tuple[object, int], list[PlotCell]]" = OrderedDict()
    for cell in populated:
        groups.setdefault((cell.plot_number, cell.col), []).append(cell)
    return [
        _row_for(grid, catalog, cells[0], len(cells)) for cells in groups.values()
    ]


def export_map_xlsx(
    grid: PlotGrid,
    catalog: Sequence[GenotypeRecord],
    path: Path,
    grouping: ExportGrouping = ExportGrouping.PER_CELL,
) -> Path:
    """
    Write the plot assignments of ``grid`` into a workbook with a ``Map`` sheet.

    Parameters
    ----------
    grid:
        Grid whose populated cells are exported.
    catalog:
        Genotype list used to fill the parent columns.
    path:
        Target file path. Any suffix other than ``.xlsx`` is replaced.
    grouping:
        One row per cell, or one per (plot number, column) group.

    Returns
    -------
    Path
        The resolved output path written to disk.
    """
    if grid is None:
        raise ValueError("No map to export.")

    output_path = Path(path)
    if output_path.suffix.lower() != ".xlsx":
        output_path = output_path.with_suffix(".xlsx")
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = build_map_rows(grid, catalog, grouping)
    df = pd.DataFrame(rows, columns=list(MAP_HEADER))
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=MAP_SHEET, index=False)

    logger.info(
        "Exported %d rows (%s) to %s.", len(rows), grouping.value, output_path
    )
    return output_path


__all__ = ["MAP_HEADER", "MAP_SHEET", "build_map_rows", "export_map_xlsx"]
