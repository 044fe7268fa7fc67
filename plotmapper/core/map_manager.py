"""Map file management: JSON export/import of plot grids."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from plotmapper.app.models import PlotCell, PlotGrid
from plotmapper.core.settings import GridOrder

logger = logging.getLogger(__name__)

DEFAULT_MAP_FILENAME = "experiment_map.json"
INVALID_FORMAT_MESSAGE = "Invalid file format."


class MapFormatError(ValueError):
    """Raised when a map document cannot be turned into a grid."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(INVALID_FORMAT_MESSAGE if not detail else f"{INVALID_FORMAT_MESSAGE} {detail}")


def serialize_map(grid: PlotGrid) -> dict:
    return {
        "columns": grid.column_count,
        "plantsPerColumn": grid.rows_per_column,
        "grid": grid.to_list(),
    }


def _dimension(data: dict, *keys: str) -> int:
    for key in keys:
        raw = data.get(key)
        if raw:
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise MapFormatError(f"'{key}' must be a number.")
            if isinstance(raw, float) and not raw.is_integer():
                raise MapFormatError(f"'{key}' must be a whole number.")
            return int(raw)
    raise MapFormatError(f"Missing '{keys[0]}'.")


def parse_map_document(
    data: object,
    legacy_order: GridOrder = GridOrder.COLUMN_MAJOR,
) -> PlotGrid:
    """Build a ``PlotGrid`` from a decoded map document.

    ``columns``/``plantsPerColumn`` are read first; older files written with
    ``rows``/``plantsPerRow`` are accepted too. For those legacy files
    ``legacy_order`` tells whether the ``grid`` array is already column-major
    or holds ``rows`` lists of ``plantsPerRow`` cells that must be transposed.
    """
    if not isinstance(data, dict):
        raise MapFormatError("Top-level value must be an object.")

    legacy = "columns" not in data and "rows" in data
    column_count = _dimension(data, "columns", "rows")
    rows_per_column = _dimension(data, "plantsPerColumn", "plantsPerRow")

    raw_grid = data.get("grid")
    if not raw_grid or not isinstance(raw_grid, list):
        raise MapFormatError("Missing 'grid'.")
    if not all(isinstance(line, list) for line in raw_grid):
        raise MapFormatError("'grid' must be a list of lists.")

    if legacy and legacy_order is GridOrder.ROW_MAJOR:
        raw_grid = [list(column) for column in zip(*raw_grid)]
        column_count, rows_per_column = rows_per_column, column_count

    try:
        columns = [[PlotCell.from_dict(item) for item in line] for line in raw_grid]
    except ValueError as exc:
        raise MapFormatError(str(exc)) from exc

    grid = PlotGrid(columns=columns)
    if grid.column_count != column_count or grid.rows_per_column != rows_per_column:
        raise MapFormatError(
            f"Grid is {grid.column_count}x{grid.rows_per_column} but the header "
            f"declares {column_count}x{rows_per_column}."
        )
    try:
        grid.validate()
    except ValueError as exc:
        raise MapFormatError(str(exc)) from exc
    return grid


def dump_map_json(grid: PlotGrid) -> str:
    return json.dumps(serialize_map(grid), indent=2)


def load_map_json(
    text: str,
    legacy_order: GridOrder = GridOrder.COLUMN_MAJOR,
) -> PlotGrid:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MapFormatError(f"Not valid JSON ({exc.msg}).") from exc
    return parse_map_document(data, legacy_order)


class MapFileManager:
    """Handle saving and loading of map JSON files."""

    def __init__(
        self, dirty_callback: Optional[Callable[[bool], None]] = None
    ) -> None:
        self.current_path: Optional[Path] = None
        self.is_dirty: bool = False
        self._dirty_callback = dirty_callback

    # Dirty state ------------------------------------------------------

    def mark_dirty(self, value: bool = True) -> None:
        if self.is_dirty == value:
            return
        self.is_dirty = value
        if self._dirty_callback:
            self._dirty_callback(self.is_dirty)

    # Save / load ------------------------------------------------------

    def save(self, grid: PlotGrid, path: Optional[Path] = None) -> Path:
        if path is not None:
            self.current_path = Path(path)
        if self.current_path is None:
            raise ValueError("No map file selected for saving.")
        if self.current_path.suffix.lower() != ".json":
            self.current_path = self.current_path.with_suffix(".json")

        self.current_path.parent.mkdir(parents=True, exist_ok=True)
        with self.current_path.open("w", encoding="utf-8") as handle:
            handle.write(dump_map_json(grid))

        logger.info(
            "Map saved to %s (%dx%d).",
            self.current_path,
            grid.column_count,
            grid.rows_per_column,
        )
        self.mark_dirty(False)
        return self.current_path

    def load(
        self,
        path: Path,
        legacy_order: GridOrder = GridOrder.COLUMN_MAJOR,
    ) -> PlotGrid:
        """Read ``path`` into a grid; on failure nothing here changes."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise MapFormatError(f"Could not read '{path.name}': {exc}") from exc

        grid = load_map_json(text, legacy_order)
        logger.info(
            "Map loaded from %s (%dx%d, %d assigned cells).",
            path,
            grid.column_count,
            grid.rows_per_column,
            len(grid.populated_cells()),
        )
        self.current_path = path
        self.mark_dirty(False)
        return grid
