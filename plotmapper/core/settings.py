"""User-configurable options persisted between sessions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Protocol

from .paths import default_catalog_path

logger = logging.getLogger(__name__)


class DragPolicy(str, Enum):
    """Which cells a drag gesture may add to the selection."""

    FREE = "free"
    COLUMN_LOCKED = "column_locked"


class ExportGrouping(str, Enum):
    """How populated cells become spreadsheet rows."""

    PER_CELL = "per_cell"
    BY_PLOT_AND_COLUMN = "by_plot_and_column"


class GridOrder(str, Enum):
    """Array layout of the ``grid`` member in map documents using legacy keys."""

    COLUMN_MAJOR = "column_major"
    ROW_MAJOR = "row_major"


@dataclass
class MapSettings:
    column_count: int = 5
    rows_per_column: int = 5
    starting_plot_number: int = 1000
    drag_policy: DragPolicy = DragPolicy.FREE
    export_grouping: ExportGrouping = ExportGrouping.PER_CELL
    legacy_grid_order: GridOrder = GridOrder.COLUMN_MAJOR
    catalog_path: Path = field(default_factory=default_catalog_path)


class SettingsStore(Protocol):
    """Subset of ``QSettings`` used here."""

    def value(self, key: str, defaultValue: Any = None) -> Any:  # noqa: N803
        ...

    def setValue(self, key: str, value: Any) -> None:  # noqa: N802
        ...


_KEY_COLUMNS = "map/columns"
_KEY_ROWS = "map/plants_per_column"
_KEY_START = "map/starting_plot_number"
_KEY_DRAG = "selection/drag_policy"
_KEY_GROUPING = "export/grouping"
_KEY_LEGACY_ORDER = "import/legacy_grid_order"
_KEY_CATALOG = "catalog/path"


def _positive_int(raw: object, default: int, key: str) -> int:
    if raw is None or raw == "":
        return default
    try:
        value = int(float(raw))  # QSettings may hand back strings
    except (TypeError, ValueError):
        logger.warning("Invalid value %r for %s; using %d.", raw, key, default)
        return default
    if value < 1:
        logger.warning("Non-positive value %r for %s; using %d.", raw, key, default)
        return default
    return value


def _enum_value(raw: object, enum_type: type[Enum], default: Enum, key: str) -> Any:
    if raw is None or raw == "":
        return default
    try:
        return enum_type(str(raw))
    except ValueError:
        logger.warning("Unknown option %r for %s; using %s.", raw, key, default.value)
        return default


def load_settings(store: Optional[SettingsStore]) -> MapSettings:
    """Read ``MapSettings`` from ``store``, falling back to defaults per key."""
    defaults = MapSettings()
    if store is None:
        return defaults

    catalog_raw = store.value(_KEY_CATALOG, None)
    catalog_path = Path(str(catalog_raw)) if catalog_raw else defaults.catalog_path

    return MapSettings(
        column_count=_positive_int(
            store.value(_KEY_COLUMNS, None), defaults.column_count, _KEY_COLUMNS
        ),
        rows_per_column=_positive_int(
            store.value(_KEY_ROWS, None), defaults.rows_per_column, _KEY_ROWS
        ),
        starting_plot_number=_positive_int(
            store.value(_KEY_START, None), defaults.starting_plot_number, _KEY_START
        ),
        drag_policy=_enum_value(
            store.value(_KEY_DRAG, None), DragPolicy, defaults.drag_policy, _KEY_DRAG
        ),
        export_grouping=_enum_value(
            store.value(_KEY_GROUPING, None),
            ExportGrouping,
            defaults.export_grouping,
            _KEY_GROUPING,
        ),
        legacy_grid_order=_enum_value(
            store.value(_KEY_LEGACY_ORDER, None),
            GridOrder,
            defaults.legacy_grid_order,
            _KEY_LEGACY_ORDER,
        ),
        catalog_path=catalog_path,
    )


def save_settings(settings: MapSettings, store: SettingsStore) -> None:
    store.setValue(_KEY_COLUMNS, int(settings.column_count))
    store.setValue(_KEY_ROWS, int(settings.rows_per_column))
    store.setValue(_KEY_START, int(settings.starting_plot_number))
    store.setValue(_KEY_DRAG, settings.drag_policy.value)
    store.setValue(_KEY_GROUPING, settings.export_grouping.value)
    store.setValue(_KEY_LEGACY_ORDER, settings.legacy_grid_order.value)
    store.setValue(_KEY_CATALOG, str(settings.catalog_path))
