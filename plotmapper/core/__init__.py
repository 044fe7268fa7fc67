"""Core helpers for PlotMapper."""

from .paths import (
    CATALOG_FILENAME,
    default_catalog_path,
    is_frozen,
    package_root,
    resource_path,
)
from .settings import (
    DragPolicy,
    ExportGrouping,
    GridOrder,
    MapSettings,
    load_settings,
    save_settings,
)

__all__ = [
    "CATALOG_FILENAME",
    "DragPolicy",
    "ExportGrouping",
    "GridOrder",
    "MapSettings",
    "default_catalog_path",
    "is_frozen",
    "load_settings",
    "package_root",
    "resource_path",
    "save_settings",
]
