"""Resolve bundled resources in development checkouts and frozen builds."""

from __future__ import annotations

from pathlib import Path
from typing import Union
import sys

Pathish = Union[str, "Path"]

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent
CATALOG_FILENAME = "Germplasm.xlsx"


def is_frozen() -> bool:
    """Return True when running from a PyInstaller-built executable."""
    return bool(getattr(sys, "frozen", False))


def package_root() -> Path:
    """Return the root directory of the ``plotmapper`` package."""
    if is_frozen():
        base = getattr(sys, "_MEIPASS", None)
        if base is not None:
            return Path(base) / "plotmapper"
    return _PACKAGE_ROOT


def resource_path(*relative_parts: Pathish) -> Path:
    """
    Build a path below ``plotmapper/resources``.

    Parameters
    ----------
    relative_parts:
        Path components relative to the resources directory.
    """
    root = package_root() / "resources"
    for part in relative_parts:
        root = root / part
    return root


def default_catalog_path() -> Path:
    """Location of the reference genotype spreadsheet shipped with the app."""
    return resource_path(CATALOG_FILENAME)
