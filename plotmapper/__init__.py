"""PlotMapper package root."""

from .core.paths import is_frozen, package_root, resource_path

APP_NAME = "PlotMapper"
__version__ = "0.1.0"

__all__ = [
    "package_root",
    "resource_path",
    "is_frozen",
    "APP_NAME",
    "__version__",
]
