"""
Application entry point for the PlotMapper GUI.

``python -m plotmapper.app.main`` (or the ``plotmapper`` console script)
opens the map creator window.
"""

from __future__ import annotations

import sys
from typing import Optional

from PySide6.QtWidgets import QApplication

from plotmapper import APP_NAME
from plotmapper.app.main_window import MainWindow


def _get_or_create_app(argv: Optional[list[str]] = None) -> QApplication:
    """Return the running QApplication or start one for this process."""
    existing_app = QApplication.instance()
    if existing_app is not None:
        return existing_app
    return QApplication(argv if argv is not None else sys.argv)


def main(argv: Optional[list[str]] = None) -> int:
    """Show the main window and return the Qt event loop exit code."""
    app = _get_or_create_app(argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_NAME)
    app.setStyle("Fusion")

    window = MainWindow()
    window.show()

    screen = app.primaryScreen()
    if screen is not None:
        frame = window.frameGeometry()
        frame.moveCenter(screen.availableGeometry().center())
        window.move(frame.topLeft())

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
