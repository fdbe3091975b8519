from __future__ import annotations

import os
import sys

import pyqtgraph as pg
from PySide6.QtCore import QCoreApplication, QSettings
from PySide6.QtWidgets import QApplication

ORG_ID = "scheduleplotter"
APP_ID = "schedule-plotter"

VISIBLE_APP_NAME = "Schedule Plotter"


def create_app(argv: list[str] | None = None) -> QApplication:
    """
    Create and configure the QApplication instance.

    An already running application (e.g. inside an IPython Qt event loop) is
    reused instead of constructing a second one.
    """
    existing = QApplication.instance()
    if existing is not None:
        return existing

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(ORG_ID)
    QCoreApplication.setApplicationName(APP_ID)
    QSettings.setDefaultFormat(QSettings.Format.IniFormat)

    app = QApplication(argv if argv is not None else sys.argv)
    app.setApplicationDisplayName(QCoreApplication.translate("App", VISIBLE_APP_NAME))

    pg.setConfigOption("background", "w")
    pg.setConfigOption("foreground", "k")

    return app
