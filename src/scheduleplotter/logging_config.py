"""
Logging Configuration
Sets up the global logger for the application.

Qt prints its own warnings (e.g. unknown colours, platform plugin issues)
through a separate message handler; those are routed into the
'scheduleplotter.qt' logger so they end up next to ours.
"""
import logging
import sys
from typing import Optional

from PySide6.QtCore import QMessageLogContext, QtMsgType, qInstallMessageHandler

QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}

qt_logger = logging.getLogger("scheduleplotter.qt")


def qt_message_handler(mode: QtMsgType, context: QMessageLogContext, message: str) -> None:
    """Forward one Qt message to the 'scheduleplotter.qt' logger."""
    qt_logger.log(QT_LEVELS.get(mode, logging.WARNING), message)


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> None:
    """
    Configures the root logger for the 'scheduleplotter' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger = logging.getLogger("scheduleplotter")
    logger.setLevel(level)

    # Re-running setup (e.g. from a notebook) must not duplicate output
    if logger.hasHandlers():
        logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(formatter)

    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    qInstallMessageHandler(qt_message_handler)
    logger.info("Logging initialized.")
