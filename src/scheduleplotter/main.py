"""
Application Initialization
==========================
Builds the window around a schedule and starts the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Sets up logging.
2. Loads (or receives) the schedule data.
3. Creates the QApplication and the window hosting the chart.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from scheduleplotter.app.application import create_app
from scheduleplotter.config import ChartStyle
from scheduleplotter.logging_config import setup_logging
from scheduleplotter.model.errors import ScheduleChartError
from scheduleplotter.model.io import load_schedule
from scheduleplotter.model.schedule import ScheduleView
from scheduleplotter.view.main_window import ScheduleWindow

logger = logging.getLogger(__name__)


def plot(data: ScheduleView, title: str = "Schedule", style: Optional[ChartStyle] = None) -> int:
    """
    Show a schedule in its own window and block until the window is closed.

    Returns:
        The exit code of the Qt event loop.
    """
    app = create_app()
    window = ScheduleWindow(data, title=title, style=style)
    window.show()
    return app.exec()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="scheduleplotter", description="Show a periodic schedule as a Gantt chart.")
    parser.add_argument("solution", help="JSON file with 'period' or 'throughput' and a 'tasks' list")
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    parser.add_argument("--log-file", default=None, help="also write the log to this file")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    try:
        data = load_schedule(args.solution)
    except (OSError, ScheduleChartError) as e:
        logger.error(f"{e}")
        return 1

    return plot(data, title=args.solution)


if __name__ == "__main__":
    sys.exit(main())
