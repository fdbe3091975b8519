"""
Interactive Gantt chart for periodic processor schedules.

    from scheduleplotter import ScheduleView, TaskInstance, plot

    plot(ScheduleView(period=10, tasks=[TaskInstance(2, 3, processor=0, label="A")]))
"""
import os

# pyqtgraph must bind to the same Qt as the widgets
os.environ.setdefault("PYQTGRAPH_QT_LIB", "PySide6")

from scheduleplotter.model import (  # noqa: E402
    ContainerNotFound,
    InvalidSchedule,
    ScheduleChartError,
    ScheduleView,
    TaskInstance,
    ViewWindow,
    load_schedule,
)
from scheduleplotter.view.gantt_chart import GanttChart  # noqa: E402
from scheduleplotter.view.mount import mount  # noqa: E402
from scheduleplotter.main import plot  # noqa: E402

__all__ = [
    "ContainerNotFound",
    "InvalidSchedule",
    "ScheduleChartError",
    "ScheduleView",
    "TaskInstance",
    "ViewWindow",
    "load_schedule",
    "GanttChart",
    "mount",
    "plot",
]
