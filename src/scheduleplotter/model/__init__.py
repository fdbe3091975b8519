"""
The MODEL layer contains pure data structures and validation.
It has NO knowledge of the GUI (Qt) or of pixel coordinates.
"""
from scheduleplotter.model.errors import ScheduleChartError, InvalidSchedule, ContainerNotFound
from scheduleplotter.model.schedule import TaskInstance, ScheduleView, ViewWindow, processors_of
from scheduleplotter.model.io import load_schedule

__all__ = [
    "ScheduleChartError",
    "InvalidSchedule",
    "ContainerNotFound",
    "TaskInstance",
    "ScheduleView",
    "ViewWindow",
    "processors_of",
    "load_schedule",
]
