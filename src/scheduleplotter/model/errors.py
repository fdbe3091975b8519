"""Exceptions raised while mounting a schedule chart."""


class ScheduleChartError(Exception):
    """Base class for all chart errors."""


class InvalidSchedule(ScheduleChartError, ValueError):
    """The schedule cannot be drawn: bad period or a bad task."""


class ContainerNotFound(ScheduleChartError, LookupError):
    """The host widget to mount into does not exist."""
