"""Attaching a Gantt chart to an existing host widget."""
from __future__ import annotations

import logging
from typing import Optional, Union

from PySide6.QtWidgets import QApplication, QVBoxLayout, QWidget

from scheduleplotter.config import ChartStyle
from scheduleplotter.model.errors import ContainerNotFound, ScheduleChartError
from scheduleplotter.model.schedule import ScheduleView
from scheduleplotter.view.gantt_chart import GanttChart, validate_colors

logger = logging.getLogger(__name__)


def find_container(selector: str) -> QWidget:
    """
    Find a widget by its objectName among all top-level widgets and their children.

    A leading '#' is accepted, so "#chart" and "chart" name the same widget.

    Raises:
        ContainerNotFound: If no QApplication runs or no widget has that name.
    """
    name = selector[1:] if selector.startswith("#") else selector
    if QApplication.instance() is None:
        raise ContainerNotFound(f"Cannot look up '{selector}': no QApplication is running.")

    for top in QApplication.topLevelWidgets():
        if top.objectName() == name:
            return top
        found = top.findChild(QWidget, name)
        if found is not None:
            return found
    raise ContainerNotFound(f"No widget named '{name}' exists.")


def mount(
    container: Union[str, QWidget],
    data: ScheduleView,
    style: Optional[ChartStyle] = None
) -> GanttChart:
    """
    Validate the schedule and render it as a Gantt chart inside `container`.

    Args:
        container: The host widget, or its objectName.
        data: The schedule to show.
        style: Optional visual parameters.

    Returns:
        The chart; call `unmount()` on it to release its listeners.

    Raises:
        InvalidSchedule: If the period, a task or a colour is invalid.
        ContainerNotFound: If the host widget does not exist.
    """
    try:
        data.validate()
        validate_colors(data)
        host = find_container(container) if isinstance(container, str) else container
    except ScheduleChartError as e:
        logger.error(f"Cannot mount schedule chart: {e}")
        raise

    chart = GanttChart(data, style, parent=host)
    layout = host.layout()
    if layout is None:
        layout = QVBoxLayout(host)
        layout.setContentsMargins(0, 0, 0, 0)
    layout.addWidget(chart)

    logger.info(
        f"Mounted schedule chart: period {data.period:g}, "
        f"{len(data.tasks)} tasks on {len(chart.scales.processor)} processors."
    )
    return chart
