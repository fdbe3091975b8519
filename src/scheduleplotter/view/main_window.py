"""
Schedule Window
===============
A minimal top-level window hosting one Gantt chart.

Why is this file needed?
------------------------
1. Hosting: `mount()` needs an existing container; this window provides one
   (the central widget, named `CONTAINER_NAME`).
2. Feedback: The status bar shows the visible time window while panning.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QLabel, QMainWindow, QStatusBar, QVBoxLayout, QWidget

from scheduleplotter.config import ChartStyle
from scheduleplotter.model.schedule import ScheduleView
from scheduleplotter.view.gantt_chart import GanttChart
from scheduleplotter.view.mount import mount

CONTAINER_NAME = "schedule-chart"


class ScheduleWindow(QMainWindow):
    def __init__(self, data: ScheduleView, title: str = "Schedule", style: Optional[ChartStyle] = None) -> None:
        super().__init__()
        self.setWindowTitle(title)
        self.resize(900, 220)

        # --- CONTAINER ---
        container = QWidget()
        container.setObjectName(CONTAINER_NAME)
        layout = QVBoxLayout(container)
        layout.setContentsMargins(0, 0, 0, 0)
        self.setCentralWidget(container)

        # --- STATUS ---
        self.window_label = QLabel()
        status = QStatusBar()
        status.addPermanentWidget(self.window_label)
        self.setStatusBar(status)

        self.chart: GanttChart = mount(container, data, style)
        self.chart.controller.window_changed.connect(self.on_window_changed)
        self.on_window_changed(self.chart.scales.window.offset)

    def on_window_changed(self, offset: float) -> None:
        width = self.chart.scales.window.width
        self.window_label.setText(f"t = [{offset:.4g}, {offset + width:.4g})")

    def closeEvent(self, event) -> None:
        self.chart.controller.teardown()
        super().closeEvent(event)
