"""
Gantt Chart Widget
==================
Draws a periodic schedule as horizontal bars, one row per processor.

The widget is a QGraphicsView whose scene coordinates are the widget's pixel
coordinates, so the marks computed by the RenderEngine can be applied to the
scene items without any further transform.
"""
from __future__ import annotations

import logging
from typing import Hashable, Optional

import pyqtgraph as pg
from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QFrame, QGraphicsItem, QGraphicsRectItem, QGraphicsScene, QGraphicsView, QSizePolicy, QWidget

from scheduleplotter.config import DEFAULT_STYLE, ChartStyle
from scheduleplotter.controller.interaction import InteractionController, PixelRanges
from scheduleplotter.controller.render import Mark, RenderEngine, RenderResult
from scheduleplotter.controller.scales import ScaleManager
from scheduleplotter.model.errors import InvalidSchedule
from scheduleplotter.model.schedule import ScheduleView
from scheduleplotter.view.axes import AxisManager

logger = logging.getLogger(__name__)


def validate_colors(data: ScheduleView) -> None:
    """
    Check that every task colour can be turned into a QColor.

    Raises:
        InvalidSchedule: On the first colour pyqtgraph cannot parse.
    """
    for i, task in enumerate(data.tasks):
        try:
            pg.mkColor(task.color)
        except (TypeError, ValueError) as e:
            raise InvalidSchedule(f"Task #{i} ('{task.label}') has an invalid color {task.color!r}.") from e


class GanttChart(QGraphicsView):
    """
    Interactive Gantt chart of one periodic schedule.

    Drag with the left button to pan the visible window, resize to re-layout.
    The chart keeps one QGraphicsRectItem per mark and only touches the items
    whose mark was added, changed or removed by a redraw.
    """

    redrawn = Signal()

    def __init__(self, data: ScheduleView, style: Optional[ChartStyle] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.data = data
        self.chart_style = style or DEFAULT_STYLE

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)
        self.setRenderHint(QPainter.Antialiasing)
        self.setFrameShape(QFrame.NoFrame)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        self.setBackgroundBrush(pg.mkBrush(self.chart_style.background))
        self.setFixedHeight(self.chart_style.height)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Fixed)

        # scales & rendering state
        x_range, y_range = self.pixel_ranges()
        self.scales = ScaleManager(data.period, data.processors, x_range, y_range)
        self.engine = RenderEngine()
        self.marks: dict[Hashable, Mark] = {}
        self._mark_items: dict[Hashable, QGraphicsRectItem] = {}
        self._mark_pen = pg.mkPen(self.chart_style.mark_stroke, width=self.chart_style.mark_stroke_width)

        # marks are children of the plot area, which clips them to the window
        self._plot_area = QGraphicsRectItem()
        self._plot_area.setPen(pg.mkPen(None))
        self._plot_area.setFlag(QGraphicsItem.ItemClipsChildrenToShape, True)
        self._scene.addItem(self._plot_area)

        self.axes = AxisManager(self._scene, self.chart_style)

        self.controller = InteractionController(self.scales, self.pixel_ranges, parent=self)
        self.controller.redraw_requested.connect(self.redraw)
        self.controller.attach(self, self.viewport())

        self.redraw()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def pixel_ranges(self) -> PixelRanges:
        """Horizontal and vertical pixel span of the plot area inside the margins."""
        m = self.chart_style.margins
        w, h = self.width(), self.height()
        return (m.left, w - m.right), (m.top, h - m.bottom)

    def redraw(self) -> RenderResult:
        """Lay out all tasks against the current scales and sync the scene."""
        (x0, x1), (y0, y1) = self.scales.time.range, self.scales.processor.range
        self._scene.setSceneRect(0, 0, self.width(), self.height())
        self._plot_area.setRect(QRectF(x0, y0, x1 - x0, y1 - y0))

        result = self.engine.render(self.marks, self.data.tasks, self.scales.time, self.scales.processor)
        self._apply(result)
        self.marks = result.marks

        self.axes.update(self.scales)
        self.redrawn.emit()
        return result

    def set_data(self, data: ScheduleView) -> RenderResult:
        """
        Show another schedule in the same chart.

        The window offset is kept; bands are only reassigned when the set of
        processors differs from the current one.

        Raises:
            InvalidSchedule: If the new schedule is invalid. The chart keeps
                showing the previous one.
        """
        data.validate()
        validate_colors(data)

        self.data = data
        self.scales.set_period(data.period)
        self.scales.set_processors(data.processors)
        logger.info(f"Chart data replaced: {len(data.tasks)} tasks on {len(data.processors)} processors.")
        return self.redraw()

    def refresh(self) -> None:
        """External refresh trigger: redraw without changing the window."""
        self.controller.refresh()

    def mark_item(self, key: Hashable) -> QGraphicsRectItem:
        return self._mark_items[key]

    def unmount(self) -> None:
        """Release all listeners and detach the chart from its container."""
        self.controller.teardown()
        parent = self.parentWidget()
        if parent is not None and parent.layout() is not None:
            parent.layout().removeWidget(self)
        self.setParent(None)
        self.deleteLater()
        logger.info("Gantt chart unmounted.")

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _apply(self, result: RenderResult) -> None:
        for key in result.removed:
            self._scene.removeItem(self._mark_items.pop(key))

        for key in result.added:
            item = QGraphicsRectItem(self._plot_area)
            item.setPen(self._mark_pen)
            self._mark_items[key] = item
            self._sync_item(item, result.marks[key])

        for key in result.updated:
            self._sync_item(self._mark_items[key], result.marks[key])

    @staticmethod
    def _sync_item(item: QGraphicsRectItem, mark: Mark) -> None:
        item.setRect(QRectF(mark.x, mark.y, mark.width, mark.height))
        item.setBrush(pg.mkBrush(mark.fill))
        item.setToolTip(mark.label)
