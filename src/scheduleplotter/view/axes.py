"""
Axis Manager
Handles the time axis (bottom) and the processor axis (left) of a Gantt chart.
"""
from __future__ import annotations

from typing import Callable, Hashable, List

import pyqtgraph as pg
from PySide6.QtCore import QLineF
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QGraphicsItem, QGraphicsLineItem, QGraphicsScene, QGraphicsSimpleTextItem

from scheduleplotter.config import ChartStyle
from scheduleplotter.controller.scales import ScaleManager


class AxisManager:
    def __init__(self, scene: QGraphicsScene, style: ChartStyle) -> None:
        self.scene = scene
        self.style = style
        self.time_formatter: Callable[[float], str] = lambda v: f"{v:g}"
        self.processor_formatter: Callable[[Hashable], str] = lambda p: f"{p}"

        self._pen = pg.mkPen(style.foreground, width=1)
        self._brush = pg.mkBrush(style.foreground)
        self._font = QFont()
        self._font.setPointSize(style.label_font_size)

        self._time_items: List[QGraphicsItem] = []
        self._processor_items: List[QGraphicsItem] = []

    def update(self, scales: ScaleManager) -> None:
        """Re-creates both axes from the current scales."""
        self.update_time_axis(scales)
        self.update_processor_axis(scales)

    def update_time_axis(self, scales: ScaleManager) -> None:
        """Tick marks and labels along the bottom edge of the plot area."""
        self._clear(self._time_items)

        x0, x1 = scales.time.range
        _, y1 = scales.processor.range
        tick = self.style.tick_size

        self._time_items.append(self._line(x0, y1, x1, y1))
        for t in scales.time.ticks(self.style.tick_count):
            x = scales.time(t)
            self._time_items.append(self._line(x, y1, x, y1 + tick))
            label = self._text(self.time_formatter(float(t)))
            rect = label.boundingRect()
            label.setPos(x - rect.width() / 2, y1 + tick)
            self._time_items.append(label)

    def update_processor_axis(self, scales: ScaleManager) -> None:
        """One label per processor band along the left edge of the plot area."""
        self._clear(self._processor_items)

        x0, _ = scales.time.range
        y0, y1 = scales.processor.range
        tick = self.style.tick_size

        self._processor_items.append(self._line(x0, y0, x0, y1))
        for processor in scales.processor.domain:
            y = scales.processor.center(processor)
            self._processor_items.append(self._line(x0 - tick, y, x0, y))
            label = self._text(self.processor_formatter(processor))
            rect = label.boundingRect()
            label.setPos(x0 - tick - 2 - rect.width(), y - rect.height() / 2)
            self._processor_items.append(label)

    def clear_items(self) -> None:
        """Removes all axis items from the scene."""
        self._clear(self._time_items)
        self._clear(self._processor_items)

    @property
    def time_labels(self) -> list[str]:
        return [i.text() for i in self._time_items if isinstance(i, QGraphicsSimpleTextItem)]

    @property
    def processor_labels(self) -> list[str]:
        return [i.text() for i in self._processor_items if isinstance(i, QGraphicsSimpleTextItem)]

    def _clear(self, items: List[QGraphicsItem]) -> None:
        for item in items:
            self.scene.removeItem(item)
        items.clear()

    def _line(self, x0: float, y0: float, x1: float, y1: float) -> QGraphicsLineItem:
        item = QGraphicsLineItem(QLineF(x0, y0, x1, y1))
        item.setPen(self._pen)
        self.scene.addItem(item)
        return item

    def _text(self, text: str) -> QGraphicsSimpleTextItem:
        item = QGraphicsSimpleTextItem(text)
        item.setFont(self._font)
        item.setBrush(self._brush)
        self.scene.addItem(item)
        return item
