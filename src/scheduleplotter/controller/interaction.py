"""
Interaction Controller
======================
Pointer panning, resize and refresh handling for a Gantt chart.

Why is this file needed?
------------------------
1. State: Panning is a two-state machine (IDLE <-> DRAGGING). Resizing is not
   a state but an independent trigger that can fire in either of them.
2. Ownership: It is the only code that mutates the ViewWindow, and the only
   code that asks the chart to redraw.
3. Scoped listeners: While dragging it listens on the whole application (so
   the drag keeps going when the pointer leaves the chart). That listener is
   acquired on press and released by a single path (`end_drag`) used by both
   the pointer release and `teardown`.
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Optional

from PySide6.QtCore import QCoreApplication, QEvent, QObject, Qt, Signal
from PySide6.QtGui import QCursor, QGuiApplication
from PySide6.QtWidgets import QWidget

from scheduleplotter.controller.scales import ScaleManager

logger = logging.getLogger(__name__)

PixelRanges = tuple[tuple[float, float], tuple[float, float]]


class InteractionState(IntEnum):
    IDLE = 0
    DRAGGING = 1


class InteractionController(QObject):
    """Translates Qt input events into view-window changes and redraw requests."""

    redraw_requested = Signal()
    window_changed = Signal(float)  # new window offset
    state_changed = Signal(int)

    def __init__(
        self,
        scales: ScaleManager,
        pixel_ranges: Callable[[], PixelRanges],
        parent: Optional[QObject] = None
    ) -> None:
        """
        Args:
            scales: The scales whose time window is panned.
            pixel_ranges: Returns the current (x_range, y_range) of the plot area.
            parent: Qt parent object.
        """
        super().__init__(parent)
        self.scales = scales
        self._pixel_ranges = pixel_ranges

        self.state = InteractionState.IDLE
        self._last_x: Optional[float] = None

        self._target: Optional[QWidget] = None
        self._surface: Optional[QWidget] = None
        self._global_filter: bool = False
        self._cursor_overridden: bool = False

    # ------------------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------------------

    def attach(self, target: QWidget, surface: Optional[QWidget] = None) -> None:
        """
        Start observing widgets.

        Args:
            target: Widget whose resizes change the pixel ranges.
            surface: Widget receiving pointer and wheel events (defaults to target).
        """
        self.teardown()
        self._target = target
        self._surface = surface or target
        self._target.installEventFilter(self)
        if self._surface is not self._target:
            self._surface.installEventFilter(self)
        self._surface.setCursor(Qt.OpenHandCursor)
        logger.debug("Interaction controller attached.")

    def teardown(self) -> None:
        """Release every subscription. Safe to call more than once."""
        self.end_drag()
        widgets = [self._target]
        if self._surface is not self._target:
            widgets.append(self._surface)
        for widget in widgets:
            if widget is None:
                continue
            try:
                widget.removeEventFilter(self)
            except RuntimeError:
                # the widget's C++ side is already gone
                logger.debug("Observed widget was already deleted.")
        if self._target is not None:
            logger.debug("Interaction controller detached.")
        self._target = None
        self._surface = None

    @property
    def is_attached(self) -> bool:
        return self._target is not None

    @property
    def has_global_listener(self) -> bool:
        return self._global_filter

    # ------------------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------------------

    def begin_drag(self, x: float) -> bool:
        """IDLE -> DRAGGING. Returns False (and does nothing) when already dragging."""
        if self.state is InteractionState.DRAGGING:
            return False

        self._last_x = float(x)
        app = QCoreApplication.instance()
        if app is not None:
            app.installEventFilter(self)
            self._global_filter = True
        if isinstance(app, QGuiApplication):
            QGuiApplication.setOverrideCursor(QCursor(Qt.ClosedHandCursor))
            self._cursor_overridden = True

        self._set_state(InteractionState.DRAGGING)
        logger.debug(f"Drag started at x={x:g}.")
        return True

    def drag_to(self, x: float) -> float:
        """Pointer moved to `x` while dragging. Returns the applied offset change."""
        if self.state is not InteractionState.DRAGGING or self._last_x is None:
            return 0.0
        dx = float(x) - self._last_x
        self._last_x = float(x)
        return self.drag_by(dx)

    def drag_by(self, dpx: float) -> float:
        """Pan by `dpx` pixels while dragging. Returns the applied offset change."""
        if self.state is not InteractionState.DRAGGING or dpx == 0:
            return 0.0
        delta = self.scales.pan_pixels(dpx)
        self.window_changed.emit(self.scales.window.offset)
        self.redraw_requested.emit()
        return delta

    def end_drag(self) -> None:
        """DRAGGING -> IDLE, releasing the application-wide listener and the cursor."""
        if self._global_filter:
            app = QCoreApplication.instance()
            if app is not None:
                app.removeEventFilter(self)
            self._global_filter = False
        if self._cursor_overridden:
            QGuiApplication.restoreOverrideCursor()
            self._cursor_overridden = False

        self._last_x = None
        if self.state is InteractionState.DRAGGING:
            self._set_state(InteractionState.IDLE)
            logger.debug(f"Drag ended, window offset {self.scales.window.offset:g}.")

    def on_resize(self) -> None:
        """Recompute the pixel ranges from the current size, then redraw."""
        x_range, y_range = self._pixel_ranges()
        self.scales.set_pixel_ranges(x_range, y_range)
        self.redraw_requested.emit()

    def refresh(self) -> None:
        """Redraw without touching the window."""
        self.redraw_requested.emit()

    def _set_state(self, state: InteractionState) -> None:
        self.state = state
        self.state_changed.emit(int(state))

    # ------------------------------------------------------------------------------
    # Qt plumbing
    # ------------------------------------------------------------------------------

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        etype = event.type()

        if watched is self._target and etype == QEvent.Resize:
            self.on_resize()
            return False

        if watched is self._surface:
            if etype == QEvent.MouseButtonPress and event.button() == Qt.LeftButton:
                self.begin_drag(event.globalPosition().x())
                return True
            if etype == QEvent.Wheel:
                self.refresh()
                return False

        if self.state is InteractionState.DRAGGING:
            # A propagated event reaches this filter once per receiver; drag_to
            # works on absolute positions so repeats pan by zero.
            if etype == QEvent.MouseMove:
                self.drag_to(event.globalPosition().x())
            elif etype == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
                self.end_drag()

        return False
