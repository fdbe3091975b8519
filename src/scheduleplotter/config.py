"""
Configuration & Global Constants
================================
This module serves as the central registry for layout constants and the
default chart style.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (margins, heights, pen widths)
   scattered throughout the view and controller code.
2. Customization: A single ChartStyle value can be handed to `mount()` to
   restyle a chart without touching its code.

Exports:
    Margins: Space reserved around the plot area for the axes.
    ChartStyle: Visual parameters of one chart.
    DEFAULT_STYLE: The style used when none is given.
"""
from __future__ import annotations

from dataclasses import dataclass, field


# Global Constants
DEFAULT_CHART_HEIGHT: int = 150
DEFAULT_TASK_COLOR: str = "#ffffff"

# Smallest usable pixel span of a scale range (px)
MIN_PIXEL_SPAN: float = 1.0


@dataclass(frozen=True)
class Margins:
    top: int = 20
    right: int = 20
    bottom: int = 30
    left: int = 40


@dataclass(frozen=True)
class ChartStyle:
    """Visual parameters of a Gantt chart."""
    margins: Margins = field(default_factory=Margins)
    height: int = DEFAULT_CHART_HEIGHT

    background: str = "w"
    foreground: str = "k"

    mark_stroke: str = "k"
    mark_stroke_width: float = 1.0

    tick_count: int = 10
    tick_size: int = 6
    label_font_size: int = 9


DEFAULT_STYLE = ChartStyle()
