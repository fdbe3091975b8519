"""
Coordinate Scales
=================
Maps schedule coordinates to pixels.

Why is this file needed?
------------------------
1. Time axis: a continuous linear map from the visible time window
   [offset, offset + width) onto the horizontal pixel span of the plot.
2. Processor axis: a discrete map from processor id to a fixed-height band.
3. Ownership: ScaleManager keeps the ViewWindow and both scales in sync, so
   a resize only touches the ranges and a pan only touches the time domain.

Note: This module is pure Python/NumPy and does NOT import PySide6.
"""
from __future__ import annotations

import logging
import math
from typing import Hashable, Iterable, Sequence, TYPE_CHECKING, Union

import numpy as np

from scheduleplotter.config import MIN_PIXEL_SPAN
from scheduleplotter.model.schedule import ViewWindow

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

Number = Union[float, "npt.NDArray[np.float64]"]


def checked_pixel_range(pixel_range: Sequence[float]) -> tuple[float, float]:
    """
    Validate a (min, max) pixel range.

    A range narrower than MIN_PIXEL_SPAN (including min >= max, e.g. a
    collapsed widget) is clamped to min + MIN_PIXEL_SPAN.

    Raises:
        ValueError: If the range does not hold two finite numbers.
    """
    lo, hi = (float(v) for v in pixel_range)
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ValueError(f"Pixel range must be finite, got ({lo}, {hi}).")
    if hi - lo < MIN_PIXEL_SPAN:
        logger.warning(f"Pixel range ({lo:g}, {hi:g}) is too narrow, clamping to {MIN_PIXEL_SPAN:g} px.")
        hi = lo + MIN_PIXEL_SPAN
    return lo, hi


class TimeScale:
    """Linear map from a time domain onto a pixel range."""

    def __init__(
        self,
        domain: tuple[float, float] = (0.0, 1.0),
        pixel_range: tuple[float, float] = (0.0, 1.0)
    ) -> None:
        self.domain = domain
        self.range = pixel_range

    def __call__(self, t: Number) -> Number:
        # Interpolating (rather than r0 + slope*dt) maps both domain ends exactly
        u = (np.asarray(t, dtype=np.float64) - self._d0) / (self._d1 - self._d0)
        px = self._r0 * (1.0 - u) + self._r1 * u
        return float(px) if px.ndim == 0 else px

    @property
    def domain(self) -> tuple[float, float]:
        return self._d0, self._d1

    @domain.setter
    def domain(self, value: tuple[float, float]) -> None:
        d0, d1 = float(value[0]), float(value[1])
        if not d1 > d0:
            raise ValueError(f"Time domain must be increasing, got ({d0}, {d1}).")
        self._d0, self._d1 = d0, d1

    @property
    def range(self) -> tuple[float, float]:
        return self._r0, self._r1

    @range.setter
    def range(self, value: tuple[float, float]) -> None:
        self._r0, self._r1 = checked_pixel_range(value)

    @property
    def span(self) -> float:
        """Width of the pixel range."""
        return self._r1 - self._r0

    def pixels_to_time(self, dpx: float) -> float:
        """Length in pixels to a duration in time units."""
        return dpx * (self._d1 - self._d0) / (self._r1 - self._r0)

    def ticks(self, count: int = 10) -> npt.NDArray[np.float64]:
        """
        Round tick values inside the domain.

        The tick step is 1, 2 or 5 times a power of ten, chosen so that
        roughly `count` ticks fit in the domain.
        """
        d0, d1 = self._d0, self._d1
        if count <= 0:
            return np.empty(0, dtype=np.float64)

        raw_step = (d1 - d0) / count
        power = math.floor(math.log10(raw_step))
        error = raw_step / 10 ** power
        if error >= math.sqrt(50):
            factor = 10
        elif error >= math.sqrt(10):
            factor = 5
        elif error >= math.sqrt(2):
            factor = 2
        else:
            factor = 1
        step = factor * 10.0 ** power

        # integer multiples avoid accumulating float error along the axis
        i0 = math.ceil(d0 / step)
        i1 = math.floor(d1 / step)
        ticks = np.arange(i0, i1 + 1, dtype=np.float64) * step
        if power < 0:
            ticks = np.round(ticks, -power)
        return ticks


class BandScale:
    """Discrete map from ids to evenly spaced, equally tall bands."""

    def __init__(
        self,
        domain: Iterable[Hashable] = (),
        pixel_range: tuple[float, float] = (0.0, 1.0)
    ) -> None:
        self._domain: list[Hashable] = []
        self._index: dict[Hashable, int] = {}
        self._r0, self._r1 = checked_pixel_range(pixel_range)
        self.set_domain(domain)

    def __call__(self, key: Hashable) -> float:
        """Top edge of the band of `key`. Raises KeyError for an unknown id."""
        return self._r0 + self._index[key] * self.step

    def __len__(self) -> int:
        return len(self._domain)

    @property
    def domain(self) -> list[Hashable]:
        return list(self._domain)

    def set_domain(self, ids: Iterable[Hashable]) -> bool:
        """
        Replace the domain.

        Returns:
            True if the band assignment changed. An equal domain is kept as is,
            so bands never reshuffle between redraws of the same processors.
        """
        ids = list(dict.fromkeys(ids))
        if ids == self._domain:
            return False
        self._domain = ids
        self._index = {key: i for i, key in enumerate(ids)}
        return True

    @property
    def range(self) -> tuple[float, float]:
        return self._r0, self._r1

    @range.setter
    def range(self, value: tuple[float, float]) -> None:
        self._r0, self._r1 = checked_pixel_range(value)

    @property
    def step(self) -> float:
        return (self._r1 - self._r0) / max(1, len(self._domain))

    @property
    def bandwidth(self) -> float:
        # no padding between bands
        return self.step

    def center(self, key: Hashable) -> float:
        return self(key) + 0.5 * self.bandwidth


class ScaleManager:
    """
    Owns the visible ViewWindow and the two scales derived from it.

    Recompute triggers:
        - set_pixel_ranges: container resized, domains kept.
        - set_processors: processor set changed, time scale untouched.
        - set_period: a new schedule with another period, offset kept.
        - set_offset / pan_pixels: window moved, only the time domain changes.
    """

    def __init__(
        self,
        period: float,
        processors: Iterable[Hashable] = (),
        x_range: tuple[float, float] = (0.0, 1.0),
        y_range: tuple[float, float] = (0.0, 1.0)
    ) -> None:
        if not period > 0:
            raise ValueError(f"Period must be positive, got {period!r}.")
        self.window = ViewWindow(width=float(period))
        self.time = TimeScale(self.window.domain, x_range)
        self.processor = BandScale(processors, y_range)

    @property
    def inner_width(self) -> float:
        """Pixel width of the plot area the time window is mapped onto."""
        return self.time.span

    def set_pixel_ranges(self, x_range: tuple[float, float], y_range: tuple[float, float]) -> bool:
        """Apply new output ranges. Returns True if either range changed."""
        x_range = checked_pixel_range(x_range)
        y_range = checked_pixel_range(y_range)
        if x_range == self.time.range and y_range == self.processor.range:
            return False
        self.time.range = x_range
        self.processor.range = y_range
        logger.debug(f"Pixel ranges set to x={x_range}, y={y_range}.")
        return True

    def set_processors(self, ids: Iterable[Hashable]) -> bool:
        """Processor set changed: recompute the band domain, time scale untouched."""
        changed = self.processor.set_domain(ids)
        if changed:
            logger.debug(f"Processor domain set to {self.processor.domain}.")
        return changed

    def set_period(self, period: float) -> bool:
        """New schedule period: the window keeps its offset and takes the new width."""
        if not period > 0:
            raise ValueError(f"Period must be positive, got {period!r}.")
        if float(period) == self.window.width:
            return False
        self.window.width = float(period)
        self.time.domain = self.window.domain
        return True

    def set_offset(self, offset: float) -> None:
        self.window.offset = float(offset)
        self.time.domain = self.window.domain

    def pan_pixels(self, dpx: float) -> float:
        """
        Shift the window by a horizontal drag of `dpx` pixels.

        Dragging right (dpx > 0) moves the window towards earlier times, so
        the content follows the pointer.

        Returns:
            The applied change of the window offset.
        """
        delta = -self.time.pixels_to_time(dpx)
        self.set_offset(self.window.offset + delta)
        return delta
