"""
Render Engine
=============
Turns task instances into rectangle geometry and reconciles it with the
marks drawn by the previous pass.

The marks live in an arena (a dict keyed by task identity). A redraw
updates surviving marks in place, creates marks for new tasks and drops marks
whose task disappeared, and reports which keys fell in each group so the view
only touches the scene items that actually changed.

Note: This module is pure Python and does NOT import PySide6.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Hashable, Mapping, Sequence

from scheduleplotter.controller.scales import BandScale, TimeScale
from scheduleplotter.model.schedule import TaskInstance

logger = logging.getLogger(__name__)

KeyFunc = Callable[[int, TaskInstance], Hashable]


def key_by_order(index: int, task: TaskInstance) -> Hashable:
    """Identify a task by its position in the task list."""
    return index


def key_by_content(index: int, task: TaskInstance) -> Hashable:
    """Identify a task by what it is, so reordering the list keeps its mark."""
    return task.processor, task.label, task.start_time


@dataclass(eq=False)
class Mark:
    """The drawn rectangle of one task instance."""
    key: Hashable
    x: float
    width: float
    y: float
    height: float
    fill: Any
    label: str = ""

    def geometry(self) -> tuple[float, float, float, float]:
        return self.x, self.y, self.width, self.height

    def assign(self, x: float, width: float, y: float, height: float, fill: Any, label: str) -> bool:
        """Overwrite the attributes in place. Returns True if anything changed."""
        new = (x, width, y, height, fill, label)
        if new == (self.x, self.width, self.y, self.height, self.fill, self.label):
            return False
        self.x, self.width, self.y, self.height, self.fill, self.label = new
        return True


@dataclass
class RenderResult:
    marks: dict[Hashable, Mark]
    added: list[Hashable] = field(default_factory=list)
    updated: list[Hashable] = field(default_factory=list)
    removed: list[Hashable] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        return not (self.added or self.updated or self.removed)


class RenderEngine:
    """Computes mark geometry and diffs it against the previous marks."""

    def __init__(self, key: KeyFunc = key_by_order) -> None:
        self.key = key

    def render(
        self,
        marks_prev: Mapping[Hashable, Mark],
        tasks: Sequence[TaskInstance],
        time_scale: TimeScale,
        processor_scale: BandScale
    ) -> RenderResult:
        """
        Lay out every task and reconcile with `marks_prev`.

        Tasks outside the visible window still get (off-canvas) geometry;
        hiding them is left to the view's clipping.

        Raises:
            ValueError: If two tasks map to the same key.
        """
        height = processor_scale.bandwidth
        result = RenderResult(marks={})

        for i, task in enumerate(tasks):
            key = self.key(i, task)
            if key in result.marks:
                raise ValueError(f"Duplicate mark key {key!r} for task #{i} ('{task.label}').")

            x = time_scale(task.start_time)
            width = time_scale(task.end_time) - x
            y = processor_scale(task.processor)

            mark = marks_prev.get(key)
            if mark is None:
                mark = Mark(key=key, x=x, width=width, y=y, height=height, fill=task.color, label=task.label)
                result.added.append(key)
            elif mark.assign(x, width, y, height, task.color, task.label):
                result.updated.append(key)
            result.marks[key] = mark

        result.removed = [key for key in marks_prev if key not in result.marks]

        logger.debug(
            f"Rendered {len(result.marks)} marks "
            f"(+{len(result.added)} ~{len(result.updated)} -{len(result.removed)})."
        )
        return result
