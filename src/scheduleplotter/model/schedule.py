"""
Schedule Data Model
===================
Plain data handed to the chart by the external scheduler.

Classes:
    TaskInstance: One occurrence of a task on one processor.
    ScheduleView: The period plus the ordered task list.
    ViewWindow: The visible time span, owned by the chart.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Hashable, Iterable, Mapping

from scheduleplotter.config import DEFAULT_TASK_COLOR
from scheduleplotter.model.errors import InvalidSchedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskInstance:
    """One concrete occurrence of a task during one repetition of the schedule."""
    start_time: float
    execution_time: float
    processor: Hashable
    label: str = ""
    color: Any = DEFAULT_TASK_COLOR

    @property
    def end_time(self) -> float:
        return self.start_time + self.execution_time

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TaskInstance:
        """
        Build a task from a solver dictionary.

        Both the solver's 'name' key and 'label' are accepted for the label.
        """
        try:
            return cls(
                start_time=float(data["start_time"]),
                execution_time=float(data["execution_time"]),
                processor=data["processor"],
                label=str(data.get("label", data.get("name", ""))),
                color=data.get("color") or DEFAULT_TASK_COLOR,
            )
        except KeyError as e:
            raise InvalidSchedule(f"Task is missing the field {e}.") from e
        except (TypeError, ValueError) as e:
            raise InvalidSchedule(f"Task has a non-numeric time: {e}") from e


@dataclass(frozen=True)
class ScheduleView:
    """A periodic schedule: the repeat length and the task instances in it."""
    period: float
    tasks: tuple[TaskInstance, ...] = ()

    def __post_init__(self) -> None:
        # Accept any iterable (e.g. a list) but store an immutable tuple
        if not isinstance(self.tasks, tuple):
            object.__setattr__(self, "tasks", tuple(self.tasks))

    @property
    def processors(self) -> list[Hashable]:
        """Distinct processor ids in order of first appearance."""
        return processors_of(self.tasks)

    def validate(self) -> ScheduleView:
        """
        Reject schedules that would render degenerate geometry.

        Returns:
            self, so the call can be chained.

        Raises:
            InvalidSchedule: If the period is not a positive finite number,
                or a task has a non-finite start, a non-positive duration or an
                unhashable processor id.
        """
        if not _is_finite(self.period) or self.period <= 0:
            raise InvalidSchedule(f"Period must be a positive number, got {self.period!r}.")

        for i, task in enumerate(self.tasks):
            if not _is_finite(task.start_time):
                raise InvalidSchedule(f"Task #{i} ('{task.label}') has an invalid start time {task.start_time!r}.")
            if not _is_finite(task.execution_time) or task.execution_time <= 0:
                raise InvalidSchedule(
                    f"Task #{i} ('{task.label}') has a non-positive execution time {task.execution_time!r}."
                )
            try:
                hash(task.processor)
            except TypeError as e:
                raise InvalidSchedule(
                    f"Task #{i} ('{task.label}') has an unusable processor id {task.processor!r}."
                ) from e
        return self

    @classmethod
    def from_solution(cls, solution: Mapping[str, Any]) -> ScheduleView:
        """
        Build a view from a scheduler solution.

        The solution carries either a 'period' or a 'throughput' (one
        repetition per 1/throughput time units) and a list of task dicts.

        Raises:
            InvalidSchedule: If neither key is present or the result is invalid.
        """
        if "period" in solution:
            period = _number(solution, "period")
        elif "throughput" in solution:
            throughput = _number(solution, "throughput")
            if throughput <= 0:
                raise InvalidSchedule(f"Throughput must be positive, got {throughput!r}.")
            period = 1.0 / throughput
        else:
            raise InvalidSchedule("Solution has neither a 'period' nor a 'throughput'.")

        raw_tasks = solution.get("tasks", [])
        if not isinstance(raw_tasks, (list, tuple)):
            raise InvalidSchedule(f"Solution 'tasks' must be a list, got {type(raw_tasks).__name__}.")
        tasks = [TaskInstance.from_dict(t) for t in raw_tasks]
        view = cls(period=period, tasks=tuple(tasks))
        logger.debug(f"Loaded schedule with period {period:g} and {len(tasks)} tasks.")
        return view.validate()


@dataclass
class ViewWindow:
    """The visible time span [offset, offset + width)."""
    width: float
    offset: float = 0.0

    @property
    def end(self) -> float:
        return self.offset + self.width

    @property
    def domain(self) -> tuple[float, float]:
        return self.offset, self.offset + self.width


def _is_finite(value: Any) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def processors_of(tasks: Iterable[TaskInstance]) -> list[Hashable]:
    """Distinct processor ids of the given tasks, in order of first appearance."""
    return list(dict.fromkeys(task.processor for task in tasks))


def _number(solution: Mapping[str, Any], key: str) -> float:
    try:
        return float(solution[key])
    except (TypeError, ValueError) as e:
        raise InvalidSchedule(f"Solution '{key}' must be a number, got {solution[key]!r}.") from e
