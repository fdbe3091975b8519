import json
import math

import pytest

from scheduleplotter.model.errors import InvalidSchedule
from scheduleplotter.model.io import load_schedule
from scheduleplotter.model.schedule import ScheduleView, TaskInstance, ViewWindow


def test_processors_in_order_of_first_appearance():
    view = ScheduleView(period=5, tasks=[
        TaskInstance(0, 1, processor=3),
        TaskInstance(1, 1, processor=1),
        TaskInstance(2, 1, processor=3),
        TaskInstance(3, 1, processor=2),
    ])
    assert view.processors == [3, 1, 2]


def test_tasks_are_stored_as_tuple():
    view = ScheduleView(period=5, tasks=[TaskInstance(0, 1, processor=0)])
    assert isinstance(view.tasks, tuple)


@pytest.mark.parametrize("period", [0, -1.0, math.nan, math.inf])
def test_invalid_period_is_rejected(period):
    with pytest.raises(InvalidSchedule):
        ScheduleView(period=period).validate()


@pytest.mark.parametrize("execution_time", [0, -2.0, math.nan])
def test_non_positive_execution_time_is_rejected(execution_time):
    view = ScheduleView(period=10, tasks=[TaskInstance(0, execution_time, processor=0, label="bad")])
    with pytest.raises(InvalidSchedule, match="bad"):
        view.validate()


@pytest.mark.parametrize("start_time", [math.nan, math.inf, -math.inf])
def test_non_finite_start_time_is_rejected(start_time):
    view = ScheduleView(period=10, tasks=[TaskInstance(start_time, 1, processor=0, label="late")])
    with pytest.raises(InvalidSchedule, match="late"):
        view.validate()


def test_unhashable_processor_is_rejected():
    view = ScheduleView(period=10, tasks=[
        TaskInstance(0, 1, processor=0),
        TaskInstance(1, 1, processor=[0, 1], label="pair"),
    ])
    with pytest.raises(InvalidSchedule, match="#1"):
        view.validate()


def test_valid_schedule_validates_to_itself(schedule):
    assert schedule.validate() is schedule


def test_from_solution_with_throughput():
    view = ScheduleView.from_solution({
        "throughput": 0.25,
        "tasks": [
            {"start_time": 1.0, "execution_time": 2.0, "processor": 0, "name": "src", "color": "#ff0000"},
            {"start_time": 2.0, "execution_time": 1.0, "processor": 1, "name": "sink", "color": ""},
        ],
    })
    assert view.period == pytest.approx(4.0)
    assert [t.label for t in view.tasks] == ["src", "sink"]
    assert view.tasks[1].color == "#ffffff"


def test_from_solution_with_period_and_label():
    view = ScheduleView.from_solution({
        "period": 8,
        "tasks": [{"start_time": 0, "execution_time": 1, "processor": "cpu0", "label": "A"}],
    })
    assert view.period == 8.0
    assert view.tasks[0].processor == "cpu0"
    assert view.tasks[0].label == "A"


@pytest.mark.parametrize("solution", [
    {"tasks": []},
    {"throughput": 0, "tasks": []},
    {"period": 5, "tasks": [{"start_time": 0, "processor": 0}]},
    {"period": 5, "tasks": [{"start_time": "x", "execution_time": 1, "processor": 0}]},
    {"period": "abc", "tasks": []},
    {"period": None, "tasks": []},
    {"throughput": "fast", "tasks": []},
    {"throughput": None, "tasks": []},
    {"period": 5, "tasks": None},
    {"period": 5, "tasks": [{"start_time": 0, "execution_time": 1, "processor": [0]}]},
])
def test_from_solution_rejects_bad_input(solution):
    with pytest.raises(InvalidSchedule):
        ScheduleView.from_solution(solution)


def test_view_window_domain():
    window = ViewWindow(width=10.0, offset=-2.5)
    assert window.domain == (-2.5, 7.5)
    assert window.end == 7.5


def test_load_schedule(tmp_path):
    path = tmp_path / "solution.json"
    path.write_text(json.dumps({
        "throughput": 0.1,
        "tasks": [{"start_time": 2, "execution_time": 3, "processor": 0, "name": "A", "color": "red"}],
    }), encoding="utf-8")

    view = load_schedule(str(path))
    assert view.period == pytest.approx(10.0)
    assert view.tasks[0] == TaskInstance(2.0, 3.0, processor=0, label="A", color="red")


def test_load_schedule_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_schedule(str(tmp_path / "nope.json"))


def test_load_schedule_not_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(InvalidSchedule):
        load_schedule(str(path))
