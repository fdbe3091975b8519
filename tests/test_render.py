import pytest

from scheduleplotter.controller.render import Mark, RenderEngine, key_by_content
from scheduleplotter.controller.scales import ScaleManager
from scheduleplotter.model.schedule import ScheduleView, TaskInstance


def make_scales(view: ScheduleView, x_range=(40.0, 460.0), y_range=(20.0, 120.0)) -> ScaleManager:
    return ScaleManager(view.period, view.processors, x_range, y_range)


def render(engine, marks, view, scales):
    return engine.render(marks, view.tasks, scales.time, scales.processor)


def test_single_task_geometry():
    view = ScheduleView(period=10, tasks=[TaskInstance(2, 3, processor=0, label="A", color="#abcdef")])
    scales = make_scales(view)

    result = render(RenderEngine(), {}, view, scales)

    mark = result.marks[0]
    assert mark.x == pytest.approx(124.0)
    assert mark.width == pytest.approx(126.0)
    assert mark.y == pytest.approx(20.0)
    assert mark.height == pytest.approx(100.0)
    assert mark.fill == "#abcdef"
    assert mark.label == "A"


def test_one_mark_per_task_in_its_band(schedule):
    scales = make_scales(schedule)
    result = render(RenderEngine(), {}, schedule, scales)

    assert len(result.marks) == len(schedule.tasks)
    assert result.added == [0, 1, 2, 3]
    for i, task in enumerate(schedule.tasks):
        assert result.marks[i].y == scales.processor(task.processor)
        assert result.marks[i].height == scales.processor.bandwidth


def test_task_ending_at_window_end_touches_right_edge():
    view = ScheduleView(period=10, tasks=[TaskInstance(7, 3, processor=0)])
    scales = make_scales(view)
    scales.set_offset(0.0)

    mark = render(RenderEngine(), {}, view, scales).marks[0]
    assert mark.x + mark.width == pytest.approx(scales.time.range[1])


def test_rendering_twice_is_idempotent(schedule):
    engine = RenderEngine()
    scales = make_scales(schedule)
    first = render(engine, {}, schedule, scales)
    snapshot = {k: (m.geometry(), m.fill) for k, m in first.marks.items()}

    second = render(engine, first.marks, schedule, scales)

    assert second.is_noop
    assert {k: (m.geometry(), m.fill) for k, m in second.marks.items()} == snapshot
    assert all(second.marks[k] is first.marks[k] for k in first.marks)


def test_pan_updates_marks_in_place(schedule):
    engine = RenderEngine()
    scales = make_scales(schedule)
    first = render(engine, {}, schedule, scales)
    identities = {k: id(m) for k, m in first.marks.items()}
    x_before = first.marks[0].x

    scales.pan_pixels(42.0)
    second = render(engine, first.marks, schedule, scales)

    assert second.added == [] and second.removed == []
    assert sorted(second.updated) == [0, 1, 2, 3]
    assert {k: id(m) for k, m in second.marks.items()} == identities
    assert second.marks[0].x == pytest.approx(x_before + 42.0)


def test_removed_tasks_lose_their_marks(schedule):
    engine = RenderEngine()
    scales = make_scales(schedule)
    first = render(engine, {}, schedule, scales)

    shorter = ScheduleView(period=schedule.period, tasks=schedule.tasks[:2])
    second = render(engine, first.marks, shorter, scales)

    assert sorted(second.removed) == [2, 3]
    assert set(second.marks) == {0, 1}


def test_new_tasks_get_new_marks(schedule):
    engine = RenderEngine()
    scales = make_scales(schedule)
    first = render(engine, {}, ScheduleView(schedule.period, schedule.tasks[:1]), scales)

    second = render(engine, first.marks, schedule, scales)

    assert second.added == [1, 2, 3]
    assert second.marks[0] is first.marks[0]


def test_content_keys_follow_reordered_tasks(schedule):
    engine = RenderEngine(key=key_by_content)
    scales = make_scales(schedule)
    first = render(engine, {}, schedule, scales)

    reordered = ScheduleView(schedule.period, tuple(reversed(schedule.tasks)))
    second = render(engine, first.marks, reordered, scales)

    assert second.is_noop


def test_out_of_window_task_still_gets_geometry():
    view = ScheduleView(period=10, tasks=[TaskInstance(25, 2, processor=0)])
    scales = make_scales(view)

    mark = render(RenderEngine(), {}, view, scales).marks[0]
    assert mark.x > scales.time.range[1]
    assert mark.width == pytest.approx(84.0)


def test_duplicate_keys_are_rejected():
    task = TaskInstance(1, 1, processor=0, label="dup")
    view = ScheduleView(period=10, tasks=[task, task])
    scales = make_scales(view)
    with pytest.raises(ValueError, match="dup"):
        render(RenderEngine(key=key_by_content), {}, view, scales)


def test_mark_assign_reports_changes():
    mark = Mark(key=0, x=1.0, width=2.0, y=3.0, height=4.0, fill="red")
    assert mark.assign(1.0, 2.0, 3.0, 4.0, "red", "") is False
    assert mark.assign(1.5, 2.0, 3.0, 4.0, "red", "") is True
    assert mark.x == 1.5
