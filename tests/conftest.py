import os

# Qt widgets are created without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("PYQTGRAPH_QT_LIB", "PySide6")

import pytest  # noqa: E402

from scheduleplotter.model.schedule import ScheduleView, TaskInstance  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    from scheduleplotter.app.application import create_app
    app = create_app([])
    yield app


@pytest.fixture
def schedule() -> ScheduleView:
    return ScheduleView(
        period=10.0,
        tasks=(
            TaskInstance(start_time=2.0, execution_time=3.0, processor=0, label="A", color="#1f77b4"),
            TaskInstance(start_time=0.0, execution_time=4.0, processor=1, label="B", color="#ff7f0e"),
            TaskInstance(start_time=5.0, execution_time=5.0, processor=0, label="C", color="#2ca02c"),
            TaskInstance(start_time=6.0, execution_time=2.0, processor=2, label="D", color="#d62728"),
        ),
    )
