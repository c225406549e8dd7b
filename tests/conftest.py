from datetime import datetime

import pytest

from attendance_dashboard.controller import DashboardController
from attendance_dashboard.notifications import NotificationCenter
from attendance_dashboard.storage import LocalCache

ROSTER_CSV = "UID,Name,Contact,Attendance\nA1,Alice,555-1,present\nA2,Bob,555-2,absent"


class FakeScheduler:
    def __init__(self):
        self.calls = []

    def __call__(self, delay_ms, callback):
        self.calls.append((delay_ms, callback))

    def run_pending(self):
        calls, self.calls = self.calls, []
        for _, callback in calls:
            callback()


class ScriptedRunner:
    """Resolves each submitted fetch immediately with the next scripted outcome."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.submitted = []

    def submit(self, seq, on_success, on_failure):
        self.submitted.append(seq)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            on_failure(seq, outcome)
        else:
            on_success(seq, outcome)


class DeferredRunner:
    def __init__(self):
        self.pending = {}

    def submit(self, seq, on_success, on_failure):
        self.pending[seq] = (on_success, on_failure)

    def succeed(self, seq, text):
        on_success, _ = self.pending.pop(seq)
        on_success(seq, text)

    def fail(self, seq, error):
        _, on_failure = self.pending.pop(seq)
        on_failure(seq, error)


class RecordingView:
    def __init__(self):
        self.renders = []
        self.statuses = []
        self.syncs = []

    def render(self, rows, present, absent):
        self.renders.append((rows, present, absent))

    def show_status(self, online):
        self.statuses.append(online)

    def show_last_sync(self, text):
        self.syncs.append(text)


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def center(scheduler):
    return NotificationCenter(schedule=scheduler)


@pytest.fixture
def cache(tmp_path):
    return LocalCache(str(tmp_path / "data" / "attendanceData.json"))


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def make_controller(cache, center, view):
    def factory(runner):
        return DashboardController(
            runner=runner,
            cache=cache,
            notifications=center,
            view=view,
            clock=lambda: datetime(2026, 10, 18, 9, 30, 5)
        )
    return factory
