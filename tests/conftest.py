"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest

from drill import sm2
from drill.app import App
from drill.db import init_db
from drill.state import Session

START = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now=START):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class CountingScheduler(sm2.Scheduler):
    """SM-2 scheduler that records every advance() call."""

    def __init__(self, clock=None):
        super().__init__(clock=clock)
        self.calls = []

    def advance(self, record, quality, as_of=None):
        self.calls.append((record.card_id, quality, as_of))
        return super().advance(record, quality, as_of)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return CountingScheduler(clock=clock)


@pytest.fixture
def session(clock, scheduler):
    """Session with a 20 second skip window on a fixed clock."""
    return Session(scheduler=scheduler, clock=clock, skip_window_seconds=20)


@pytest.fixture
def tmp_drill_dir(tmp_path):
    """Create a temporary drill directory with a schedulers/ subdir."""
    drill_dir = tmp_path / "drill_dir"
    drill_dir.mkdir()
    (drill_dir / "schedulers").mkdir()
    return drill_dir


@pytest.fixture
def db_conn():
    """In-memory SQLite database with schema applied."""
    conn = init_db(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def app(tmp_drill_dir, clock):
    """App instance with tmp drill_dir, fixed clock and in-memory DB."""
    a = App(drill_dir=tmp_drill_dir, clock=clock)
    a.init_db(":memory:")
    a.load_scheduler()
    a.load()
    yield a
    a.close()
