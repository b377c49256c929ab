import random

import pytest
from PySide6.QtCore import QCoreApplication

from app.config import Settings
from core.chrono import TrialClock
from services.history import HistoryStore
from services.typing_engine import TrialController
from utils.storage import MemoryStore


@pytest.fixture(scope="session", autouse=True)
def qapp():
    # QtCore only: timers and signals need an application object, not a display
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class FakeClock(TrialClock):
    """TrialClock whose wall time is set by the test instead of measured."""

    def __init__(self, time_limit: int = 60, parent=None):
        super().__init__(time_limit=time_limit, parent=parent)
        self.fake_seconds = 0.0

    def seconds(self) -> float:
        return self.fake_seconds


def tick(clock: TrialClock, n: int = 1) -> None:
    for _ in range(n):
        clock.tick_elapsed()
        clock.tick_countdown()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def history(store):
    return HistoryStore(store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(history, clock):
    return TrialController(history, Settings(), clock=clock, rng=random.Random(7))
