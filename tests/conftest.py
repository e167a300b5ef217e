import os

import pytest

from tests.util.fakes import FakeScheduler, ManualWorker


def pytest_sessionstart(session):
    """Qt widget tests run without a display."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def worker():
    return ManualWorker()
