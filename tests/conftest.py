from datetime import datetime, timedelta

import pytest

from lexirecall.infrastructure.adapters.memory_store import (
    InMemoryReviewRepository,
    InMemorySessionRepository,
)


class FakeClock:
    """Controllable stand-in for datetime.now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 10, 12, 0, 0))


@pytest.fixture
def review_repo():
    return InMemoryReviewRepository()


@pytest.fixture
def session_repo():
    return InMemorySessionRepository()


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config files and the default database from the real home
    monkeypatch.setenv("HOME", str(home))
    for var in ("LEXIRECALL_DB_PATH", "LEXIRECALL_DAILY_GOAL", "LEXIRECALL_NEW_WORDS_RATIO"):
        monkeypatch.delenv(var, raising=False)
    return home
