import random
from datetime import datetime, timedelta, timezone

import pytest

from dailyword.db import StatsStore
from dailyword.game import SessionStore, Vocabulary
from dailyword.service import WordGame
from dailyword.today import DailyWordSelector

MAIN_WORDS = ["route", "outer", "level", "betel", "about", "crane", "four"]
PRACTICE_WORDS = ["route"]


class FakeClock:
    """Monotonic seconds that only move when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDateTime:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    # 2024-06-15 10:00 UTC, 12:00 in Madrid
    return FakeDateTime(datetime(2024, 6, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def vocabulary():
    return Vocabulary.from_lists(MAIN_WORDS, PRACTICE_WORDS, 5)


@pytest.fixture
def stats(tmp_path):
    store = StatsStore(f"sqlite:///{tmp_path / 'stats.db'}", timeout=10)
    store.init_db()
    return store


@pytest.fixture
def sessions(vocabulary, stats, clock):
    return SessionStore(
        vocabulary=vocabulary,
        stats=stats,
        ttl=3600,
        clock=clock,
        rng=random.Random(7),
        secret_key="test-secret",
    )


@pytest.fixture
def daily(wall_clock):
    return DailyWordSelector(["route"], seed="semilla", tz="Europe/Madrid", clock=wall_clock)


@pytest.fixture
def word_game(vocabulary, daily, sessions, stats):
    return WordGame(vocabulary, daily, sessions, stats)
