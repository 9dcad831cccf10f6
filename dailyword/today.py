# Word of the day.
# The word is a pure function of (seed, day number), where the day number counts
# calendar days since 1970-01-01 in a fixed reference time zone. Everybody sees the
# same word from local midnight to local midnight in that zone.

from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Sequence
from zoneinfo import ZoneInfo
import logging

from .config import DAILY_TIMEZONE, WORD_SEED
from .models import RotationStatus

logger = logging.getLogger(__name__)

NO_WORDS_AVAILABLE = "No words available"

EPOCH = date(1970, 1, 1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def rolling_hash(text: str) -> int:
    """31-based string hash wrapped to a signed 32-bit integer."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


def pick_word(words: Sequence[str], seed: str, day: int) -> str:
    if not words:
        return NO_WORDS_AVAILABLE
    return words[abs(rolling_hash(f"{seed}{day}")) % len(words)]


@dataclass
class DailyWordState:
    word: str
    day_number: int
    seed: str
    computed_at: datetime


class DailyWordSelector:
    def __init__(
        self,
        words: Sequence[str],
        seed: str = WORD_SEED,
        tz: str = DAILY_TIMEZONE,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.words = tuple(words)
        self.seed = seed
        self.tz = ZoneInfo(tz)
        self.clock = clock
        self._cache: Optional[DailyWordState] = None
        if not self.words:
            logger.warning("Daily word list is empty; serving %r", NO_WORDS_AVAILABLE)

    def local_now(self) -> datetime:
        return self.clock().astimezone(self.tz)

    def day_number(self, now: Optional[datetime] = None) -> int:
        local = (now or self.clock()).astimezone(self.tz)
        return (local.date() - EPOCH).days

    def word_of_day(self, seed: str, day: Optional[int] = None) -> str:
        if day is None:
            day = self.day_number()
        return pick_word(self.words, seed, day)

    def current_word(self) -> str:
        day = self.day_number()
        cached = self._cache
        if cached is not None and cached.day_number == day and cached.seed == self.seed:
            return cached.word

        word = self.word_of_day(self.seed, day)
        self._cache = DailyWordState(word=word, day_number=day, seed=self.seed, computed_at=self.clock())
        logger.info("Word of the day recomputed for day %d", day)
        return word

    def clear_cache(self) -> None:
        self._cache = None

    @property
    def cached(self) -> Optional[DailyWordState]:
        return self._cache

    def minutes_until_next_word(self) -> int:
        now = self.local_now()
        # Next local midnight, resolved through the zone so DST days are 23h or 25h long.
        tomorrow = now.date() + timedelta(days=1)
        midnight = datetime(tomorrow.year, tomorrow.month, tomorrow.day, tzinfo=self.tz)
        delta = midnight.astimezone(timezone.utc) - now.astimezone(timezone.utc)
        return int(delta.total_seconds() // 60)

    def rotation_status(self) -> RotationStatus:
        day = self.day_number()
        cached = self._cache
        warm = cached is not None and cached.day_number == day and cached.seed == self.seed
        return RotationStatus(
            today=self.current_word(),
            day_number=day,
            timezone=str(self.tz),
            local_time=self.local_now().isoformat(),
            cached=warm,
        )
