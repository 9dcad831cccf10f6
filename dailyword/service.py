# Service layer between the HTTP routes and the game components.
# Routes call WordGame only; expected conditions come back as result models.
# The statistics database is the only awaited work, run in a worker thread.

from __future__ import annotations
from typing import Optional
import logging

from fastapi.concurrency import run_in_threadpool

from . import config
from .db import StatsStore
from .game import SessionStore, Vocabulary, rejected, score_guess, is_solved
from .models import (
    AggregateStats, GuessResult, PeekWordResponse, PracticeStartResponse, RotationStatus, StatsOutcome
)
from .today import DailyWordSelector

logger = logging.getLogger(__name__)


class WordGame:
    def __init__(self, vocabulary: Vocabulary, daily: DailyWordSelector, sessions: SessionStore, stats: StatsStore):
        self.vocabulary = vocabulary
        self.daily = daily
        self.sessions = sessions
        self.stats = stats

    @classmethod
    def from_config(cls, stats: Optional[StatsStore] = None) -> "WordGame":
        vocabulary = Vocabulary.load(config.WORDS_PATH, config.PRACTICE_WORDS_PATH, config.WORD_LENGTH)
        stats = stats or StatsStore(config.DATABASE_URL, config.DB_TIMEOUT_SECONDS)
        daily = DailyWordSelector(vocabulary.words, seed=config.WORD_SEED, tz=config.DAILY_TIMEZONE)
        sessions = SessionStore(
            vocabulary=vocabulary,
            stats=stats,
            ttl=config.GAME_TTL_SECONDS,
            secret_key=config.SECRET_KEY,
        )
        return cls(vocabulary, daily, sessions, stats)

    # Daily mode

    def get_todays_word(self) -> str:
        return self.daily.current_word()

    def try_daily_guess(self, guess: str) -> GuessResult:
        """Score a guess against today's word.

        Words outside the main list come back as ``invalid_word``. A listed
        word of the wrong length raises ``LengthMismatch``.
        """
        guess = guess.lower()
        if guess not in self.vocabulary.main_words:
            return rejected("invalid_word", len(guess), "Word not in dictionary")
        marks = score_guess(self.daily.current_word(), guess)
        return GuessResult(status="ok", is_valid=True, is_correct=is_solved(marks), result=marks)

    def minutes_until_next_daily_word(self) -> int:
        return self.daily.minutes_until_next_word()

    def clear_daily_word_cache(self) -> None:
        self.daily.clear_cache()
        logger.info("Daily word cache cleared")

    def daily_rotation_status(self) -> RotationStatus:
        return self.daily.rotation_status()

    # Practice mode

    def start_practice_session(self) -> PracticeStartResponse:
        session_id, length = self.sessions.start()
        return PracticeStartResponse(session_id=session_id, length=length)

    def try_practice_guess(self, session_id: str, guess: str) -> GuessResult:
        return self.sessions.submit_guess(session_id, guess)

    def peek_practice_word(self, session_id: str) -> PeekWordResponse:
        return PeekWordResponse(word=self.sessions.peek_word(session_id))

    async def record_practice_result(self, session_id: str, claimed_win: bool) -> StatsOutcome:
        return await self.sessions.finalize(session_id, claimed_win)

    # Statistics

    async def get_stats(self) -> AggregateStats:
        return await run_in_threadpool(self.stats.read_stats, self.vocabulary.practice_words)

    async def clear_stats(self) -> None:
        await run_in_threadpool(self.stats.clear_stats)
        logger.info("Practice statistics cleared")
