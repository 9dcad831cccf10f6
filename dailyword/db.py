# SQLAlchemy data layer for practice-mode statistics.

from __future__ import annotations
from sqlalchemy import create_engine, Column, Integer, String, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.sql import select
from typing import Iterable, Optional
import logging

from .config import DATABASE_URL, DB_TIMEOUT_SECONDS
from .models import AggregateStats, WordStat

logger = logging.getLogger(__name__)

Base = declarative_base()

GLOBAL_ROW_ID = 1


class PersistenceError(RuntimeError):
    """A statistics write did not commit. Nothing from it was persisted."""


class GameStats(Base):
    __tablename__ = "game_stats"
    id = Column(Integer, primary_key=True)
    completed_games = Column(Integer, nullable=False, default=0)
    wins = Column(Integer, nullable=False, default=0)
    losses = Column(Integer, nullable=False, default=0)


class WordStats(Base):
    __tablename__ = "word_stats"
    word = Column(String, primary_key=True)
    correct_guesses = Column(Integer, nullable=False, default=0)
    incorrect_guesses = Column(Integer, nullable=False, default=0)


_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


def make_engine(url: str = DATABASE_URL, timeout: float = DB_TIMEOUT_SECONDS):
    if url.startswith("sqlite"):
        connect_args = {"timeout": timeout, "check_same_thread": False}
    else:
        connect_args = {"connect_timeout": max(1, int(timeout))}
    return create_engine(url, echo=False, future=True, connect_args=connect_args)


class StatsStore:
    """Global win/loss counters plus per-word counters.

    Counters are only ever changed with ``col = col + 1`` inside an upsert,
    so concurrent writers never lose each other's increments.
    """

    def __init__(self, url: str = DATABASE_URL, timeout: float = DB_TIMEOUT_SECONDS, engine=None):
        self.engine = engine if engine is not None else make_engine(url, timeout)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, future=True)
        dialect = self.engine.dialect.name
        if dialect not in _INSERTS:
            raise ValueError(f"Unsupported database dialect for statistics: {dialect}")
        self._insert = _INSERTS[dialect]

    def init_db(self):
        Base.metadata.create_all(self.engine)

    def record_outcome(self, word: str, won: bool) -> None:
        word = word.lower()
        win, loss = (1, 0) if won else (0, 1)

        games = self._insert(GameStats).values(id=GLOBAL_ROW_ID, completed_games=1, wins=win, losses=loss)
        games = games.on_conflict_do_update(
            index_elements=[GameStats.id],
            set_={
                "completed_games": GameStats.completed_games + 1,
                "wins": GameStats.wins + win,
                "losses": GameStats.losses + loss,
            },
        )
        per_word = self._insert(WordStats).values(word=word, correct_guesses=win, incorrect_guesses=loss)
        per_word = per_word.on_conflict_do_update(
            index_elements=[WordStats.word],
            set_={
                "correct_guesses": WordStats.correct_guesses + win,
                "incorrect_guesses": WordStats.incorrect_guesses + loss,
            },
        )

        try:
            with self.SessionLocal.begin() as s:
                s.execute(games)
                s.execute(per_word)
        except SQLAlchemyError as e:
            raise PersistenceError(f"could not record outcome for {word!r}: {e}") from e
        logger.info("Recorded %s for %r", "win" if won else "loss", word)

    def read_stats(self, vocabulary: Optional[Iterable[str]] = None) -> AggregateStats:
        """
        Return the global counters and a per-word ranking sorted by:
         - correct_guesses DESC
         - word ASC

        Every vocabulary word is listed, with zero counts if it was never played.
        When the database cannot be read the counters are zero and
        ``available`` is False.
        """
        available = True
        try:
            with self.SessionLocal() as s:
                totals = s.get(GameStats, GLOBAL_ROW_ID)
                rows = s.execute(select(WordStats)).scalars().all()
                entries = {
                    r.word: WordStat(
                        word=r.word,
                        correct_guesses=int(r.correct_guesses or 0),
                        incorrect_guesses=int(r.incorrect_guesses or 0),
                    )
                    for r in rows
                }
                completed = int(totals.completed_games) if totals else 0
                wins = int(totals.wins) if totals else 0
                losses = int(totals.losses) if totals else 0
        except SQLAlchemyError as e:
            logger.warning("Statistics unavailable: %s", e)
            available = False
            entries = {}
            completed = wins = losses = 0

        for w in vocabulary or ():
            w = w.lower()
            if w not in entries:
                entries[w] = WordStat(word=w)

        ranked = sorted(entries.values(), key=lambda e: (-e.correct_guesses, e.word))
        return AggregateStats(
            available=available,
            completed_games=completed,
            wins=wins,
            losses=losses,
            words=ranked,
        )

    def clear_stats(self):
        # Deletes all global and per-word counters
        with self.SessionLocal.begin() as s:
            s.execute(delete(WordStats))
            s.execute(delete(GameStats))
