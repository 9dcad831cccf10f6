# Core game logic: word lists, guess scoring and the practice-mode session store.
# Implements canonical Wordle marking rules:
# - Letters of the secret that are not exactly matched form a pool.
# - First pass marks exact hits, second pass hands out "present" marks
#   left to right while the pool still holds that letter.
# - So a repeated guess letter is never credited more often than the secret has it.

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, FrozenSet, List, Optional, Tuple
import logging
import random
import time
import uuid

from itsdangerous import TimestampSigner, BadSignature
from fastapi.concurrency import run_in_threadpool

from .config import GAME_TTL_SECONDS, SECRET_KEY, WORD_LENGTH
from .db import PersistenceError, StatsStore
from .models import GuessMark, GuessResult, StatsOutcome

logger = logging.getLogger(__name__)

EXACT: GuessMark = "exact"
PRESENT: GuessMark = "present"
ABSENT: GuessMark = "absent"


class LengthMismatch(ValueError):
    """Guess and secret have different lengths."""


class NoWordsAvailable(RuntimeError):
    """The practice vocabulary is empty."""


def load_words(path: Path, length: Optional[int] = None) -> List[str]:
    """Read a newline-delimited word list, lowercased, keeping file order.

    Blank lines, non-alphabetic entries and duplicates are skipped. A missing
    file yields an empty list; callers decide how to degrade.
    """
    words: List[str] = []
    seen = set()
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                w = line.strip().lower()
                if not w or not w.isalpha() or w in seen:
                    continue
                if length is not None and len(w) != length:
                    continue
                seen.add(w)
                words.append(w)
    except FileNotFoundError:
        logger.warning("Word list %s not found", path)
    if not words:
        logger.warning("Word list %s is empty", path)
    return words


@dataclass(frozen=True)
class Vocabulary:
    words: Tuple[str, ...]
    practice_words: Tuple[str, ...]
    main_words: FrozenSet[str]
    dictionary: FrozenSet[str]

    @classmethod
    def from_lists(cls, words: List[str], practice_words: List[str], length: int = WORD_LENGTH) -> "Vocabulary":
        words = [w.lower() for w in words]
        practice = [w for w in dict.fromkeys(p.lower() for p in practice_words) if len(w) == length]
        return cls(
            words=tuple(words),
            practice_words=tuple(practice),
            main_words=frozenset(words),
            dictionary=frozenset(words) | frozenset(practice),
        )

    @classmethod
    def load(cls, words_path: Path, practice_path: Path, length: int = WORD_LENGTH) -> "Vocabulary":
        return cls.from_lists(load_words(words_path), load_words(practice_path, length), length)


def score_guess(secret: str, guess: str) -> List[GuessMark]:
    if len(guess) != len(secret):
        raise LengthMismatch(f"guess has {len(guess)} letters, expected {len(secret)}")

    marks: List[GuessMark] = [ABSENT] * len(secret)

    # Letters still available for "present" marks
    unmatched = Counter(s for s, g in zip(secret, guess) if s != g)

    for i, (s, g) in enumerate(zip(secret, guess)):
        if s == g:
            marks[i] = EXACT

    for i, g in enumerate(guess):
        if marks[i] == EXACT:
            continue
        if unmatched[g] > 0:
            marks[i] = PRESENT
            unmatched[g] -= 1

    return marks


def is_solved(marks: List[GuessMark]) -> bool:
    return bool(marks) and all(m == EXACT for m in marks)


def rejected(status: str, length: int, error: str) -> GuessResult:
    return GuessResult(status=status, is_valid=False, is_correct=False, result=[ABSENT] * length, error=error)


@dataclass
class GameSession:
    session_id: str
    word: str
    created_at: float
    completed: bool = False

    def expired(self, now: float, ttl: float) -> bool:
        return now - self.created_at > ttl


@dataclass
class SessionStore:
    """In-memory registry of practice games.

    Sessions are swept lazily: every lookup drops games older than ``ttl``
    before answering, there is no background timer. Callers get a signed
    token; the raw id never leaves the store.
    """

    vocabulary: Vocabulary
    stats: StatsStore
    ttl: float = GAME_TTL_SECONDS
    clock: Callable[[], float] = time.monotonic
    rng: random.Random = field(default_factory=random.Random)
    secret_key: str = SECRET_KEY
    sessions: Dict[str, GameSession] = field(default_factory=dict)

    def __post_init__(self):
        self._signer = TimestampSigner(self.secret_key, salt="practice-session")

    def issue_token(self, session_id: str) -> str:
        return self._signer.sign(session_id.encode()).decode()

    def _session_key(self, token: str) -> Optional[str]:
        try:
            return self._signer.unsign(token).decode()
        except BadSignature:
            return None

    def sweep(self) -> None:
        now = self.clock()
        for sid in [sid for sid, s in self.sessions.items() if s.expired(now, self.ttl)]:
            self.sessions.pop(sid, None)
            logger.debug("Practice session %s expired", sid)

    def lookup(self, token: str) -> Optional[GameSession]:
        self.sweep()
        sid = self._session_key(token)
        if sid is None:
            return None
        return self.sessions.get(sid)

    def active_count(self) -> int:
        self.sweep()
        return len(self.sessions)

    def start(self) -> Tuple[str, int]:
        if not self.vocabulary.practice_words:
            raise NoWordsAvailable("No words available for practice mode")
        word = self.rng.choice(self.vocabulary.practice_words)
        sid = uuid.uuid4().hex
        self.sessions[sid] = GameSession(session_id=sid, word=word, created_at=self.clock())
        logger.info("Started practice session %s", sid)
        return self.issue_token(sid), len(word)

    def submit_guess(self, token: str, guess: str) -> GuessResult:
        guess = guess.lower()
        game = self.lookup(token)
        if game is None:
            return rejected("not_found", len(guess), "Game not found or expired")
        if game.completed:
            return rejected("completed", len(game.word), "Game already completed")
        if len(guess) != len(game.word):
            return rejected("length_mismatch", len(game.word), f"The word must have {len(game.word)} letters")
        if guess not in self.vocabulary.dictionary:
            return rejected("invalid_word", len(game.word), "Word not in dictionary")

        marks = score_guess(game.word, guess)
        correct = is_solved(marks)
        if correct:
            game.completed = True
        return GuessResult(status="ok", is_valid=True, is_correct=correct, result=marks)

    def peek_word(self, token: str) -> Optional[str]:
        game = self.lookup(token)
        return game.word if game else None

    async def finalize(self, token: str, claimed_win: bool) -> StatsOutcome:
        game = self.lookup(token)
        if game is None:
            return StatsOutcome(status="not_found", recorded=False, error="Game not found or expired")

        # Removed before persisting so a session can never be recorded twice.
        self.sessions.pop(game.session_id, None)
        won = claimed_win and game.completed
        try:
            await run_in_threadpool(self.stats.record_outcome, game.word, won)
        except PersistenceError as e:
            logger.error("Failed to record result for session %s: %s", game.session_id, e)
            return StatsOutcome(status="persistence_error", recorded=False, won=won, error=str(e))
        return StatsOutcome(status="recorded", recorded=True, won=won)
