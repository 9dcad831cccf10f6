# Pydantic models and data structures for API IO.

from __future__ import annotations
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Literal

GuessMark = Literal["exact", "present", "absent"]

# Soft outcomes of a guess. Anything other than "ok" carries an all-absent verdict.
GuessStatus = Literal["ok", "invalid_word", "not_found", "completed", "length_mismatch"]

StatsStatus = Literal["recorded", "not_found", "persistence_error"]


def _normalize_guess(v: str) -> str:
    return v.strip().lower()


class DailyGuessRequest(BaseModel):
    guess: str = Field(..., description="Guessed word")

    @field_validator("guess")
    @classmethod
    def validate_guess(cls, v: str) -> str:
        return _normalize_guess(v)


class PracticeGuessRequest(BaseModel):
    session_id: str = Field(..., description="Token returned by /api/practice/start")
    guess: str = Field(..., description="Guessed word")

    @field_validator("guess")
    @classmethod
    def validate_guess(cls, v: str) -> str:
        return _normalize_guess(v)


class PracticeResultRequest(BaseModel):
    session_id: str
    won: bool = Field(..., description="Result claimed by the client")


class GuessResult(BaseModel):
    status: GuessStatus
    is_valid: bool
    is_correct: bool
    result: List[GuessMark]
    error: Optional[str] = None


class PracticeStartResponse(BaseModel):
    session_id: str
    length: int


class PeekWordResponse(BaseModel):
    word: Optional[str] = None


class StatsOutcome(BaseModel):
    status: StatsStatus
    recorded: bool
    won: bool = False
    error: Optional[str] = None


class WordStat(BaseModel):
    word: str
    correct_guesses: int = 0
    incorrect_guesses: int = 0


class AggregateStats(BaseModel):
    available: bool = True
    completed_games: int = 0
    wins: int = 0
    losses: int = 0
    words: List[WordStat] = Field(default_factory=list)


class RotationStatus(BaseModel):
    today: str
    day_number: int
    timezone: str
    local_time: str
    cached: bool
