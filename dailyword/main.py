# FastAPI server for the daily word game and its practice mode.
# Provides:
# - GET  /api/daily/word: today's word
# - POST /api/daily/guess: score a guess against today's word
# - GET  /api/daily/next: minutes until the next word
# - GET  /api/daily/status: word rotation diagnostics
# - POST /api/daily/cache/clear: force the word of the day to be recomputed
# - POST /api/practice/start: start a practice game
# - POST /api/practice/guess: submit a practice guess
# - GET  /api/practice/{session_id}/word: reveal a practice word
# - POST /api/practice/result: record a finished practice game
# - GET  /api/stats: practice statistics
# - POST /api/stats/clear: reset all practice statistics
# - GET  /api/health: liveness
#
# Run: uvicorn dailyword.main:app --host 0.0.0.0 --port 8000

from __future__ import annotations
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
import logging
import time

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .game import LengthMismatch, NoWordsAvailable
from .models import (
    AggregateStats, DailyGuessRequest, GuessResult, PeekWordResponse, PracticeGuessRequest,
    PracticeResultRequest, PracticeStartResponse, RotationStatus, StatsOutcome
)
from .service import WordGame

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(game: Optional[WordGame] = None) -> FastAPI:
    game = game or WordGame.from_config()
    started = time.monotonic()

    @asynccontextmanager
    async def lifespan(app):
        game.stats.init_db()
        logger.info("Word game ready with %d words", len(game.vocabulary.words))
        yield
        logger.info("Stop server")

    app = FastAPI(title="Daily Word", version="1.0.0", lifespan=lifespan)
    app.state.game = game

    # CORS for dev convenience
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=True,
    )

    @app.get("/api/health")
    async def api_health():
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": time.monotonic() - started,
            "active_sessions": game.sessions.active_count(),
        }

    @app.get("/api/daily/word")
    async def api_todays_word():
        return {"word": game.get_todays_word()}

    @app.post("/api/daily/guess", response_model=GuessResult)
    async def api_daily_guess(req: DailyGuessRequest):
        try:
            return game.try_daily_guess(req.guess)
        except LengthMismatch as e:
            raise HTTPException(status_code=400, detail=str(e))

    @app.get("/api/daily/next")
    async def api_minutes_until_next():
        return {"minutes": game.minutes_until_next_daily_word()}

    @app.get("/api/daily/status", response_model=RotationStatus)
    async def api_daily_status():
        return game.daily_rotation_status()

    @app.post("/api/daily/cache/clear")
    async def api_clear_cache():
        # Note: in production, protect with auth
        game.clear_daily_word_cache()
        return {"ok": True, "message": "Word cache cleared"}

    @app.post("/api/practice/start", response_model=PracticeStartResponse)
    async def api_practice_start():
        try:
            return game.start_practice_session()
        except NoWordsAvailable as e:
            raise HTTPException(status_code=503, detail=str(e))

    @app.post("/api/practice/guess", response_model=GuessResult)
    async def api_practice_guess(req: PracticeGuessRequest):
        return game.try_practice_guess(req.session_id, req.guess)

    @app.get("/api/practice/{session_id}/word", response_model=PeekWordResponse)
    async def api_practice_word(session_id: str):
        return game.peek_practice_word(session_id)

    @app.post("/api/practice/result", response_model=StatsOutcome)
    async def api_practice_result(req: PracticeResultRequest):
        return await game.record_practice_result(req.session_id, req.won)

    @app.get("/api/stats", response_model=AggregateStats)
    async def api_stats():
        return await game.get_stats()

    @app.post("/api/stats/clear")
    async def api_stats_clear():
        # Note: in production, protect with auth
        await game.clear_stats()
        return {"ok": True}

    return app


app = create_app()
