"""
Testing the HTTP routes end to end.
"""

import pytest
from fastapi.testclient import TestClient

from dailyword.main import create_app


@pytest.fixture
def client(word_game):
    with TestClient(create_app(word_game)) as c:
        yield c


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
    assert r.json()["active_sessions"] == 0


def test_todays_word(client):
    assert client.get("/api/daily/word").json() == {"word": "route"}


def test_daily_guess(client):
    r = client.post("/api/daily/guess", json={"guess": " Outer "})
    body = r.json()
    assert r.status_code == 200
    assert body["status"] == "ok"
    assert body["is_valid"] and not body["is_correct"]
    assert body["result"] == ["present"] * 5

    body = client.post("/api/daily/guess", json={"guess": "route"}).json()
    assert body["is_correct"]


def test_daily_guess_not_in_list(client):
    body = client.post("/api/daily/guess", json={"guess": "qwert"}).json()
    assert body["status"] == "invalid_word"
    assert body["result"] == ["absent"] * 5


def test_daily_guess_wrong_length(client):
    r = client.post("/api/daily/guess", json={"guess": "four"})
    assert r.status_code == 400


def test_minutes_until_next(client):
    # fixture clock sits at 12:00 in Madrid
    assert client.get("/api/daily/next").json() == {"minutes": 720}


def test_clear_cache_and_status(client, word_game):
    client.get("/api/daily/word")
    assert client.get("/api/daily/status").json()["cached"] is True
    assert client.post("/api/daily/cache/clear").json()["ok"] is True
    assert word_game.daily.cached is None
    status = client.get("/api/daily/status").json()
    assert status["cached"] is False
    assert status["today"] == "route"


def test_practice_round_trip(client):
    start = client.post("/api/practice/start").json()
    assert set(start) == {"session_id", "length"}
    assert start["length"] == 5
    sid = start["session_id"]

    guess = client.post("/api/practice/guess", json={"session_id": sid, "guess": "ROUTE"}).json()
    assert guess["is_correct"]

    again = client.post("/api/practice/guess", json={"session_id": sid, "guess": "outer"}).json()
    assert again["status"] == "completed"

    assert client.get(f"/api/practice/{sid}/word").json() == {"word": "route"}

    result = client.post("/api/practice/result", json={"session_id": sid, "won": True}).json()
    assert result["status"] == "recorded"
    assert result["won"] is True

    replay = client.post("/api/practice/result", json={"session_id": sid, "won": True}).json()
    assert replay["status"] == "not_found"

    stats = client.get("/api/stats").json()
    assert stats["available"]
    assert stats["completed_games"] == 1 and stats["wins"] == 1
    assert stats["words"] == [{"word": "route", "correct_guesses": 1, "incorrect_guesses": 0}]


def test_practice_guess_unknown_session(client):
    body = client.post("/api/practice/guess", json={"session_id": "nope", "guess": "route"}).json()
    assert body["status"] == "not_found"
    assert body["error"]


def test_peek_unknown_session(client):
    assert client.get("/api/practice/nope/word").json() == {"word": None}


def test_stats_list_whole_practice_vocabulary(client):
    stats = client.get("/api/stats").json()
    assert stats["completed_games"] == 0
    assert [w["word"] for w in stats["words"]] == ["route"]


def test_clear_stats(client):
    sid = client.post("/api/practice/start").json()["session_id"]
    client.post("/api/practice/result", json={"session_id": sid, "won": False})
    assert client.get("/api/stats").json()["losses"] == 1

    assert client.post("/api/stats/clear").json() == {"ok": True}
    stats = client.get("/api/stats").json()
    assert (stats["completed_games"], stats["wins"], stats["losses"]) == (0, 0, 0)
    assert stats["words"] == [{"word": "route", "correct_guesses": 0, "incorrect_guesses": 0}]
