"""HTTP surface, exercised through FastAPI's TestClient."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from articulation import server
from articulation.services.progress import ProgressService
from articulation.services.storage import MemoryStore


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(server, "service", ProgressService(store=MemoryStore()))
    with TestClient(server.app) as c:
        yield c


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


def test_analyze_fillers(client):
    r = client.post("/analyze/fillers", json={"transcript": "Um, like, I mean it", "duration_minutes": 0.5})
    body = r.json()
    assert r.status_code == 200
    assert body["total_filler_words"] == 3
    assert body["fillers_per_minute"] == 6.0
    assert body["category_counts"]["discourse"] == 2


def test_analyze_structure(client):
    r = client.post("/analyze/structure", json={"transcript": "In my opinion, yes."})
    assert r.json()["position_count"] == 1


def test_analyze_diagnostics_counts_fillers_when_absent(client):
    r = client.post("/analyze/diagnostics", json={"transcript": "Um, uh, well I think."})
    body = r.json()
    assert body["fluency"]["signals"]["filler_word_count"] == 3
    assert set(body["subscores"]) == {"fluency", "clarity", "precision", "confidence", "impact"}

    r = client.post("/analyze/diagnostics", json={"transcript": "Um, uh.", "filler_word_count": 0})
    assert r.json()["fluency"]["signals"]["filler_word_count"] == 0


def test_session_unknown_exercise(client):
    r = client.post("/users/u1/sessions", json={"exercise_id": "juggling", "transcript": "hi"})
    assert r.status_code == 404
    assert "juggling" in r.json()["error"]


def test_session_rejects_negative_duration(client):
    r = client.post("/users/u1/sessions", json={"exercise_id": "filler-words", "duration_seconds": -5})
    assert r.status_code == 422


def test_session_flow(client):
    r = client.post("/users/u1/sessions", json={
        "exercise_id": "filler-words",
        "transcript": "Um, I believe we should ship because users asked for it.",
        "duration_seconds": 45,
        "xp_earned": 20,
        "timestamp": "2026-03-01T10:00:00+00:00",
    })
    assert r.status_code == 200
    body = r.json()
    assert body["attempt"]["exercise_id"] == "filler-words"
    assert set(body["attempt"]["impacted_scores"]) == {"fluency", "clarity"}
    assert body["report"]["fillers"]["total_filler_words"] == 1
    assert body["progress"]["total_sessions"] == 1
    assert body["progress"]["last_practice_date"] == "2026-03-01"

    progress = client.get("/users/u1/progress").json()
    assert progress == body["progress"]

    history = client.get("/users/u1/history").json()
    assert [a["id"] for a in history] == [body["attempt"]["id"]]
    assert client.get("/users/u1/history", params={"exercise_id": "other"}).json() == []


def test_attempt_and_achievements(client):
    r = client.post("/users/u1/attempts", json={
        "exercise_id": "one-minute-explainer",
        "score": 100,
        "impacted_scores": {"clarity": 100, "fluency": 100, "volume": 3},
        "xp_earned": 10,
        "timestamp": "2026-03-01T10:00:00Z",
        "archetype_id": "polished-pro",
    })
    progress = r.json()
    assert r.status_code == 200
    assert progress["communication_score"]["overall"] == 100
    assert progress["archetype"]["id"] == "polished-pro"
    assert "perfect-score" in progress["achievements"]

    achievements = client.get("/users/u1/achievements").json()
    assert len(achievements) == 28
    unlocked = {a["id"] for a in achievements if a["unlocked"]}
    assert {"score-90", "perfect-score"} <= unlocked


def test_streak_endpoints_and_clear(client):
    client.post("/users/u1/attempts", json={
        "exercise_id": "filler-words", "score": 50, "timestamp": "2020-01-01T10:00:00Z",
    })
    assert client.post("/users/u1/streak/refresh").json()["current_streak"] == 0

    status = client.get("/users/u1/streak").json()
    assert status == {
        "current_streak": 0, "longest_streak": 1, "has_practiced_today": False, "is_at_risk": False,
    }

    assert client.delete("/users/u1").json()["status"] == "cleared"
    assert client.get("/users/u1/progress").json()["total_sessions"] == 0
