"""
Articulation — FastAPI Server

================================================================================
Architecture:
  • Stateless analysis endpoints wrap the text-analysis engine
  • Per-user progress endpoints go through a single ProgressService,
    backed by the configured key-value store (memory or file)
  • Ingestion is serialised per user inside the service
================================================================================

Endpoints:
  GET    /health                          — server health
  GET    /exercises                       — exercise catalog (?category=)
  POST   /analyze/fillers                 — filler word analysis
  POST   /analyze/structure               — position / supporting phrases
  POST   /analyze/diagnostics             — six-metric speech diagnostics
  POST   /users/{user_id}/sessions        — analyze + score + ingest a transcript
  POST   /users/{user_id}/attempts        — ingest an already-scored attempt
  GET    /users/{user_id}/progress        — stored progress
  POST   /users/{user_id}/streak/refresh  — decay a lapsed streak
  GET    /users/{user_id}/streak          — streak status (today / at risk)
  GET    /users/{user_id}/history         — attempt history (?exercise_id=)
  GET    /users/{user_id}/achievements    — catalog with unlock state + progress
  DELETE /users/{user_id}                 — clear progress and history
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .core.config import server_cfg, storage_cfg
from .core.models import ExerciseAttempt, SUBSCORES, parse_timestamp, utc_now
from .data.archetypes import ARCHETYPES
from .data.exercises import (
    EXERCISES,
    get_exercise_by_id,
    get_exercises_by_category,
    is_exercise_implemented,
)
from .processing.diagnostics import analyze_speech_diagnostics
from .processing.fillers import analyze_filler_words
from .processing.pipeline import analyze_session, build_attempt
from .processing.structure import analyze_structural_elements
from .services.progress import ProgressService

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger("articulation")
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

VERSION = "1.0.0"

# ---------------------------------------------------------------------------
# Progress service
# ---------------------------------------------------------------------------

service = ProgressService()


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class TranscriptRequest(BaseModel):
    transcript: str = ""
    duration_minutes: float = 1.0


class DiagnosticsRequest(TranscriptRequest):
    filler_word_count: Optional[int] = None


class SessionRequest(BaseModel):
    exercise_id: str
    transcript: str = ""
    duration_seconds: float = Field(default=60.0, ge=0)
    xp_earned: int = Field(default=0, ge=0)
    timestamp: Optional[datetime] = None
    archetype_id: Optional[str] = None


class AttemptRequest(BaseModel):
    exercise_id: str
    score: int
    impacted_scores: Dict[str, int] = {}
    xp_earned: int = Field(default=0, ge=0)
    duration: float = Field(default=0.0, ge=0)
    timestamp: Optional[datetime] = None
    id: Optional[str] = None
    archetype_id: Optional[str] = None


# ---------------------------------------------------------------------------
# FastAPI Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Articulation backend starting...")
    logger.info(f"   Store backend: {storage_cfg.backend}")
    yield
    logger.info("Articulation backend stopped")


# ---------------------------------------------------------------------------
# FastAPI App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Articulation — Communication Practice Scoring",
    version=VERSION,
    description=(
        "Scores transcribed practice sessions on fluency, clarity, precision, "
        "confidence and impact, and tracks streaks, XP and achievements."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(server_cfg.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health():
    return {
        "status": "ok",
        "version": VERSION,
        "store": storage_cfg.backend,
    }


@app.get("/exercises")
async def exercises(category: Optional[str] = None):
    catalog = get_exercises_by_category(category) if category else EXERCISES
    return [
        {**e.to_dict(), "implemented": is_exercise_implemented(e.id)}
        for e in catalog
    ]


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------

@app.post("/analyze/fillers")
async def fillers(req: TranscriptRequest):
    return analyze_filler_words(req.transcript, req.duration_minutes).to_dict()


@app.post("/analyze/structure")
async def structure(req: TranscriptRequest):
    return analyze_structural_elements(req.transcript, req.duration_minutes).to_dict()


@app.post("/analyze/diagnostics")
async def diagnostics(req: DiagnosticsRequest):
    filler_count = req.filler_word_count
    if filler_count is None:
        filler_count = analyze_filler_words(req.transcript, req.duration_minutes).total_filler_words
    return analyze_speech_diagnostics(
        req.transcript, req.duration_minutes, filler_word_count=filler_count
    ).to_dict()


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------

def _archetype(archetype_id: Optional[str]):
    return ARCHETYPES.get(archetype_id) if archetype_id else None


@app.post("/users/{user_id}/sessions")
def submit_session(user_id: str, req: SessionRequest):
    exercise = get_exercise_by_id(req.exercise_id)
    if exercise is None:
        return JSONResponse(status_code=404, content={"error": f"Unknown exercise {req.exercise_id}"})

    report = analyze_session(req.transcript, req.duration_seconds)
    attempt = build_attempt(
        exercise,
        report,
        duration_seconds=req.duration_seconds,
        xp_earned=req.xp_earned,
        timestamp=parse_timestamp(req.timestamp) if req.timestamp else None,
    )
    progress = service.ingest_attempt(user_id, attempt, _archetype(req.archetype_id))
    return {
        "report": report.to_dict(),
        "attempt": attempt.to_dict(),
        "progress": progress.to_dict(),
    }


@app.post("/users/{user_id}/attempts")
def submit_attempt(user_id: str, req: AttemptRequest):
    attempt = ExerciseAttempt(
        id=req.id or uuid.uuid4().hex[:12],
        exercise_id=req.exercise_id,
        score=req.score,
        impacted_scores={k: v for k, v in req.impacted_scores.items() if k in SUBSCORES},
        xp_earned=req.xp_earned,
        duration=req.duration,
        timestamp=parse_timestamp(req.timestamp) if req.timestamp else utc_now(),
    )
    progress = service.ingest_attempt(user_id, attempt, _archetype(req.archetype_id))
    return progress.to_dict()


@app.get("/users/{user_id}/progress")
def get_progress(user_id: str):
    return service.get_user_progress(user_id).to_dict()


@app.post("/users/{user_id}/streak/refresh")
def refresh_streak(user_id: str):
    return service.refresh_streak(user_id).to_dict()


@app.get("/users/{user_id}/streak")
def streak(user_id: str):
    return service.streak_status(user_id).to_dict()


@app.get("/users/{user_id}/history")
def history(user_id: str, exercise_id: Optional[str] = None):
    if exercise_id:
        attempts = service.get_exercise_attempts(user_id, exercise_id)
    else:
        attempts = service.get_exercise_history(user_id)
    return [a.to_dict() for a in attempts]


@app.get("/users/{user_id}/achievements")
def achievements(user_id: str):
    return service.achievements_overview(user_id)


@app.delete("/users/{user_id}")
def clear_user(user_id: str) -> Dict[str, Any]:
    service.clear_user_progress(user_id)
    return {"status": "cleared", "user_id": user_id}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "articulation.server:app",
        host=server_cfg.host,
        port=server_cfg.port,
        reload=True,
        log_level="info",
    )
