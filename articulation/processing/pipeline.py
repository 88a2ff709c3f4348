"""
Articulation — Session Pipeline

Runs the analyzers in data-flow order for one practice transcript
(fillers and structure first, filler count feeding diagnostics) and
turns the report into an ExerciseAttempt ready for ingestion.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional

from ..core.models import ExerciseAttempt, ExerciseConfig, SessionReport, utc_now
from ..core.scoring import rounded_mean
from .diagnostics import analyze_speech_diagnostics
from .fillers import analyze_filler_words
from .structure import analyze_structural_elements

logger = logging.getLogger("articulation.pipeline")


def analyze_session(transcript: str, duration_seconds: float) -> SessionReport:
    minutes = duration_seconds / 60.0
    fillers = analyze_filler_words(transcript, minutes)
    structure = analyze_structural_elements(transcript, minutes)
    diagnostics = analyze_speech_diagnostics(
        transcript, minutes, filler_word_count=fillers.total_filler_words
    )
    return SessionReport(fillers=fillers, structure=structure, diagnostics=diagnostics)


def build_attempt(
    exercise: ExerciseConfig,
    report: SessionReport,
    duration_seconds: float,
    xp_earned: int,
    timestamp: Optional[datetime] = None,
) -> ExerciseAttempt:
    """
    Attempt for `exercise`: impacted scores are the diagnostics subscores
    the exercise trains; the attempt score is their rounded mean.
    """
    subscores = report.diagnostics.subscores
    impacted = {name: subscores[name] for name in exercise.impacts_scores if name in subscores}
    score = rounded_mean(impacted.values())

    attempt = ExerciseAttempt(
        id=uuid.uuid4().hex[:12],
        exercise_id=exercise.id,
        score=score if score is not None else 0,
        impacted_scores=impacted,
        xp_earned=xp_earned,
        duration=duration_seconds,
        timestamp=timestamp or utc_now(),
    )
    logger.info(f"Attempt {attempt.id} built for {exercise.id}: score {attempt.score}")
    return attempt
