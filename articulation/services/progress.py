"""
Articulation — Progress Aggregator

Owns the per-user read-modify-write cycle: a scored attempt comes in,
the stored profile is blended, streaks and XP move, achievements are
awarded, and both records are written back.

Ingestion and streak refresh run under a per-user lock, so concurrent
requests for the same user cannot interleave their read and write.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..core.config import ScoringConfig, StorageConfig, scoring_cfg, storage_cfg
from ..core.interfaces import ArchetypeClassifier, KeyValueStore
from ..core.models import (
    SUBSCORES,
    AchievementDefinition,
    Archetype,
    CommunicationScore,
    ExerciseAttempt,
    ExerciseConfig,
    Measured,
    StreakStatus,
    Unmeasured,
    UserProgress,
    utc_now,
)
from ..core.scoring import clamp, rounded_mean
from ..core.streak import apply_practice, decay, to_date_key
from ..data.achievements import ACHIEVEMENTS
from ..data.archetypes import DEFAULT_ARCHETYPE, determine_archetype
from ..data.exercises import EXERCISES
from .achievements import achievement_progress, evaluate_achievements
from .storage import ProgressRepository, build_store

logger = logging.getLogger("articulation.progress")


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------

def crossed_milestone(previous: int, current: int, milestones: Sequence[int]) -> Optional[int]:
    """Smallest milestone m with previous < m <= current (one per call)."""
    for m in sorted(milestones):
        if previous < m <= current:
            return m
    return None


def recalc_overall(score: CommunicationScore) -> int:
    """Rounded mean of measured subscores; unchanged when none are measured."""
    mean = rounded_mean(score.measured_values().values())
    return score.overall if mean is None else mean


def blend_scores(
    score: CommunicationScore,
    impacted: Mapping[str, int],
    cfg: ScoringConfig = scoring_cfg,
) -> CommunicationScore:
    """
    New CommunicationScore with each impacted subscore blended in:
    measured values move 30% toward the new value, unmeasured ones take
    it directly.
    """
    blended = replace(score)
    for name, value in impacted.items():
        if name not in SUBSCORES:
            continue
        current = blended.get(name)
        if isinstance(current, Measured):
            nxt = clamp(current.value * cfg.blend_previous_weight + value * cfg.blend_new_weight)
        elif isinstance(current, Unmeasured):
            nxt = clamp(value)
        else:
            raise TypeError(f"Unexpected subscore value for {name}: {current!r}")
        blended.set(name, Measured(nxt))
    blended.overall = recalc_overall(blended)
    blended.last_updated = utc_now()
    return blended


def _award(progress: UserProgress, achievement: AchievementDefinition) -> bool:
    if progress.has_achievement(achievement.id):
        return False
    progress.achievements.append(achievement.id)
    progress.total_xp += achievement.xp_reward
    logger.info(
        f"[{progress.user_id}] Achievement unlocked: {achievement.id} (+{achievement.xp_reward} XP)"
    )
    return True


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class ProgressService:
    """
    Progress aggregation over an injected key-value store.

    Usage:
        service = ProgressService(store=MemoryStore())
        progress = service.ingest_attempt("user-1", attempt)
        progress = service.refresh_streak("user-1")
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        classifier: Optional[ArchetypeClassifier] = None,
        cfg: ScoringConfig = scoring_cfg,
        storage: StorageConfig = storage_cfg,
        catalog: Sequence[AchievementDefinition] = ACHIEVEMENTS,
        exercises: Sequence[ExerciseConfig] = EXERCISES,
    ) -> None:
        self._repo = ProgressRepository(store if store is not None else build_store(storage), storage)
        self._classify = classifier or determine_archetype
        self._cfg = cfg
        self._catalog = list(catalog)
        self._catalog_by_id = {a.id: a for a in self._catalog}
        self._exercises = list(exercises)

        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _user_lock(self, user_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    # ── Reads ───────────────────────────────────────────────────────────

    def get_user_progress(self, user_id: str) -> UserProgress:
        return self._repo.get_user_progress(user_id)

    def get_exercise_history(self, user_id: str) -> List[ExerciseAttempt]:
        return self._repo.get_exercise_history(user_id)

    def get_exercise_attempts(self, user_id: str, exercise_id: str) -> List[ExerciseAttempt]:
        return self._repo.get_exercise_attempts(user_id, exercise_id)

    def has_achievement(self, user_id: str, achievement_id: str) -> bool:
        if not self._repo.has_progress(user_id):
            return False
        return self._repo.get_user_progress(user_id).has_achievement(achievement_id)

    # ── Attempt ingestion ───────────────────────────────────────────────

    def ingest_attempt(
        self,
        user_id: str,
        attempt: ExerciseAttempt,
        archetype_override: Optional[Archetype] = None,
    ) -> UserProgress:
        with self._user_lock(user_id):
            progress = self._repo.get_user_progress(user_id)
            previous_streak = progress.current_streak

            progress = apply_practice(progress, attempt.timestamp)
            progress = replace(progress, achievements=list(progress.achievements))

            milestone = crossed_milestone(
                previous_streak, progress.current_streak, self._cfg.streak_milestones
            )
            if milestone is not None:
                streak_achievement = self._streak_achievement(milestone)
                if streak_achievement is not None:
                    _award(progress, streak_achievement)

            progress.communication_score = blend_scores(
                progress.communication_score, attempt.impacted_scores, self._cfg
            )
            progress.total_xp += attempt.xp_earned
            progress.total_sessions += 1
            progress.total_practice_time += attempt.duration

            if archetype_override is not None:
                progress.archetype = archetype_override
            else:
                progress.archetype = self._classify(progress.communication_score) or DEFAULT_ARCHETYPE

            history = self._repo.get_exercise_history(user_id) + [attempt]
            for achievement in evaluate_achievements(progress, history, self._catalog, self._exercises):
                _award(progress, achievement)

            self._repo.save_user_progress(progress)
            self._repo.append_attempt(user_id, attempt)

            logger.info(
                f"[{user_id}] Attempt {attempt.id} ({attempt.exercise_id}) ingested: "
                f"overall {progress.communication_score.overall}, "
                f"streak {progress.current_streak}, XP {progress.total_xp}"
            )
            return progress

    def _streak_achievement(self, days: int) -> Optional[AchievementDefinition]:
        for achievement in self._catalog:
            if achievement.kind == "streak" and achievement.target == days:
                return achievement
        return None

    # ── Streaks ─────────────────────────────────────────────────────────

    def refresh_streak(self, user_id: str, now: Optional[datetime] = None) -> UserProgress:
        """Zero a lapsed streak. Called on load, never on attempt submission."""
        now = now or utc_now()
        with self._user_lock(user_id):
            progress = self._repo.get_user_progress(user_id)
            refreshed = decay(progress, now)
            if refreshed is not progress:
                self._repo.save_user_progress(refreshed)
            return refreshed

    def streak_status(self, user_id: str, now: Optional[datetime] = None) -> StreakStatus:
        now = now or utc_now()
        progress = self.refresh_streak(user_id, now)
        practiced_today = progress.last_practice_date == to_date_key(now)
        return StreakStatus(
            current_streak=progress.current_streak,
            longest_streak=progress.longest_streak,
            has_practiced_today=practiced_today,
            is_at_risk=(
                not practiced_today
                and progress.current_streak > 0
                and now.hour >= self._cfg.streak_risk_hour
            ),
        )

    # ── Achievements ────────────────────────────────────────────────────

    def award_achievement(self, user_id: str, achievement_id: str) -> bool:
        """Grant a catalog achievement outside ingestion. False if unknown, owned or no record."""
        achievement = self._catalog_by_id.get(achievement_id)
        if achievement is None:
            return False
        with self._user_lock(user_id):
            if not self._repo.has_progress(user_id):
                return False
            progress = self._repo.get_user_progress(user_id)
            if not _award(progress, achievement):
                return False
            self._repo.save_user_progress(progress)
            return True

    def achievements_overview(self, user_id: str) -> List[Dict[str, Any]]:
        """Every catalog entry with ownership and progress toward it."""
        progress = self._repo.get_user_progress(user_id)
        history = self._repo.get_exercise_history(user_id)
        overview: List[Dict[str, Any]] = []
        for achievement in self._catalog:
            tracked = achievement_progress(achievement, progress, history, self._exercises)
            overview.append({
                **achievement.to_dict(),
                "unlocked": progress.has_achievement(achievement.id),
                "progress": tracked.to_dict() if tracked else None,
            })
        return overview

    # ── Reset ───────────────────────────────────────────────────────────

    def clear_user_progress(self, user_id: str) -> None:
        with self._user_lock(user_id):
            self._repo.clear(user_id)
