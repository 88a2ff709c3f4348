"""
Articulation — Achievement Evaluator

Stateless: given a progress snapshot and the full attempt history,
returns the catalog entries that are unlocked and not yet owned.
Re-running on the same inputs always yields the same list.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence

from ..core.models import (
    AchievementDefinition,
    AchievementProgress,
    ExerciseAttempt,
    ExerciseConfig,
    UserProgress,
)
from ..data.achievements import ACHIEVEMENTS
from ..data.exercises import EXERCISES

logger = logging.getLogger("articulation.achievements")

DEFAULT_IMPROVEMENT_TARGET = 20
DEFAULT_MASTERY_TARGET = 10
DEFAULT_PERFECT_TARGET = 100


def _attempt_counts(attempts: Sequence[ExerciseAttempt]) -> Dict[str, int]:
    return Counter(a.exercise_id for a in attempts)


def _category_exercises(category: str, exercises: Sequence[ExerciseConfig]) -> List[ExerciseConfig]:
    return [e for e in exercises if e.category == category]


def has_improvement_of_at_least(
    attempts: Sequence[ExerciseAttempt], subscore: str, target: int
) -> bool:
    """Spread between best and worst recorded value; needs two values."""
    values = [a.impacted_scores[subscore] for a in attempts if subscore in a.impacted_scores]
    if len(values) < 2:
        return False
    return max(values) - min(values) >= target


def is_unlocked(
    achievement: AchievementDefinition,
    progress: UserProgress,
    attempts: Sequence[ExerciseAttempt],
    exercises: Sequence[ExerciseConfig] = EXERCISES,
) -> bool:
    kind = achievement.kind
    target = achievement.target

    if kind == "streak":
        return progress.current_streak >= (target or 0)
    if kind == "sessions":
        return progress.total_sessions >= (target or 0)
    if kind == "score":
        return progress.communication_score.overall >= (target or 0)
    if kind == "improvement":
        if not achievement.subscore:
            return False
        return has_improvement_of_at_least(
            attempts, achievement.subscore, target if target is not None else DEFAULT_IMPROVEMENT_TARGET
        )
    if kind == "exercise-mastery":
        if not achievement.exercise_id:
            return False
        count = _attempt_counts(attempts).get(achievement.exercise_id, 0)
        return count >= (target if target is not None else DEFAULT_MASTERY_TARGET)
    if kind == "perfect":
        threshold = target if target is not None else DEFAULT_PERFECT_TARGET
        return any(a.score >= threshold for a in attempts)
    if kind == "category-mastery":
        if not achievement.category:
            return False
        in_category = _category_exercises(achievement.category, exercises)
        if not in_category:
            return False
        completed = {a.exercise_id for a in attempts}
        return all(e.id in completed for e in in_category)

    logger.warning(f"Unknown achievement kind {kind!r} on {achievement.id}")
    return False


def evaluate_achievements(
    progress: UserProgress,
    history: Sequence[ExerciseAttempt] = (),
    catalog: Sequence[AchievementDefinition] = ACHIEVEMENTS,
    exercises: Sequence[ExerciseConfig] = EXERCISES,
) -> List[AchievementDefinition]:
    """Catalog entries whose condition holds and that `progress` does not own."""
    owned = set(progress.achievements)
    return [
        a for a in catalog
        if a.id not in owned and is_unlocked(a, progress, history, exercises)
    ]


def achievement_progress(
    achievement: AchievementDefinition,
    progress: UserProgress,
    history: Sequence[ExerciseAttempt] = (),
    exercises: Sequence[ExerciseConfig] = EXERCISES,
) -> Optional[AchievementProgress]:
    """Current value vs. target for countable kinds; None otherwise."""
    kind = achievement.kind
    if kind == "streak":
        return AchievementProgress(progress.current_streak, achievement.target or 1)
    if kind == "sessions":
        return AchievementProgress(progress.total_sessions, achievement.target or 1)
    if kind == "score":
        return AchievementProgress(progress.communication_score.overall, achievement.target or 1)
    if kind == "exercise-mastery":
        if not achievement.exercise_id:
            return None
        count = _attempt_counts(history).get(achievement.exercise_id, 0)
        return AchievementProgress(count, achievement.target or DEFAULT_MASTERY_TARGET)
    if kind == "category-mastery":
        if not achievement.category:
            return None
        in_category = _category_exercises(achievement.category, exercises)
        completed = {a.exercise_id for a in history}
        current = sum(1 for e in in_category if e.id in completed)
        return AchievementProgress(current, len(in_category) or 1)
    return None
