"""
Articulation — Streak State Machine

Tracks consecutive practice days: NO_HISTORY → ACTIVE(n) → BROKEN.
Days are UTC calendar dates ("YYYY-MM-DD"); every transition goes
through this module and is logged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from .models import UserProgress

logger = logging.getLogger("articulation.streak")


class StreakState(str, Enum):
    NO_HISTORY = "no_history"   # Never practiced
    ACTIVE = "active"           # Practiced today or yesterday
    BROKEN = "broken"           # Missed at least one full day


def to_date_key(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).date().isoformat()


def date_diff_in_days(earlier: str, later: str) -> int:
    """Whole calendar days from `earlier` to `later` (negative if reversed)."""
    return (date.fromisoformat(later) - date.fromisoformat(earlier)).days


def streak_state(progress: UserProgress, today: str) -> StreakState:
    if not progress.last_practice_date:
        return StreakState.NO_HISTORY
    if progress.current_streak > 0 and date_diff_in_days(progress.last_practice_date, today) <= 1:
        return StreakState.ACTIVE
    return StreakState.BROKEN


def apply_practice(progress: UserProgress, practiced_at: datetime) -> UserProgress:
    """
    Register a practice on `practiced_at`'s day. Returns a new progress
    value; the input is not mutated.

      • first practice      → streak 1
      • same day            → unchanged
      • next day            → streak + 1
      • gap of 2+ days      → streak restarts at 1
      • earlier than last   → unchanged (out-of-order attempt)
    """
    today = to_date_key(practiced_at)
    last: Optional[str] = progress.last_practice_date

    if not last:
        return _transition(progress, today, "first practice", current_streak=1,
                           longest_streak=max(1, progress.longest_streak), last_practice_date=today)

    diff = date_diff_in_days(last, today)
    if diff <= 0:
        return progress

    if diff == 1:
        streak = progress.current_streak + 1
        return _transition(progress, today, "consecutive day", current_streak=streak,
                           longest_streak=max(progress.longest_streak, streak), last_practice_date=today)

    return _transition(progress, today, f"gap of {diff} days", current_streak=1,
                       longest_streak=max(progress.longest_streak, 1), last_practice_date=today)


def decay(progress: UserProgress, now: datetime) -> UserProgress:
    """
    Passive refresh: a streak that is BROKEN but still counted drops to 0.
    `last_practice_date` is left untouched.
    """
    today = to_date_key(now)
    if streak_state(progress, today) is not StreakState.BROKEN or progress.current_streak == 0:
        return progress
    diff = date_diff_in_days(progress.last_practice_date, today)
    return _transition(progress, today, f"no practice for {diff} days", current_streak=0)


def _transition(progress: UserProgress, today: str, reason: str, **changes) -> UserProgress:
    updated = replace(progress, **changes)
    prev, target = streak_state(progress, today), streak_state(updated, today)
    logger.info(
        f"STREAK: {prev.value} → {target.value} "
        f"({progress.current_streak} → {updated.current_streak}, {reason})"
    )
    return updated
