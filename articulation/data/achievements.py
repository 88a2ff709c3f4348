"""Achievement catalog (static reference data) and id lookup."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..core.models import AchievementDefinition


def _streak(days: int, xp: int, description: str, icon: str) -> AchievementDefinition:
    return AchievementDefinition(
        id=f"streak-{days}", name=f"{days}-Day Streak", description=description, icon=icon,
        requirement=f"Reach a {days}-day streak", xp_reward=xp, kind="streak", target=days,
    )


def _sessions(count: int, xp: int, description: str, icon: str) -> AchievementDefinition:
    return AchievementDefinition(
        id=f"sessions-{count}", name=f"{count} Sessions", description=description, icon=icon,
        requirement=f"Complete {count} sessions", xp_reward=xp, kind="sessions", target=count,
    )


def _improvement(subscore: str, name: str, icon: str) -> AchievementDefinition:
    label = subscore.capitalize()
    return AchievementDefinition(
        id=f"improve-{subscore}-20", name=name, description=f"Improve {subscore} by 20+ points.",
        icon=icon, requirement=f"{label} +20", xp_reward=120, kind="improvement",
        target=20, subscore=subscore,
    )


def _category(category: str, icon: str) -> AchievementDefinition:
    label = category.capitalize()
    return AchievementDefinition(
        id=f"category-{category}-master", name=f"{label} Category Master",
        description=f"Complete all {category} exercises.", icon=icon,
        requirement=f"All {category} exercises completed", xp_reward=160,
        kind="category-mastery", category=category,
    )


ACHIEVEMENTS: List[AchievementDefinition] = [
    _streak(3, 30, "Practice 3 days in a row.", "🔥"),
    _streak(7, 70, "Keep your streak alive for a full week.", "🔥🎉"),
    _streak(14, 120, "Two weeks of consistency.", "🔥🎉"),
    _streak(30, 300, "A full month of daily reps.", "🏆"),
    _streak(60, 500, "Elite consistency.", "🏆"),
    _streak(100, 1000, "Legendary commitment.", "👑"),

    _sessions(10, 50, "Build your first habit loop.", "📈"),
    _sessions(25, 100, "Strong momentum established.", "📈"),
    _sessions(50, 180, "You show up consistently.", "📈"),
    _sessions(100, 350, "Triple-digit reps achieved.", "🚀"),
    _sessions(250, 800, "Master-level dedication.", "🚀"),

    AchievementDefinition(
        id="score-70", name="Rising Communicator", description="Reach 70 overall communication score.",
        icon="⭐", requirement="Reach 70 overall score", xp_reward=100, kind="score", target=70,
    ),
    AchievementDefinition(
        id="score-80", name="Confident Communicator", description="Reach 80 overall communication score.",
        icon="🌟", requirement="Reach 80 overall score", xp_reward=180, kind="score", target=80,
    ),
    AchievementDefinition(
        id="score-90", name="Elite Communicator", description="Reach 90 overall communication score.",
        icon="✨", requirement="Reach 90 overall score", xp_reward=300, kind="score", target=90,
    ),

    _improvement("fluency", "Fluency Leap", "🧠"),
    _improvement("clarity", "Clarity Leap", "🎯"),
    _improvement("precision", "Precision Leap", "🛠️"),
    _improvement("confidence", "Confidence Leap", "💪"),
    _improvement("impact", "Impact Leap", "📣"),

    AchievementDefinition(
        id="master-filler-words", name="Filler Specialist",
        description="Complete Filler Word Cleanup 10 times.", icon="🎤",
        requirement="10x Filler Word Cleanup", xp_reward=150, kind="exercise-mastery",
        target=10, exercise_id="filler-words",
    ),
    AchievementDefinition(
        id="master-one-minute-explainer", name="Explainer Specialist",
        description="Complete One-Minute Explainer 10 times.", icon="🗣️",
        requirement="10x One-Minute Explainer", xp_reward=150, kind="exercise-mastery",
        target=10, exercise_id="one-minute-explainer",
    ),
    AchievementDefinition(
        id="master-eliminate-meandering", name="Precision Specialist",
        description="Complete Eliminate Meandering 10 times.", icon="🧭",
        requirement="10x Eliminate Meandering", xp_reward=150, kind="exercise-mastery",
        target=10, exercise_id="eliminate-meandering",
    ),

    AchievementDefinition(
        id="perfect-score", name="Perfect Run", description="Score 100/100 on any exercise.",
        icon="💯", requirement="100 score on any attempt", xp_reward=200, kind="perfect", target=100,
    ),

    _category("fluency", "🌊"),
    _category("clarity", "🔎"),
    _category("precision", "📐"),
    _category("confidence", "🦁"),
    _category("impact", "⚡"),
]

ACHIEVEMENT_BY_ID: Dict[str, AchievementDefinition] = {a.id: a for a in ACHIEVEMENTS}


def get_achievement_by_id(achievement_id: str) -> Optional[AchievementDefinition]:
    return ACHIEVEMENT_BY_ID.get(achievement_id)

