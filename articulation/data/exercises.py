"""Exercise catalog (static reference data) and lookups."""

from __future__ import annotations

from typing import List, Optional

from ..core.models import ExerciseConfig

EXERCISES: List[ExerciseConfig] = [
    ExerciseConfig(
        id="one-minute-explainer",
        name="One-Minute Explainer",
        description=(
            "Explain a concept in 60 seconds with a clear beginning, middle, and end "
            "for someone unfamiliar with it."
        ),
        short_description="Build fast structure and clear delivery under time pressure.",
        estimated_time=180, type="verbal", category="clarity", tier="foundation",
        icon="target", impacts_scores=("clarity", "fluency"),
    ),
    ExerciseConfig(
        id="progressive-detail-expansion",
        name="Progressive Detail Expansion",
        description=(
            "Explain the same topic in 15, 30, and 60 seconds to train prioritization "
            "and adaptive depth."
        ),
        short_description="Scale your explanation depth for different time windows.",
        estimated_time=300, type="verbal", category="clarity", tier="adaptive",
        icon="layers", impacts_scores=("clarity", "precision"),
    ),
    ExerciseConfig(
        id="impromptu-response",
        name="Impromptu Response",
        description=(
            "You get a surprise prompt and 5 seconds to think before responding. "
            "Builds composure under pressure."
        ),
        short_description="Think fast and speak with structure.",
        estimated_time=120, type="verbal", category="impact", tier="adaptive",
        icon="mic", impacts_scores=("clarity", "confidence", "impact"),
    ),
    ExerciseConfig(
        id="eliminate-meandering",
        name="Eliminate Meandering",
        description=(
            "Record one version, review the transcript, then re-record the same message "
            "with fewer words and less clutter."
        ),
        short_description="Say the same thing with fewer words and more clarity.",
        estimated_time=300, type="verbal", category="clarity", tier="foundation",
        icon="scissors", impacts_scores=("clarity", "precision"),
    ),
    ExerciseConfig(
        id="structure-template",
        name="Structure Template Challenge",
        description=(
            "Use an argument framework: position, three reasons, counterpoint, "
            "and restated position."
        ),
        short_description="Practice structured speaking with repeatable argument patterns.",
        estimated_time=240, type="verbal", category="clarity", tier="foundation",
        icon="layout-list", impacts_scores=("clarity", "confidence"),
    ),
    ExerciseConfig(
        id="filler-words",
        name="Filler Word Cleanup",
        description=(
            "Speak naturally while the system detects filler words. "
            "Focus on pacing and intentional pauses."
        ),
        short_description="Reduce filler words and improve fluency.",
        estimated_time=60, type="verbal", category="fluency", tier="foundation",
        icon="message-circle", impacts_scores=("fluency", "clarity"),
    ),
    ExerciseConfig(
        id="dead-phrase-autopsy",
        name="Dead Phrase Autopsy",
        description=(
            "Replace cliches and dead phrases with fresh, precise wording that reflects "
            "your real meaning."
        ),
        short_description="Swap cliches for specific and original language.",
        estimated_time=180, type="written", category="precision", tier="foundation",
        icon="filter", impacts_scores=("precision", "clarity"),
    ),
    ExerciseConfig(
        id="synonym-discrimination",
        name="Synonym Discrimination",
        description=(
            "Choose context-best synonyms and explain your choice to sharpen nuance "
            "in word selection."
        ),
        short_description="Train precise word choice through contextual contrasts.",
        estimated_time=240, type="written", category="precision", tier="adaptive",
        icon="git-compare", impacts_scores=("precision", "impact"),
    ),
    ExerciseConfig(
        id="connotation-unpacking",
        name="Connotation Unpacking",
        description=(
            "Rewrite the same sentence with positive, negative, and neutral tone "
            "to master emotional shading."
        ),
        short_description="Learn how connotation changes meaning and tone.",
        estimated_time=300, type="written", category="precision", tier="adaptive",
        icon="palette", impacts_scores=("precision", "impact"),
    ),
    ExerciseConfig(
        id="expansion-challenge",
        name="The Expansion Challenge",
        description=(
            "Expand vague, generic sentences into specific, concrete language "
            "that conveys exact meaning."
        ),
        short_description="Replace generic words with specific details.",
        estimated_time=180, type="written", category="precision", tier="foundation",
        icon="expand", impacts_scores=("precision", "clarity"),
    ),
    ExerciseConfig(
        id="blue-sky-detector",
        name="Blue Sky Detector",
        description=(
            "Identify statements that add no new information and distinguish them "
            "from substantive claims."
        ),
        short_description="Spot empty language and prioritize substance.",
        estimated_time=240, type="written", category="precision", tier="adaptive",
        icon="scan-search", impacts_scores=("precision", "clarity"),
    ),
    ExerciseConfig(
        id="contextual-vocabulary",
        name="Contextual Vocabulary Building",
        description=(
            "Apply highlighted words from quality writing in new contexts and define "
            "them in your own words."
        ),
        short_description="Move words from passive recognition to active usage.",
        estimated_time=360, type="written", category="precision", tier="adaptive",
        icon="book-open", impacts_scores=("precision", "impact"),
    ),
    ExerciseConfig(
        id="precision-pyramid",
        name="Precision Pyramid",
        description=(
            "Rewrite a broad statement through five increasingly specific iterations "
            "while staying concise."
        ),
        short_description="Practice moving from broad to specific claims.",
        estimated_time=300, type="written", category="precision", tier="adaptive",
        icon="triangle", impacts_scores=("precision", "clarity"),
    ),
    ExerciseConfig(
        id="emotional-bridging",
        name="Emotional Bridging Practice",
        description=(
            "Convert abstract concepts into concrete, relatable moments with "
            "emotional resonance."
        ),
        short_description="Make abstract ideas vivid and relatable.",
        estimated_time=240, type="written", category="impact", tier="adaptive",
        icon="heart", impacts_scores=("impact", "precision"),
    ),
]

# Exercises with a working practice flow; the rest are placeholders
IMPLEMENTED_EXERCISE_IDS = frozenset({"filler-words", "impromptu-response"})


def get_exercise_by_id(exercise_id: str) -> Optional[ExerciseConfig]:
    for exercise in EXERCISES:
        if exercise.id == exercise_id:
            return exercise
    return None


def get_exercises_by_category(category: str) -> List[ExerciseConfig]:
    return [e for e in EXERCISES if e.category == category]


def get_foundation_exercises() -> List[ExerciseConfig]:
    return [e for e in EXERCISES if e.tier == "foundation"]


def is_exercise_implemented(exercise_id: str) -> bool:
    return exercise_id in IMPLEMENTED_EXERCISE_IDS


def get_implemented_exercises() -> List[ExerciseConfig]:
    return [e for e in EXERCISES if is_exercise_implemented(e.id)]


def get_placeholder_exercises() -> List[ExerciseConfig]:
    return [e for e in EXERCISES if not is_exercise_implemented(e.id)]
