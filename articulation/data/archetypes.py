"""
Articulation — Communication Archetypes

Default archetype classifier: ordered threshold rules over the measured
subscores, first match wins. ProgressService accepts any callable with
the same signature in its place.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..core.models import Archetype, CommunicationScore

ARCHETYPES: Dict[str, Archetype] = {
    "polished-pro": Archetype(
        id="polished-pro",
        name="Polished Pro",
        description="Consistently strong across every dimension you have practiced.",
    ),
    "hedger": Archetype(
        id="hedger",
        name="Hedger",
        description="Good ideas softened by qualifiers. Commit to your claims.",
    ),
    "wanderer": Archetype(
        id="wanderer",
        name="Wanderer",
        description="Plenty to say, but the thread gets lost. Lead with structure.",
    ),
    "rapid-thinker": Archetype(
        id="rapid-thinker",
        name="Rapid Thinker",
        description="Words come easily; sharpen them into specific, concrete language.",
    ),
    "generic-speaker": Archetype(
        id="generic-speaker",
        name="Generic Speaker",
        description="A balanced starting point. Practice builds a distinct profile.",
    ),
}

DEFAULT_ARCHETYPE = ARCHETYPES["generic-speaker"]

THRESHOLDS = dict(
    polished_min=80,
    confidence_low=55,
    clarity_low=55,
    fluency_high=75,
    precision_low=60,
)


def determine_archetype(score: CommunicationScore) -> Optional[Archetype]:
    """None until at least one subscore has been measured."""
    values = score.measured_values()
    if not values:
        return None

    T = THRESHOLDS
    if min(values.values()) >= T["polished_min"] and score.overall >= T["polished_min"]:
        return ARCHETYPES["polished-pro"]
    if values.get("confidence", 100) < T["confidence_low"]:
        return ARCHETYPES["hedger"]
    if values.get("clarity", 100) < T["clarity_low"]:
        return ARCHETYPES["wanderer"]
    if values.get("fluency", 0) >= T["fluency_high"] and values.get("precision", 100) < T["precision_low"]:
        return ARCHETYPES["rapid-thinker"]
    return ARCHETYPES["generic-speaker"]
