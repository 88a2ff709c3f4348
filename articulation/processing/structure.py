"""
Articulation — Structural Analyzer

Detects position statements ("I believe", "in my opinion") and
supporting phrases ("because", "for instance") in an impromptu
response, and picks a one-line coaching insight from the counts.

The two phrase sets are matched independently: a span may count as
both a position statement and a supporting phrase.
"""

from __future__ import annotations

import logging
from typing import List

from ..core.models import StructuralAnalysisResult, StructuralElement
from ..data.lexicon import POSITION_PHRASES, SUPPORTING_PHRASES
from .matching import PatternTable

logger = logging.getLogger("articulation.structure")

STRUCTURE_TABLE = PatternTable({
    "position": POSITION_PHRASES,
    "supporting": SUPPORTING_PHRASES,
})

INSIGHTS = dict(
    empty=(
        "Try using phrases like 'I believe' or 'in my opinion' to state your position, "
        "and 'because' or 'for instance' to support it."
    ),
    support_only=(
        "You used supporting phrases well. Consider starting with a clear position "
        "(e.g., 'I believe...') to frame your response."
    ),
    position_only=(
        "You stated your position clearly. Try adding supporting phrases like 'because,' "
        "'for example,' or 'however' to strengthen your argument."
    ),
    strong=(
        "Strong structure: you stated your position and backed it up with reasoning "
        "and examples."
    ),
    good_start=(
        "Good start. Adding more supporting phrases like 'because' and 'for instance' "
        "will make your argument more persuasive."
    ),
)


def structural_insight(position_count: int, supporting_count: int) -> str:
    """First matching rule wins."""
    total = position_count + supporting_count
    if total == 0:
        return INSIGHTS["empty"]
    if position_count == 0 and supporting_count > 0:
        return INSIGHTS["support_only"]
    if position_count > 0 and supporting_count == 0:
        return INSIGHTS["position_only"]
    if position_count >= 1 and supporting_count >= 2:
        return INSIGHTS["strong"]
    return INSIGHTS["good_start"]


def analyze_structural_elements(transcript: str, duration_minutes: float = 1) -> StructuralAnalysisResult:
    elements: List[StructuralElement] = [
        StructuralElement(phrase=m.word, position=m.position, category=m.category)
        for m in STRUCTURE_TABLE.find_all(transcript)
    ]
    positions = [e for e in elements if e.category == "position"]
    supporting = [e for e in elements if e.category == "supporting"]
    total = len(elements)

    result = StructuralAnalysisResult(
        position_statements=positions,
        supporting_phrases=supporting,
        all_elements=elements,
        position_count=len(positions),
        supporting_count=len(supporting),
        total_structural_elements=total,
        elements_per_minute=total / duration_minutes if duration_minutes > 0 else 0.0,
        insight=structural_insight(len(positions), len(supporting)),
    )
    logger.debug(f"Structure: {len(positions)} position, {len(supporting)} supporting")
    return result
