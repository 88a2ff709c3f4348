"""
Articulation — Filler Analyzer

Counts filler words and phrases in a transcript, buckets them by
category and by specific filler, and reports where in the transcript
(beginning / middle / end third) they cluster.

Multi-word fillers ("let me think") are preferred over any single-word
filler they contain; overlapping matches are never double-counted.
"""

from __future__ import annotations

import logging
from typing import List

from ..core.models import DistributionAnalysis, FillerAnalysisResult, FillerPosition
from ..data.lexicon import FILLER_CATEGORIES
from .matching import PatternTable, resolve_overlaps

logger = logging.getLogger("articulation.fillers")

FILLER_TABLE = PatternTable(FILLER_CATEGORIES)


def compute_distribution(transcript_length: int, positions: List[int]) -> DistributionAnalysis:
    """Bucket character offsets into thirds of the transcript."""
    dist = DistributionAnalysis()
    if transcript_length <= 0:
        return dist
    third = transcript_length / 3
    for pos in positions:
        if pos < third:
            dist.beginning += 1
        elif pos < 2 * third:
            dist.middle += 1
        else:
            dist.end += 1
    return dist


def analyze_filler_words(transcript: str, duration_minutes: float) -> FillerAnalysisResult:
    """
    Analyse `transcript` for fillers.

    `duration_minutes` only feeds the per-minute rate; when it is zero or
    negative the rate is 0.
    """
    matches = resolve_overlaps(FILLER_TABLE.find_all(transcript))

    category_counts = {category: 0 for category in FILLER_CATEGORIES}
    specific_counts: dict = {}
    positions: List[FillerPosition] = []

    for m in matches:
        category_counts[m.category] += 1
        key = m.word.lower()
        specific_counts[key] = specific_counts.get(key, 0) + 1
        positions.append(FillerPosition(word=m.word, position=m.position))

    total = len(matches)
    result = FillerAnalysisResult(
        total_filler_words=total,
        fillers_per_minute=total / duration_minutes if duration_minutes > 0 else 0.0,
        category_counts=category_counts,
        specific_filler_counts=specific_counts,
        filler_positions=positions,
        distribution_analysis=compute_distribution(
            len(transcript), [p.position for p in positions]
        ),
    )
    logger.debug(
        f"Fillers: {total} in {len(transcript)} chars "
        f"({result.fillers_per_minute:.1f}/min)"
    )
    return result
