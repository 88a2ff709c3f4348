"""
Articulation — Lexicon Pattern Matching

A PatternTable compiles a category → phrases mapping once and finds
every case-insensitive, word-bounded occurrence of every phrase.
Multi-word phrases tolerate any run of whitespace between words.

`resolve_overlaps` is the sweep-line that keeps the longest match at
each start and drops anything overlapping an already-kept match.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Mapping, Pattern, Sequence, Tuple

from ..core.models import PhraseMatch


def phrase_pattern(phrase: str) -> Pattern[str]:
    words = [re.escape(part) for part in phrase.split()]
    return re.compile(r"\b" + r"\s+".join(words) + r"\b", re.IGNORECASE)


def _match_order(match: PhraseMatch) -> Tuple[int, int]:
    # Earliest first; at the same start the longer phrase wins
    return (match.position, -match.length)


class PatternTable:
    """Compiled lexicon. Categories and phrases keep their table order."""

    def __init__(self, table: Mapping[str, Sequence[str]]) -> None:
        self._patterns: List[Tuple[str, str, Pattern[str]]] = [
            (category, phrase, phrase_pattern(phrase))
            for category, phrases in table.items()
            for phrase in phrases
        ]

    def find_all(self, text: str) -> List[PhraseMatch]:
        """All occurrences of all phrases, overlaps included, in text order."""
        matches: List[PhraseMatch] = []
        if not text:
            return matches
        for category, _, pattern in self._patterns:
            for m in pattern.finditer(text):
                matches.append(PhraseMatch(
                    word=m.group(0),
                    category=category,
                    position=m.start(),
                    length=len(m.group(0)),
                ))
        matches.sort(key=_match_order)
        return matches


def resolve_overlaps(matches: Iterable[PhraseMatch]) -> List[PhraseMatch]:
    """
    Keep a match only if it starts at or after the end of the last kept
    match. No character is ever claimed twice.
    """
    kept: List[PhraseMatch] = []
    last_end = -1
    for match in sorted(matches, key=_match_order):
        if match.position >= last_end:
            kept.append(match)
            last_end = match.end
    return kept
