"""Filler analyzer and the shared pattern-matching primitives."""

from __future__ import annotations

import pytest

from articulation.core.models import PhraseMatch
from articulation.processing.fillers import analyze_filler_words, compute_distribution
from articulation.processing.matching import PatternTable, resolve_overlaps


def _assert_consistent(result):
    assert sum(result.category_counts.values()) == result.total_filler_words
    assert result.distribution_analysis.total == result.total_filler_words
    assert len(result.filler_positions) == result.total_filler_words


def test_phrases_and_standalone_fillers_counted_once():
    result = analyze_filler_words("let me think about it, like, you know", 1)

    assert result.total_filler_words == 3
    assert result.category_counts == {"hesitation": 0, "discourse": 2, "temporal": 0, "thinking": 1}
    assert result.specific_filler_counts == {"let me think": 1, "like": 1, "you know": 1}
    assert [(p.word, p.position) for p in result.filler_positions] == [
        ("let me think", 0), ("like", 23), ("you know", 29),
    ]
    _assert_consistent(result)


def test_word_boundaries():
    assert analyze_filler_words("likely", 1).total_filler_words == 0
    assert analyze_filler_words("I like pizza", 1).total_filler_words == 1
    # "now" must not match inside "know" or "snow"
    assert analyze_filler_words("I know the snow", 1).total_filler_words == 0


def test_case_insensitive_and_transcript_casing_kept():
    result = analyze_filler_words("UM, Like I said", 1)
    assert result.specific_filler_counts == {"um": 1, "like": 1}
    assert [p.word for p in result.filler_positions] == ["UM", "Like"]


def test_multiword_phrase_spans_extra_whitespace():
    result = analyze_filler_words("you   know what", 1)
    assert result.total_filler_words == 1
    assert result.category_counts["discourse"] == 1


def test_every_occurrence_is_counted():
    result = analyze_filler_words("um um uh um", 2)
    assert result.total_filler_words == 4
    assert result.specific_filler_counts == {"um": 3, "uh": 1}
    assert result.fillers_per_minute == 2.0


def test_empty_transcript():
    result = analyze_filler_words("", 1)
    assert result.total_filler_words == 0
    assert result.fillers_per_minute == 0
    assert result.category_counts == {"hesitation": 0, "discourse": 0, "temporal": 0, "thinking": 0}
    assert result.specific_filler_counts == {}
    assert result.filler_positions == []
    assert result.distribution_analysis.total == 0


@pytest.mark.parametrize("duration", [0, -1, -0.5])
def test_rate_is_zero_without_positive_duration(duration):
    result = analyze_filler_words("um, so, well, okay", duration)
    assert result.total_filler_words == 4
    assert result.fillers_per_minute == 0


def test_distribution_by_thirds():
    transcript = "um" + " " * 28 + "uh" + " " * 28 + "er"
    result = analyze_filler_words(transcript, 1)
    dist = result.distribution_analysis
    assert (dist.beginning, dist.middle, dist.end) == (1, 1, 1)


def test_distribution_empty_length():
    assert compute_distribution(0, [0, 1]).total == 0


@pytest.mark.parametrize("transcript", [
    "So, um, basically I mean it was, like, kind of okay.",
    "Well then, let me see... how do I say this. Alright!",
    "Nothing to see here",
])
def test_counts_always_agree(transcript):
    _assert_consistent(analyze_filler_words(transcript, 1.5))


# ---------------------------------------------------------------------------
# Matching primitives
# ---------------------------------------------------------------------------

def test_longer_match_wins_at_same_start():
    table = PatternTable({"phrase": ["let me think"], "word": ["let", "think", "me"]})
    kept = resolve_overlaps(table.find_all("let me think, then think"))
    assert [(m.word, m.category) for m in kept] == [("let me think", "phrase"), ("think", "word")]


def test_sweep_drops_matches_inside_a_kept_span():
    matches = [
        PhraseMatch(word="b", category="x", position=2, length=1),
        PhraseMatch(word="abc", category="x", position=1, length=3),
        PhraseMatch(word="d", category="x", position=4, length=1),
    ]
    kept = resolve_overlaps(matches)
    assert [m.word for m in kept] == ["abc", "d"]


def test_find_all_keeps_overlaps():
    table = PatternTable({"a": ["kind of"], "b": ["kind"]})
    assert len(table.find_all("kind of")) == 2
