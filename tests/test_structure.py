"""Structural analyzer: position statements, supporting phrases, insight."""

from __future__ import annotations

import pytest

from articulation.processing import structure
from articulation.processing.matching import PatternTable
from articulation.processing.structure import (
    INSIGHTS,
    analyze_structural_elements,
    structural_insight,
)


def test_empty_transcript():
    result = analyze_structural_elements("")
    assert result.total_structural_elements == 0
    assert result.all_elements == []
    assert result.insight == INSIGHTS["empty"]


def test_strong_structure():
    result = analyze_structural_elements(
        "I believe this because it works, for example in schools."
    )
    assert [e.phrase for e in result.position_statements] == ["I believe"]
    assert [e.phrase for e in result.supporting_phrases] == ["because", "for example"]
    assert result.total_structural_elements == 3
    assert result.insight == INSIGHTS["strong"]


def test_elements_sorted_by_position():
    result = analyze_structural_elements("Because it rains, I think we stay. However, personally I disagree.")
    positions = [e.position for e in result.all_elements]
    assert positions == sorted(positions)
    assert [e.category for e in result.all_elements] == ["supporting", "position", "supporting", "position"]


@pytest.mark.parametrize("transcript, key", [
    ("Because it rains.", "support_only"),
    ("In my opinion, it is fine.", "position_only"),
    ("I think so because it rains.", "good_start"),
])
def test_insight_from_transcript(transcript, key):
    assert analyze_structural_elements(transcript).insight == INSIGHTS[key]


@pytest.mark.parametrize("position_count, supporting_count, key", [
    (0, 0, "empty"),
    (0, 3, "support_only"),
    (2, 0, "position_only"),
    (1, 2, "strong"),
    (3, 1, "good_start"),
])
def test_insight_rules(position_count, supporting_count, key):
    assert structural_insight(position_count, supporting_count) == INSIGHTS[key]


def test_several_positions_counted():
    result = analyze_structural_elements("Personally, I think it is fine.")
    assert result.position_count == 2
    assert result.supporting_count == 0


def test_word_boundary():
    # "thus" inside "enthusiasm" is not a match
    assert analyze_structural_elements("Such enthusiasm!").total_structural_elements == 0


def test_elements_per_minute():
    text = "I believe it, because of that, and therefore yes."
    assert analyze_structural_elements(text, 2).elements_per_minute == 1.5
    assert analyze_structural_elements(text, 0).elements_per_minute == 0


def test_phrase_in_both_tables_counts_in_both(monkeypatch):
    # Categories are matched independently; a shared phrase is not deduplicated
    table = PatternTable({"position": ["to be clear"], "supporting": ["to be clear", "because"]})
    monkeypatch.setattr(structure, "STRUCTURE_TABLE", table)

    result = structure.analyze_structural_elements("To be clear, it works because it ships.")
    assert result.position_count == 1
    assert result.supporting_count == 2
    assert [(e.phrase, e.category) for e in result.all_elements[:2]] == [
        ("To be clear", "position"), ("To be clear", "supporting"),
    ]
    assert result.position_statements[0].position == result.supporting_phrases[0].position == 0
    assert result.insight == INSIGHTS["strong"]
