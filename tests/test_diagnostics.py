"""Six-metric speech diagnostics."""

from __future__ import annotations

import pytest

from articulation.core.models import SUBSCORES
from articulation.processing.diagnostics import (
    analyze_speech_diagnostics,
    count_cues,
    jaccard_similarity,
    split_sentences,
    words_from,
)

METRICS = ("fluency", "clarity", "pace", "precision", "confidence", "impact")


@pytest.mark.parametrize("transcript", [
    "",
    "Um, so, like, I guess maybe it is kind of sort of probably fine, I think.",
    "Clearly. " * 300,
    "The system... the process -- the strategy; the idea? Yes!",
])
@pytest.mark.parametrize("duration", [0, 0.5, 1, 10])
def test_scores_are_bounded_integers(transcript, duration):
    result = analyze_speech_diagnostics(transcript, duration, filler_word_count=3)
    for name in METRICS:
        score = getattr(result, name).score
        assert isinstance(score, int)
        assert 0 <= score <= 100
    assert set(result.subscores) == set(SUBSCORES)
    assert all(isinstance(v, int) and 0 <= v <= 100 for v in result.subscores.values())


def test_empty_transcript_baselines():
    result = analyze_speech_diagnostics("", 1)
    assert result.fluency.score == 92
    assert result.clarity.score == 66
    assert result.pace.score == 21
    assert result.precision.score == 35
    assert result.confidence.score == 100
    assert result.impact.score == 52


def test_fluency_penalizes_fillers():
    transcript = "word " * 150
    assert analyze_speech_diagnostics(transcript, 1).fluency.score == 100
    assert analyze_speech_diagnostics(transcript, 1, filler_word_count=3).fluency.score == 92


def test_fluency_pace_penalty_outside_window():
    transcript = "word " * 50
    assert analyze_speech_diagnostics(transcript, 1).fluency.score == 92


def test_clarity_detects_repetition():
    result = analyze_speech_diagnostics(
        "The cat sat on the mat today. The cat sat on the mat today.", 1
    )
    assert result.clarity.signals["repetition_ratio"] == 1.0
    assert result.clarity.score == 46


def test_pace_on_target():
    transcript = " ".join("alpha," if i < 12 else "alpha" for i in range(150))
    result = analyze_speech_diagnostics(transcript, 1)
    assert result.pace.signals["pause_frequency"] == pytest.approx(0.08)
    assert result.pace.score == 100


def test_precision_vague_words():
    result = analyze_speech_diagnostics("Really good stuff, really good things.", 1)
    assert result.precision.signals["vague_word_count"] == 6
    assert result.precision.score == 84


def test_confidence_hedging_and_certainty():
    result = analyze_speech_diagnostics(
        "I will definitely finish this project and maybe more tomorrow for the whole team today", 1
    )
    # "maybe" counts as a phrase and as a token
    assert result.confidence.signals["hedging_count"] == 2
    assert result.confidence.signals["certainty_word_count"] == 2
    assert result.confidence.score == 31


def test_impact_rounds_half_up():
    result = analyze_speech_diagnostics("For example, I remember the day I felt so happy.", 1)
    signals = result.impact.signals
    assert (signals["example_cues"], signals["story_cues"], signals["analogy_cues"]) == (1, 1, 0)
    assert (signals["sensory_words"], signals["emotional_words"]) == (1, 1)
    assert result.impact.score == 74


def test_clarity_subscore_blends_pace():
    result = analyze_speech_diagnostics("I went there. We saw it. It was fine.", 1)
    expected = result.clarity.score * 0.7 + result.pace.score * 0.3
    assert abs(result.subscores["clarity"] - expected) <= 0.5
    assert result.subscores["fluency"] == result.fluency.score


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_cues_match_by_containment():
    # "once" inside "concern" counts; each cue at most once
    assert count_cues("This is a concern. Once, once more.", ("once",)) == 1
    assert count_cues("nothing here", ("once",)) == 0


def test_words_and_sentences():
    assert words_from("Don't STOP, it's 5 o'clock!") == ["don't", "stop", "it's", "o'clock"]
    assert split_sentences("One. Two!  Three? ") == ["One.", "Two!", "Three?"]


def test_jaccard():
    assert jaccard_similarity([], []) == 0.0
    assert jaccard_similarity(["a", "b"], ["b", "c"]) == pytest.approx(1 / 3)
