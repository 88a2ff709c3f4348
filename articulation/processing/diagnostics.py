"""
Articulation — Speech Diagnostics

Heuristic, lexicon-driven scoring of a transcript on six metrics:
fluency, clarity, pace, precision, confidence, impact. Every metric
score is an integer in [0, 100]; pace is blended into the public
clarity subscore (70% clarity, 30% pace).

Two kinds of lookup are used and must not be mixed up:
  • cue phrases   — substring containment in the lowercased transcript
  • word sets     — exact match against tokens
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence

import numpy as np

from ..core.models import SpeechDiagnosticsResult, SpeechMetricBreakdown
from ..core.scoring import clamp, round_half_up
from ..data.lexicon import (
    ABSTRACT_WORDS,
    ANALOGY_CUES,
    CERTAINTY_WORDS,
    EMOTION_WORDS,
    EXAMPLE_CUES,
    HEDGING_PHRASES,
    SENSORY_WORDS,
    STORY_CUES,
    VAGUE_WORDS,
)

logger = logging.getLogger("articulation.diagnostics")

_WORD_RE = re.compile(r"[a-z']+")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_PAUSE_RE = re.compile(r"[,.!?;:]")
_LONG_PAUSE_RE = re.compile(r"\.\.\.|—|--")

# Words-per-minute window that avoids the fluency pace penalty
WPM_MIN = 90
WPM_MAX = 190
WPM_TARGET = 150
# Punctuation-per-word rate of a well-paced speaker
PAUSE_FREQUENCY_TARGET = 0.08
# Adjacent sentences more similar than this count as repeated
REPETITION_SIMILARITY = 0.7
SENTENCE_LENGTH_MIN = 6
SENTENCE_LENGTH_MAX = 24


# ---------------------------------------------------------------------------
# Tokenisation
# ---------------------------------------------------------------------------

def words_from(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())


def split_sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text) if s.strip()]


def count_cues(text: str, cues: Sequence[str]) -> int:
    """Number of cues that appear anywhere in the text (each counts once)."""
    lower = text.lower()
    return sum(1 for cue in cues if cue in lower)


def jaccard_similarity(a: Sequence[str], b: Sequence[str]) -> float:
    sa, sb = set(a), set(b)
    union = sa | sb
    if not union:
        return 0.0
    return len(sa & sb) / len(union)


def _words_per_minute(words: Sequence[str], duration_minutes: float) -> float:
    return len(words) / duration_minutes if duration_minutes > 0 else 0.0


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

def analyze_fluency(words: Sequence[str], duration_minutes: float, filler_word_count: int) -> SpeechMetricBreakdown:
    wpm = _words_per_minute(words, duration_minutes)
    filler_rate = filler_word_count / len(words) if words else 0.0
    wpm_penalty = 8 if wpm < WPM_MIN or wpm > WPM_MAX else 0
    score = clamp(100 - filler_word_count * 2 - wpm_penalty - filler_rate * 100)
    return SpeechMetricBreakdown(
        score=score,
        signals={"wpm": wpm, "filler_word_count": filler_word_count, "filler_rate": filler_rate},
        notes=[
            f"Detected {filler_word_count} fillers.",
            f"Approximate speaking pace {round_half_up(wpm)} wpm.",
        ],
    )


def analyze_clarity(sentences: Sequence[str], words: Sequence[str]) -> SpeechMetricBreakdown:
    sentence_words = [words_from(s) for s in sentences]
    lengths = [len(w) for w in sentence_words if w]
    avg_sentence_length = float(np.mean(lengths)) if lengths else 0.0

    repeated_pairs = sum(
        1
        for prev, curr in zip(sentence_words, sentence_words[1:])
        if jaccard_similarity(prev, curr) > REPETITION_SIMILARITY
    )
    repetition_ratio = repeated_pairs / (len(sentences) - 1) if len(sentences) > 1 else 0.0

    coherence = clamp(len(set(words)) / len(words) * 100) if words else 0
    length_penalty = (
        12 if avg_sentence_length > SENTENCE_LENGTH_MAX or avg_sentence_length < SENTENCE_LENGTH_MIN else 0
    )
    score = clamp(78 + coherence * 0.18 - repetition_ratio * 40 - length_penalty)

    return SpeechMetricBreakdown(
        score=score,
        signals={
            "avg_sentence_length": avg_sentence_length,
            "repetition_ratio": repetition_ratio,
            "topic_coherence": coherence,
        },
        notes=[
            f"Average sentence length: {avg_sentence_length:.1f} words.",
            "Some repeated ideas were detected." if repetition_ratio > 0.2 else "Low repeated-idea signals.",
        ],
    )


def analyze_pace(text: str, words: Sequence[str], duration_minutes: float) -> SpeechMetricBreakdown:
    wpm = _words_per_minute(words, duration_minutes)
    pauses = len(_PAUSE_RE.findall(text))
    long_pauses = len(_LONG_PAUSE_RE.findall(text))
    pause_frequency = (pauses + long_pauses * 2) / len(words) if words else 0.0
    pace_fit = clamp(100 - abs(WPM_TARGET - wpm) * 1.2)
    consistency = clamp(100 - abs(pause_frequency - PAUSE_FREQUENCY_TARGET) * 500)
    score = clamp(pace_fit * 0.65 + consistency * 0.35)

    return SpeechMetricBreakdown(
        score=score,
        signals={
            "words_per_minute": wpm,
            "pause_frequency": pause_frequency,
            "estimated_long_pauses": long_pauses,
            "pace_consistency": consistency,
        },
        notes=[
            f"Pace target is 140-160 wpm; estimated {round_half_up(wpm)} wpm.",
            f"Detected {pauses + long_pauses} pause markers.",
        ],
    )


def analyze_precision(words: Sequence[str]) -> SpeechMetricBreakdown:
    unique_words = len(set(words))
    diversity = unique_words / len(words) if words else 0.0
    vague_count = sum(1 for w in words if w in VAGUE_WORDS)
    abstract_count = sum(1 for w in words if w in ABSTRACT_WORDS)
    concrete_count = sum(1 for w in words if w not in ABSTRACT_WORDS and len(w) > 4)
    ratio = abstract_count / concrete_count if concrete_count > 0 else float(abstract_count)

    score = clamp(diversity * 100 - vague_count * 3 - ratio * 8 + 35)

    return SpeechMetricBreakdown(
        score=score,
        signals={
            "vocabulary_diversity": diversity,
            "vague_word_count": vague_count,
            "abstract_concrete_ratio": ratio,
            "unique_words": unique_words,
            "total_words": len(words),
        },
        notes=[
            f"Vocabulary diversity {diversity * 100:.1f}%.",
            f"{vague_count} vague words detected." if vague_count > 0 else "No high-priority vague words detected.",
        ],
    )


def analyze_confidence(text: str, words: Sequence[str]) -> SpeechMetricBreakdown:
    lower = text.lower()
    # "maybe" counts both as a phrase occurrence and as a token
    hedging_count = sum(lower.count(phrase) for phrase in HEDGING_PHRASES)
    hedging_count += sum(1 for w in words if w == "maybe")
    certainty_count = sum(1 for w in words if w in CERTAINTY_WORDS)
    hedging_frequency = hedging_count / len(words) if words else 0.0

    score = clamp(100 - hedging_frequency * 500 + certainty_count * 2 - hedging_count * 3)

    return SpeechMetricBreakdown(
        score=score,
        signals={
            "hedging_count": hedging_count,
            "certainty_word_count": certainty_count,
            "hedging_frequency": hedging_frequency,
        },
        notes=[
            f"Detected {hedging_count} hedging cues." if hedging_count > 0 else "Low hedging language detected.",
            f"{certainty_count} certainty cues used." if certainty_count > 0 else "Few certainty cues detected.",
        ],
    )


def analyze_impact(text: str, words: Sequence[str]) -> SpeechMetricBreakdown:
    examples = count_cues(text, EXAMPLE_CUES)
    stories = count_cues(text, STORY_CUES)
    analogies = count_cues(text, ANALOGY_CUES)
    sensory = sum(1 for w in words if w in SENSORY_WORDS)
    emotional = sum(1 for w in words if w in EMOTION_WORDS)

    score = clamp(52 + examples * 8 + stories * 10 + analogies * 8 + sensory * 1.5 + emotional * 2)

    return SpeechMetricBreakdown(
        score=score,
        signals={
            "example_cues": examples,
            "story_cues": stories,
            "analogy_cues": analogies,
            "sensory_words": sensory,
            "emotional_words": emotional,
        },
        notes=[
            f"Examples: {examples}, stories: {stories}, analogies: {analogies}.",
            f"Sensory/emotional language tokens: {sensory + emotional}.",
        ],
    )


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def analyze_speech_diagnostics(
    transcript: str,
    duration_minutes: float,
    filler_word_count: int = 0,
) -> SpeechDiagnosticsResult:
    words = words_from(transcript)
    sentences = split_sentences(transcript)

    fluency = analyze_fluency(words, duration_minutes, filler_word_count)
    clarity = analyze_clarity(sentences, words)
    pace = analyze_pace(transcript, words, duration_minutes)
    precision = analyze_precision(words)
    confidence = analyze_confidence(transcript, words)
    impact = analyze_impact(transcript, words)

    result = SpeechDiagnosticsResult(
        fluency=fluency,
        clarity=clarity,
        pace=pace,
        precision=precision,
        confidence=confidence,
        impact=impact,
        subscores={
            "fluency": fluency.score,
            "clarity": clamp(clarity.score * 0.7 + pace.score * 0.3),
            "precision": precision.score,
            "confidence": confidence.score,
            "impact": impact.score,
        },
    )
    logger.debug(f"Diagnostics: {len(words)} words, subscores={result.subscores}")
    return result
