"""Lexicon tables for transcript analysis. Canonical lowercase; pure data."""

from __future__ import annotations

from typing import Dict, FrozenSet, Tuple

# ---------------------------------------------------------------------------
# Filler words, by category
# ---------------------------------------------------------------------------

FILLER_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "hesitation": ("um", "uh", "er", "ah", "hmm"),
    "discourse": (
        "like",
        "you know",
        "i mean",
        "sort of",
        "kind of",
        "basically",
        "actually",
        "literally",
    ),
    "temporal": ("so", "well", "now", "then", "okay", "alright"),
    "thinking": ("let me think", "let me see", "how do i say"),
}

# ---------------------------------------------------------------------------
# Structural phrases
# ---------------------------------------------------------------------------

# Speaker is stating a position or opinion
POSITION_PHRASES: Tuple[str, ...] = (
    "i believe",
    "i think",
    "in my opinion",
    "i feel that",
    "i would say",
    "from my perspective",
    "i'd say",
    "my view is",
    "i argue that",
    "it seems to me",
    "in my view",
    "personally",
    "to my mind",
    "as i see it",
    "i maintain that",
    "i contend that",
)

# Reasoning, examples, contrast
SUPPORTING_PHRASES: Tuple[str, ...] = (
    "because",
    "however",
    "for instance",
    "for example",
    "on the other hand",
    "in addition",
    "furthermore",
    "moreover",
    "therefore",
    "thus",
    "as a result",
    "specifically",
    "in other words",
    "that said",
    "nevertheless",
    "despite this",
    "in contrast",
    "by contrast",
    "alternatively",
    "such as",
    "like when",
    "the reason",
    "which means",
    "so that",
    "in order to",
    "this shows",
    "this means",
)

# ---------------------------------------------------------------------------
# Diagnostics word sets
# ---------------------------------------------------------------------------

VAGUE_WORDS: FrozenSet[str] = frozenset({"thing", "things", "stuff", "good", "bad", "really", "very"})

HEDGING_PHRASES: Tuple[str, ...] = (
    "i think",
    "maybe",
    "kind of",
    "sort of",
    "probably",
    "i guess",
    "perhaps",
    "might be",
)

CERTAINTY_WORDS: FrozenSet[str] = frozenset({"clearly", "definitely", "certainly", "will", "must", "always"})

EXAMPLE_CUES: Tuple[str, ...] = ("for example", "for instance", "like when", "such as")
STORY_CUES: Tuple[str, ...] = ("once", "last week", "yesterday", "when i", "there was", "i remember")
ANALOGY_CUES: Tuple[str, ...] = ("like", "as if", "similar to", "just as")

SENSORY_WORDS: FrozenSet[str] = frozenset({
    "see", "saw", "look", "hear", "heard", "sound",
    "feel", "felt", "touch", "taste", "smell",
})

EMOTION_WORDS: FrozenSet[str] = frozenset({
    "excited", "worried", "frustrated", "happy", "sad",
    "nervous", "proud", "confident", "afraid",
})

ABSTRACT_WORDS: FrozenSet[str] = frozenset({
    "idea", "concept", "system", "process", "strategy",
    "approach", "value", "culture", "quality",
})
