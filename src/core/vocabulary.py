#!/usr/bin/env python3
"""
Fixed vocabulary tables for linguistic feature extraction.

Every word list the analyzers consult lives here so that tuning and
localization never touch the scoring code. Bump VOCABULARY_VERSION whenever
a table changes; the version is stored alongside each analysis so historical
records remain comparable.
"""

from typing import Tuple

VOCABULARY_VERSION = "1"

# Words that signal figurative or symbolic framing
METAPHOR_CUES: frozenset = frozenset({
    "like", "as", "metaphor", "symbolically", "represents", "embodies",
})

# Order matters: the pronoun distribution is reported in this order
PRONOUNS: Tuple[str, ...] = ("i", "we", "you", "they", "us", "them", "our", "their")

# Pronoun families used for collective-identity cohesion
PRONOUN_FAMILIES = {
    "collective": ("we", "our", "us"),
    "individual": ("i",),
    "external": ("they", "them", "their"),
}

MODAL_VERBS: frozenset = frozenset({
    "will", "would", "should", "could", "might", "may", "must", "shall",
})

POSITIVE_CUES: frozenset = frozenset({
    "good", "great", "excellent", "positive", "success", "achieve", "progress", "improve",
})

NEGATIVE_CUES: frozenset = frozenset({
    "bad", "terrible", "negative", "fail", "problem", "issue", "concern", "difficult",
})

NEUTRAL_CUES: frozenset = frozenset({
    "maybe", "perhaps", "possibly", "uncertain", "unclear", "ambiguous",
})

# Contrast conjunctions counted as narrative fragmentation
CONTRAST_CUES: frozenset = frozenset({
    "but", "however", "although", "despite", "nevertheless", "nonetheless",
})

# Excluded from mission concept extraction
STOP_WORDS: frozenset = frozenset({
    "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "must", "shall", "can",
    "a", "an", "this", "that", "these", "those",
})

# Concept extraction parameters
CONCEPT_MIN_LENGTH = 4          # words must be longer than 3 characters
CONCEPT_MIN_FREQUENCY = 2       # and appear more than once
CONCEPT_LIMIT = 10
