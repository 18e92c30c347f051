"""
Text tokenization for relevance scoring.
Normalizes free text into lowercase, stop-word filtered search terms.
"""

import re
from typing import FrozenSet, List

from shared_utils.constants import Defaults


# Common English function words ignored by search; built once at import.
STOP_WORDS: FrozenSet[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "from", "up", "about", "into", "through", "during", "before", "after", "above", "below",
    "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "can", "this", "that", "these", "those",
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them", "my", "your",
    "his", "its", "our", "their", "what", "which", "who", "when", "where", "why", "how",
    "all", "any", "both", "each", "few", "more", "most", "other", "some", "such", "no", "nor",
    "not", "only", "own", "same", "so", "than", "too", "very", "just", "now",
})

_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize(text: str) -> List[str]:
    """Split *text* into ordered search terms.

    Lowercases, turns punctuation into spaces, splits on whitespace runs and
    drops tokens shorter than three characters or in ``STOP_WORDS``.
    Duplicates are kept so callers can count term frequency.

    Args:
        text: Arbitrary text, may be empty

    Returns:
        Ordered list of tokens (empty for empty or whitespace-only input)
    """
    if not text:
        return []

    normalized = _NON_WORD_RE.sub(" ", text.lower())
    return [
        word
        for word in _WHITESPACE_RE.split(normalized)
        if len(word) >= Defaults.MIN_TOKEN_LENGTH and word not in STOP_WORDS
    ]
