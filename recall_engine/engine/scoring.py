"""
Heuristic relevance scoring between a query and a span of text.

The score blends five independently computed signals:

    exact phrase bonus      0.3 if the text contains the query verbatim
    token overlap           share of query tokens related to some text token (x0.3)
    set similarity          Jaccard over the two token sets (x0.3)
    speaker bonus           0.2 for what_said queries naming the speaker
    term frequency          summed in-text frequency of matched tokens (x0.2)

and is clamped to [0, 1]. Either side tokenizing to nothing scores 0.
"""

import re
from datetime import datetime
from typing import Optional

from domain.models import QueryType
from recall_engine.parser.tokenizer import tokenize
from shared_utils.constants import RECENCY_BANDS, ScoringWeights


def calculate_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity of the token sets of two texts (0-1 scale)."""
    tokens1 = set(tokenize(text1))
    tokens2 = set(tokenize(text2))

    if not tokens1 or not tokens2:
        return 0.0

    return len(tokens1 & tokens2) / len(tokens1 | tokens2)


def calculate_relevance(
    query: str,
    text: str,
    speaker: Optional[str] = None,
    query_type: Optional[QueryType] = None,
) -> float:
    """Score how relevant *text* is to *query*.

    Args:
        query: Raw user query (or the combined follow-up query)
        text: Candidate span (segment text, node content, comment, ...)
        speaker: Speaker of the span, when known
        query_type: Classified type; only ``what_said`` enables the speaker bonus

    Returns:
        Relevance in [0, 1]
    """
    query_tokens = tokenize(query)
    text_tokens = tokenize(text)

    if not query_tokens or not text_tokens:
        return 0.0

    exact_match_bonus = (
        ScoringWeights.EXACT_MATCH_BONUS if query.lower() in text.lower() else 0.0
    )

    # Substring relation in either direction; short tokens can over-match.
    matching_tokens = [
        token
        for token in query_tokens
        if any(token in t or t in token for t in text_tokens)
    ]
    overlap_score = len(matching_tokens) / len(query_tokens)

    similarity_score = calculate_similarity(query, text)

    speaker_bonus = 0.0
    if query_type == QueryType.WHAT_SAID and speaker:
        if re.search(re.escape(speaker), query, re.IGNORECASE):
            speaker_bonus = ScoringWeights.SPEAKER_BONUS

    text_len = len(text_tokens)
    term_frequency = sum(text_tokens.count(token) / text_len for token in matching_tokens)

    score = (
        exact_match_bonus
        + overlap_score * ScoringWeights.OVERLAP_WEIGHT
        + similarity_score * ScoringWeights.SIMILARITY_WEIGHT
        + speaker_bonus
        + term_frequency * ScoringWeights.TERM_FREQUENCY_WEIGHT
    )
    return min(1.0, score)


def days_between(earlier: datetime, later: datetime) -> float:
    """Fractional days from *earlier* to *later*.

    Naive and aware datetimes are compared by treating the naive one as
    being in the other's timezone.
    """
    if (earlier.tzinfo is None) != (later.tzinfo is None):
        if earlier.tzinfo is None:
            earlier = earlier.replace(tzinfo=later.tzinfo)
        else:
            later = later.replace(tzinfo=earlier.tzinfo)
    return (later - earlier).total_seconds() / 86400


def calculate_recency_bonus(date: datetime, now: datetime) -> float:
    """Bonus (0-0.2) rewarding recent meetings: <7d 0.2, <30d 0.1, <90d 0.05."""
    days_ago = days_between(date, now)
    for max_days, bonus in RECENCY_BANDS:
        if days_ago < max_days:
            return bonus
    return 0.0
