"""
Regex-based query intent classification and entity extraction.

Intent rules are an ordered table evaluated top to bottom; the first type
with a matching pattern wins, so order is significant.
"""

import re
from typing import Optional, Pattern, Sequence, Tuple

from domain.models import ClassifiedQuery, ConversationTurn, QueryType
from shared_utils.constants import Defaults, LogScope
from shared_utils.logging_utils import ContextualLogger


logger = ContextualLogger(scope=LogScope.CLASSIFIER)


def _compile(*patterns: str) -> Tuple[Pattern, ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


class QueryClassifier:
    """Detects query type and pulls out speaker, topic and person entities."""

    FOLLOW_UP_PATTERNS: Tuple[Pattern, ...] = _compile(
        r"(?:tell me more|elaborate|explain) (?:about|on)",
        r"what else (?:did|was)",
        r"(?:and|what about) (?:the |those |other )",
    )

    # Priority order: first matching type wins.
    INTENT_RULES: Tuple[Tuple[QueryType, Tuple[Pattern, ...]], ...] = (
        (QueryType.WHAT_SAID, _compile(
            r"what did (\w+) say about",
            r"what (?:did|was) (\w+) (?:say|mention|discuss) (?:about|regarding)",
            r"(?:quotes?|statements?) from (\w+)",
            r"(\w+)(?:'s)? (?:opinion|thoughts?|view) on",
        )),
        (QueryType.WHEN_DISCUSSED, _compile(
            r"when (?:did|was) (?:we|the team) (?:discuss|talk about|cover)",
            r"last time (?:we|the team) (?:discussed|talked about)",
            r"which meeting (?:covered|discussed|had)",
            r"find (?:discussions?|mentions?|references?) (?:to|about)",
        )),
        (QueryType.ACTION_ITEMS, _compile(
            r"what action items? (?:are )?(?:pending|outstanding|open|assigned)",
            r"what (?:tasks?|action items?) (?:does?|for|assigned to) (\w+)",
            r"(\w+)(?:'s)? (?:todo|to-do|tasks|action items)",
            r"what (?:do|does) (\w+) (?:need|have) to do",
        )),
        (QueryType.SUMMARIZE, _compile(
            r"summarize all meetings? (?:about|on|regarding)",
            r"give me a summary of",
            r"what (?:have|has) (?:we|the team) (?:discussed|decided) about",
            r"overview of (?:all )?(?:the )?meetings? (?:about|on)",
        )),
        (QueryType.CONCERNS, _compile(
            r"what concerns? (?:has|have) (\w+)",
            r"(?:problems?|issues?|challenges?|risks?) (?:raised|mentioned|discussed)",
            r"(?:worried|concerned) about",
            r"(?:red flags?|warning signs?|blockers?)",
        )),
    )

    # Applied in order; each removes at most one leading word except the infix rule.
    TOPIC_SUBSTITUTIONS: Tuple[Tuple[Pattern, str, int], ...] = (
        (re.compile(r"^(what|when|which|who|how|why|where|is|are|did|do|does)\s+", re.IGNORECASE), "", 1),
        (re.compile(r"^(did|was|were|have|has|had)\s+", re.IGNORECASE), "", 1),
        (re.compile(r"^(we|you|they|i|it)\s+", re.IGNORECASE), "", 1),
        (re.compile(r"\s+(say|said|mention|discuss|talk|about|regarding)\s+", re.IGNORECASE), " ", 0),
        (re.compile(r"[?.,!]$"), "", 1),
    )

    PERSON_PATTERN: Pattern = re.compile(
        r"(?:for|assigned to|does|has|pending for)\s+(\w+)", re.IGNORECASE
    )

    def classify(self, query: str, history: Sequence[ConversationTurn]) -> ClassifiedQuery:
        """Classify *query* and extract its entities.

        Args:
            query: Raw user query
            history: Prior conversation turns (excluding this query)

        Returns:
            ClassifiedQuery with type, speaker and topic
        """
        query_type = self.detect_type(query, history)
        classified = ClassifiedQuery(
            raw=query,
            query_type=query_type,
            speaker=self.extract_speaker(query),
            topic=self.extract_topic(query),
        )
        logger.debug(
            "query_classified",
            query_type=query_type.value,
            speaker=classified.speaker,
            history_len=len(history),
        )
        return classified

    def detect_type(self, query: str, history: Sequence[ConversationTurn]) -> QueryType:
        """Detect the query type; follow-ups are only possible with history."""
        if history:
            if any(p.search(query) for p in self.FOLLOW_UP_PATTERNS):
                return QueryType.FOLLOW_UP
            if len(query.split()) <= Defaults.FOLLOW_UP_MAX_WORDS:
                return QueryType.FOLLOW_UP

        for query_type, patterns in self.INTENT_RULES:
            if any(p.search(query) for p in patterns):
                return query_type

        return QueryType.GENERAL

    def extract_speaker(self, query: str) -> Optional[str]:
        """First capture group of the first matching what_said pattern."""
        return _first_group(query, self.INTENT_RULES[0][1])

    def extract_topic(self, query: str) -> str:
        """Strip question words and discussion verbs from *query*.

        Best effort: unusual phrasing can leave odd fragments or an empty string.
        """
        topic = query
        for pattern, replacement, count in self.TOPIC_SUBSTITUTIONS:
            topic = pattern.sub(replacement, topic, count=count)
        return topic.strip()

    def extract_person(self, query: str) -> Optional[str]:
        """Person an action-item query is about, if named."""
        return _first_group(query, (self.PERSON_PATTERN,))


def _first_group(query: str, patterns: Sequence[Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(query)
        if match and match.lastindex and match.group(1):
            return match.group(1)
    return None
