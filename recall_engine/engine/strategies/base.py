from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from domain.models import Answer, Meeting, MeetingResult, MessageSource, QueryType, ScoredSegment
from recall_engine.engine.classifier import QueryClassifier
from recall_engine.engine.context import ConversationContext


class AnswerStrategy(ABC):
    """Abstract base class for template-based answer generation.

    Strategies are pure formatting functions over already-ranked results.
    """

    query_type: QueryType

    def __init__(
        self,
        classifier: Optional[QueryClassifier] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.classifier = classifier or QueryClassifier()
        self.clock = clock

    @abstractmethod
    def generate(
        self,
        query: str,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        context: ConversationContext,
    ) -> Answer:
        """Build an answer for *query* from ranked *results*."""
        pass


def segment_source(result: MeetingResult, segment: ScoredSegment) -> MessageSource:
    """Citation for one scored segment of a meeting result."""
    return MessageSource(
        meeting_id=result.meeting.id,
        title=result.meeting.title,
        date=result.meeting.date,
        excerpt=segment.text,
        speaker=segment.speaker,
        relevance_score=segment.relevance_score,
    )


def mean_relevance(scores: Sequence[float]) -> float:
    """Average of *scores*; 0 for an empty sequence."""
    if not scores:
        return 0.0
    return sum(scores) / len(scores)
