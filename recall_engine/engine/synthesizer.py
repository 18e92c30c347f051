"""
Answer synthesis: picks the per-type strategy and renders the Answer.

Dispatch order:
    1. no meeting results and no canvas results -> fallback template,
       except action_items, which reads the whole corpus
    2. any canvas results                        -> cross-board fusion
    3. otherwise                                 -> strategy for the query type
"""

import random
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from domain.models import (
    Answer,
    CanvasResult,
    ClassifiedQuery,
    ConversationTurn,
    Meeting,
    MeetingResult,
    QueryType,
)
from recall_engine.engine.classifier import QueryClassifier
from recall_engine.engine.context import ConversationContext
from recall_engine.engine.strategies import (
    ActionItemsAnswer,
    AnswerStrategy,
    ConcernsAnswer,
    CrossBoardAnswer,
    FollowUpAnswer,
    GeneralAnswer,
    SummaryAnswer,
    WhatSaidAnswer,
    WhenDiscussedAnswer,
)
from shared_utils.constants import Confidence, LogScope
from shared_utils.error_handler import AppException, SynthesisError
from shared_utils.logging_utils import ContextualLogger


logger = ContextualLogger(scope=LogScope.SYNTHESIS)

FALLBACK_TEMPLATES = (
    'I couldn\'t find any information about "{query}" in your meeting history.',
    "I don't see any discussions about that topic in the available meetings.",
    'No relevant information found for "{query}". Try rephrasing or asking about a different topic.',
)

# Query types answered from the whole corpus, not from ranked results.
CORPUS_WIDE_TYPES = frozenset({QueryType.ACTION_ITEMS})


class AnswerSynthesizer:
    """Turns ranked results into a templated, cited Answer."""

    def __init__(
        self,
        classifier: Optional[QueryClassifier] = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
        strategies: Optional[Sequence[AnswerStrategy]] = None,
    ):
        """Initialize the synthesizer.

        Args:
            classifier: Shared classifier for entity extraction
            clock: Source of "now" for relative dates and canvas citations
            rng: Random source for fallback template selection (seed in tests)
            strategies: Override the per-type strategies
        """
        self.classifier = classifier or QueryClassifier()
        self.clock = clock
        self.rng = rng or random.Random()

        if strategies is None:
            strategies = [
                cls(classifier=self.classifier, clock=clock)
                for cls in (
                    WhatSaidAnswer,
                    WhenDiscussedAnswer,
                    ActionItemsAnswer,
                    SummaryAnswer,
                    ConcernsAnswer,
                    GeneralAnswer,
                    FollowUpAnswer,
                )
            ]
        self.strategies: Dict[QueryType, AnswerStrategy] = {s.query_type: s for s in strategies}
        self.cross_board = CrossBoardAnswer(classifier=self.classifier, clock=clock)

    def synthesize(
        self,
        classified: ClassifiedQuery,
        results: List[MeetingResult],
        meetings: Sequence[Meeting],
        history: Sequence[ConversationTurn] = (),
        canvas_results: Sequence[CanvasResult] = (),
    ) -> Answer:
        """Build the answer for an already-searched query.

        Raises:
            SynthesisError: If no strategy handles the query type or rendering fails
        """
        query_type = classified.query_type

        if not results and not canvas_results and query_type not in CORPUS_WIDE_TYPES:
            logger.info("no_results_fallback", query_type=query_type.value)
            return self.fallback(classified.raw, query_type)

        context = ConversationContext(history)

        extra = {}
        if canvas_results:
            strategy: AnswerStrategy = self.cross_board
            extra = {"canvas_results": canvas_results}
        else:
            strategy = self.strategies.get(query_type)
            if strategy is None:
                raise SynthesisError(
                    f"No answer strategy registered for {query_type.value}",
                    query_type=query_type.value,
                )

        try:
            answer = strategy.generate(classified.raw, results, meetings, context, **extra)
        except AppException:
            raise
        except Exception as exc:
            raise SynthesisError(
                f"Failed to render answer: {type(exc).__name__}: {exc}",
                query_type=query_type.value,
                context={"strategy": strategy.__class__.__name__},
            ) from exc

        logger.debug(
            "answer_synthesized",
            strategy=strategy.__class__.__name__,
            sources=len(answer.sources),
            canvas_sources=len(answer.canvas_sources),
            confidence=round(answer.confidence, 3),
        )
        return answer.model_copy(update={"query_type": query_type})

    def fallback(self, query: str, query_type: Optional[QueryType] = None) -> Answer:
        """The "I don't know" answer: one of the fixed templates, confidence 0."""
        template = self.rng.choice(FALLBACK_TEMPLATES)
        return Answer(
            content=template.format(query=query),
            sources=[],
            confidence=Confidence.NONE,
            query_type=query_type,
        )
