"""
AskEngine: the single entry point answering a question against a corpus.

    query + history ─► QueryClassifier ─► MeetingSearcher ─┐
                                       └► BoardSearcher ───┴─► AnswerSynthesizer ─► Answer

Stateless between calls; the caller owns the corpus snapshot and history.
"""

import random
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from domain.models import Answer, Board, CanvasResult, ConversationTurn, Meeting
from recall_engine.engine.classifier import QueryClassifier
from recall_engine.engine.search import BoardSearcher, MeetingSearcher
from recall_engine.engine.synthesizer import AnswerSynthesizer
from shared_utils.config_loader import Settings, get_settings
from shared_utils.constants import LogScope
from shared_utils.error_handler import AppException, QueryError
from shared_utils.logging_utils import ContextualLogger, log_execution


logger = ContextualLogger(scope=LogScope.ASK_ENGINE)


class AskEngine:
    """Retrieval engine with pluggable classifier, searchers and synthesizer."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        classifier: Optional[QueryClassifier] = None,
        meeting_searcher: Optional[MeetingSearcher] = None,
        board_searcher: Optional[BoardSearcher] = None,
        synthesizer: Optional[AnswerSynthesizer] = None,
        clock: Callable[[], datetime] = datetime.now,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the engine with optional component overrides.

        Args:
            settings: Thresholds and limits (defaults to ``get_settings()``)
            classifier: Query classifier shared by all components
            meeting_searcher: Meeting search override
            board_searcher: Board search override
            synthesizer: Answer synthesizer override
            clock: Source of "now" for recency and relative dates
            rng: Random source for fallback answers
        """
        self.settings = settings or get_settings()
        self.classifier = classifier or QueryClassifier()
        self.meeting_searcher = meeting_searcher or MeetingSearcher(
            settings=self.settings, classifier=self.classifier, clock=clock
        )
        self.board_searcher = board_searcher or BoardSearcher(settings=self.settings)
        self.synthesizer = synthesizer or AnswerSynthesizer(
            classifier=self.classifier, clock=clock, rng=rng
        )

        logger.debug(
            "initializing_ask_engine",
            meeting_searcher=self.meeting_searcher.__class__.__name__,
            board_searcher=self.board_searcher.__class__.__name__,
            synthesizer=self.synthesizer.__class__.__name__,
            search_workers=self.settings.search_workers,
        )

    @log_execution(scope=LogScope.ASK_ENGINE)
    def answer(
        self,
        query: str,
        meetings: Sequence[Meeting],
        boards: Sequence[Board] = (),
        history: Sequence[ConversationTurn] = (),
    ) -> Answer:
        """Answer *query* from the supplied corpus.

        Args:
            query: User's natural-language question
            meetings: Meeting corpus snapshot (read only)
            boards: Canvas boards searched alongside meetings
            history: Prior conversation turns, oldest first, excluding this query

        Returns:
            Answer with content, cited sources and confidence. No results at
            all yields a fallback answer with confidence 0.

        Raises:
            QueryError: On any unexpected pipeline failure
        """
        try:
            classified = self.classifier.classify(query, history)

            results = self.meeting_searcher.search(query, meetings, classified.query_type)
            canvas_results: List[CanvasResult] = []
            if boards:
                canvas_results = self.board_searcher.search(query, boards)

            logger.info(
                "search_completed",
                query_type=classified.query_type.value,
                meeting_results=len(results),
                canvas_results=len(canvas_results),
            )

            return self.synthesizer.synthesize(
                classified,
                results,
                meetings,
                history=history,
                canvas_results=canvas_results,
            )

        except AppException:
            raise
        except Exception as exc:
            error_msg = f"{type(exc).__name__}: {exc}"
            logger.error("answer_failed", error=error_msg)
            raise QueryError(
                f"Answer failed: {error_msg}",
                context={"query": query, "meetings": len(meetings), "boards": len(boards)},
            ) from exc
