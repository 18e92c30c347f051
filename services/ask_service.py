"""
AskService: conversation holder around the AskEngine.

Keeps:
    1. The corpus snapshot (meetings and boards) supplied by the caller.
    2. An append-only conversation history.

Each ``ask`` validates the question, records the user turn, answers it
against the history *prior* to that turn and records the assistant turn.
Pipeline failures become an error turn instead of propagating.
"""

from __future__ import annotations

import time
from typing import List, Optional, Sequence

from domain.models import Board, ConversationTurn, Meeting, Role
from recall_engine.engine.ask import AskEngine
from shared_utils.constants import LogScope
from shared_utils.error_handler import AppException, handle_error
from shared_utils.logging_utils import ContextualLogger, configure_logging
from shared_utils.validation import InputValidator


logger = ContextualLogger(scope=LogScope.ASK_SERVICE)

ERROR_REPLY = "Sorry, something went wrong while generating that answer. Please try again."


class AskService:
    """Stateful chat session over a corpus snapshot."""

    def __init__(
        self,
        *,
        engine: Optional[AskEngine] = None,
        meetings: Sequence[Meeting] = (),
        boards: Sequence[Board] = (),
    ) -> None:
        self._engine = engine or AskEngine()
        configure_logging(self._engine.settings.log_level)
        self._meetings: List[Meeting] = list(meetings)
        self._boards: List[Board] = list(boards)
        self._history: List[ConversationTurn] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def history(self) -> List[ConversationTurn]:
        """Copy of the conversation so far, oldest first."""
        return list(self._history)

    def ask(self, query: str) -> ConversationTurn:
        """Answer *query* and append both turns to the history.

        Args:
            query: User's natural-language question.

        Returns:
            The assistant turn; ``is_error`` is set when answering failed.

        Raises:
            ValidationError: If *query* is empty or whitespace.
        """
        question = InputValidator.validate_non_empty_string(query, "query")
        started = time.time()

        prior = list(self._history)
        self._history.append(ConversationTurn(role=Role.USER, content=question))

        logger.info(
            "ask_started",
            question_len=len(question),
            history_len=len(prior),
            meetings=len(self._meetings),
            boards=len(self._boards),
        )

        try:
            answer = self._engine.answer(question, self._meetings, self._boards, prior)
        except AppException as exc:
            error = handle_error(exc, scope=LogScope.ASK_SERVICE)["error"]
            turn = ConversationTurn(
                role=Role.ASSISTANT,
                content=ERROR_REPLY,
                is_error=True,
                error_code=error["code"],
            )
            self._history.append(turn)
            logger.warning(
                "ask_failed",
                error_code=error["code"],
                latency_ms=round(_elapsed_ms(started), 1),
            )
            return turn

        turn = ConversationTurn(
            role=Role.ASSISTANT,
            content=answer.content,
            sources=answer.sources,
            confidence=answer.confidence,
            query_type=answer.query_type,
        )
        self._history.append(turn)

        logger.info(
            "ask_completed",
            query_type=answer.query_type.value if answer.query_type else None,
            sources=len(answer.sources),
            confidence=round(answer.confidence, 3),
            latency_ms=round(_elapsed_ms(started), 1),
        )
        return turn

    def clear(self) -> None:
        """Forget the conversation; the corpus is kept."""
        self._history.clear()
        logger.info("history_cleared")

    def update_corpus(
        self,
        meetings: Sequence[Meeting],
        boards: Sequence[Board] = (),
    ) -> None:
        """Replace the corpus snapshot used by later questions."""
        self._meetings = list(meetings)
        self._boards = list(boards)
        logger.info("corpus_updated", meetings=len(self._meetings), boards=len(self._boards))


# ------------------------------------------------------------------
# Module-level helpers
# ------------------------------------------------------------------

def _elapsed_ms(started: float) -> float:
    """Return milliseconds elapsed since *started*."""
    return (time.time() - started) * 1000
