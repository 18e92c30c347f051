"""
Tests for services.ask_service.AskService.

Covers:
    - Turn bookkeeping (user + assistant turn per question)
    - Engine receives only the history prior to the current question
    - Validation of empty questions
    - Engine failures become error turns
    - clear() / history copy / update_corpus()
    - Follow-up conversation end to end with a real engine
"""

from unittest.mock import MagicMock

import pytest

from domain.models import Answer, QueryType, Role
from recall_engine.engine.ask import AskEngine
from services.ask_service import ERROR_REPLY, AskService
from shared_utils.error_handler import QueryError, SynthesisError, ValidationError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_engine_mock(settings, answer: Answer = None) -> MagicMock:
    mock = MagicMock()
    mock.settings = settings
    mock.answer.return_value = answer or Answer(
        content="Based on Budget Sync, here's what I found",
        confidence=0.5,
        query_type=QueryType.GENERAL,
    )
    return mock


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestAsk:
    def test_appends_user_and_assistant_turns(self, settings, meetings) -> None:
        service = AskService(engine=_build_engine_mock(settings), meetings=meetings)

        turn = service.ask("  marketing budget  ")

        history = service.history
        assert [t.role for t in history] == [Role.USER, Role.ASSISTANT]
        assert history[0].content == "marketing budget"
        assert turn == history[1]
        assert turn.content == "Based on Budget Sync, here's what I found"
        assert turn.confidence == 0.5
        assert turn.query_type == QueryType.GENERAL
        assert not turn.is_error

    def test_engine_gets_prior_history_only(self, settings, meetings, boards) -> None:
        engine = _build_engine_mock(settings)
        service = AskService(engine=engine, meetings=meetings, boards=boards)

        service.ask("first question here")
        service.ask("second question here")

        first_call, second_call = engine.answer.call_args_list
        assert first_call.args == ("first question here", meetings, boards, [])
        prior = second_call.args[3]
        assert [t.content for t in prior] == [
            "first question here",
            "Based on Budget Sync, here's what I found",
        ]

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_query_rejected(self, settings, query: str) -> None:
        engine = _build_engine_mock(settings)
        service = AskService(engine=engine)

        with pytest.raises(ValidationError):
            service.ask(query)

        assert service.history == []
        engine.answer.assert_not_called()

    def test_engine_failure_becomes_error_turn(self, settings) -> None:
        engine = _build_engine_mock(settings)
        engine.answer.side_effect = QueryError("Answer failed: boom")
        service = AskService(engine=engine)

        turn = service.ask("marketing budget")

        assert turn.is_error
        assert turn.content == ERROR_REPLY
        assert turn.role == Role.ASSISTANT
        assert len(service.history) == 2
        assert turn.error_code == "QUERY_FAILED"

    def test_synthesis_failure_records_its_code(self, settings) -> None:
        engine = _build_engine_mock(settings)
        engine.answer.side_effect = SynthesisError("Failed to render answer", query_type="general")
        service = AskService(engine=engine)

        turn = service.ask("marketing budget")

        assert turn.is_error
        assert turn.error_code == "SYNTHESIS_FAILED"


class TestHistoryAndCorpus:
    def test_history_is_a_copy(self, settings) -> None:
        service = AskService(engine=_build_engine_mock(settings))
        service.ask("marketing budget")

        service.history.clear()

        assert len(service.history) == 2

    def test_clear(self, settings) -> None:
        service = AskService(engine=_build_engine_mock(settings))
        service.ask("marketing budget")

        service.clear()

        assert service.history == []

    def test_update_corpus(self, settings, meetings, boards) -> None:
        engine = _build_engine_mock(settings)
        service = AskService(engine=engine)

        service.update_corpus(meetings, boards)
        service.ask("marketing budget")

        assert engine.answer.call_args.args[1] == meetings
        assert engine.answer.call_args.args[2] == boards


class TestConversation:
    def test_follow_up_end_to_end(self, settings, clock, rng, meetings) -> None:
        engine = AskEngine(settings=settings, clock=clock, rng=rng)
        service = AskService(engine=engine, meetings=meetings)

        first = service.ask("Tell me about the budget")
        second = service.ask("what about marketing?")

        assert first.query_type == QueryType.GENERAL
        assert second.query_type == QueryType.FOLLOW_UP
        assert second.content.startswith("Based on Budget Sync, here's what I found:")
        assert len(service.history) == 4
