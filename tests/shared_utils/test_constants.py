"""
Tests for shared_utils.constants.

Pins the scoring weights, thresholds and confidences; any change to these
values changes ranking order or answer confidence.
"""

from shared_utils.constants import (
    RECENCY_BANDS,
    Confidence,
    Defaults,
    Environment,
    ErrorCode,
    LogScope,
    ScoringWeights,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestEnvironment:
    def test_values(self) -> None:
        assert Environment.DEVELOPMENT.value == "development"
        assert Environment.STAGING.value == "staging"
        assert Environment.PRODUCTION.value == "production"

    def test_member_count(self) -> None:
        assert len(Environment) == 3


class TestErrorCode:
    def test_values(self) -> None:
        assert ErrorCode.INVALID_CONFIG == "INVALID_CONFIG"
        assert ErrorCode.INVALID_INPUT == "INVALID_INPUT"
        assert ErrorCode.QUERY_FAILED == "QUERY_FAILED"
        assert ErrorCode.SYNTHESIS_FAILED == "SYNTHESIS_FAILED"


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------


class TestScoringWeights:
    def test_values(self) -> None:
        assert ScoringWeights.EXACT_MATCH_BONUS == 0.3
        assert ScoringWeights.OVERLAP_WEIGHT == 0.3
        assert ScoringWeights.SIMILARITY_WEIGHT == 0.3
        assert ScoringWeights.SPEAKER_BONUS == 0.2
        assert ScoringWeights.TERM_FREQUENCY_WEIGHT == 0.2


class TestRecencyBands:
    def test_bands_ascending(self) -> None:
        assert RECENCY_BANDS == ((7, 0.2), (30, 0.1), (90, 0.05))


class TestDefaults:
    def test_thresholds(self) -> None:
        assert Defaults.SEGMENT_THRESHOLD == 0.15
        assert Defaults.CANVAS_THRESHOLD == 0.12

    def test_limits(self) -> None:
        assert Defaults.MAX_SEGMENTS_PER_MEETING == 5
        assert Defaults.MAX_MEETING_RESULTS == 5
        assert Defaults.MAX_CANVAS_RESULTS == 15
        assert Defaults.CANVAS_MIN_CONTENT_LENGTH == 5
        assert Defaults.SEARCH_WORKERS == 1


class TestConfidence:
    def test_all_in_unit_interval(self) -> None:
        values = [v for k, v in vars(Confidence).items() if k.isupper()]
        assert values
        assert all(0.0 <= v <= 1.0 for v in values)

    def test_none_is_zero(self) -> None:
        assert Confidence.NONE == 0.0


class TestLogScope:
    def test_engine_scopes(self) -> None:
        assert LogScope.ASK_ENGINE == "ask_engine"
        assert LogScope.ASK_SERVICE == "ask_service"
        assert LogScope.SEARCH == "search"
