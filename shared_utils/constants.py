"""
Constants management.
Centralized configuration for all magic values, scoring weights, and defaults.
"""

from enum import Enum
from typing import Final


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


# Relevance scoring weights
class ScoringWeights:
    """Fixed blend of the relevance signals.

    Changing any of these changes ranking order.
    """
    EXACT_MATCH_BONUS: Final[float] = 0.3
    OVERLAP_WEIGHT: Final[float] = 0.3
    SIMILARITY_WEIGHT: Final[float] = 0.3
    SPEAKER_BONUS: Final[float] = 0.2
    TERM_FREQUENCY_WEIGHT: Final[float] = 0.2


# Default values
class Defaults:
    """Search and ranking defaults."""
    SEGMENT_THRESHOLD: Final[float] = 0.15
    CANVAS_THRESHOLD: Final[float] = 0.12
    MAX_SEGMENTS_PER_MEETING: Final[int] = 5
    MAX_MEETING_RESULTS: Final[int] = 5
    MAX_CANVAS_RESULTS: Final[int] = 15
    CANVAS_MIN_CONTENT_LENGTH: Final[int] = 5
    SEARCH_WORKERS: Final[int] = 1
    MIN_TOKEN_LENGTH: Final[int] = 3
    FOLLOW_UP_MAX_WORDS: Final[int] = 3
    LOG_LEVEL: Final[str] = "INFO"


# Recency bonus bands: (max age in days, bonus)
RECENCY_BANDS: Final[tuple] = (
    (7, 0.2),
    (30, 0.1),
    (90, 0.05),
)


# Fixed confidences per answer branch
class Confidence:
    """Confidence values emitted by the template strategies."""
    NONE: Final[float] = 0.0
    WHEN_DISCUSSED: Final[float] = 0.8
    PERSON_ACTION_ITEMS: Final[float] = 0.85
    PERSON_ACTION_ITEMS_MISSING: Final[float] = 0.3
    ALL_ACTION_ITEMS: Final[float] = 0.8
    ALL_ACTION_ITEMS_MISSING: Final[float] = 0.2
    SUMMARY: Final[float] = 0.75
    CONCERNS: Final[float] = 0.75
    CONCERNS_MISSING: Final[float] = 0.4
    PERSON_ACTION_ITEM_SOURCE: Final[float] = 0.8
    ACTION_ITEM_SOURCE: Final[float] = 0.75


# Logging scopes
class LogScope:
    """Standardized logging scope names."""
    CONFIG = "config_loader"
    ERROR_HANDLER = "error_handler"
    CLASSIFIER = "classifier"
    SEARCH = "search"
    SYNTHESIS = "synthesis"
    ASK_ENGINE = "ask_engine"
    ASK_SERVICE = "ask_service"


# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes for consistency."""
    INVALID_CONFIG = "INVALID_CONFIG"
    INVALID_INPUT = "INVALID_INPUT"
    QUERY_FAILED = "QUERY_FAILED"
    SYNTHESIS_FAILED = "SYNTHESIS_FAILED"
