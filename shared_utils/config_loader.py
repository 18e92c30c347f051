from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import ValidationError as PydanticValidationError, field_validator
from functools import lru_cache

from shared_utils.constants import Defaults, Environment, LogScope
from shared_utils.error_handler import ConfigurationError
from shared_utils.logging_utils import get_scoped_logger

logger = get_scoped_logger(LogScope.CONFIG)


class Settings(BaseSettings):
    """Engine configuration with environment variable precedence.

    Precedence: 1) Environment Variables (RECALL_*) > 2) .env file > 3) Class defaults

    Every field has a default, so the engine runs without any configuration.
    """
    # Application metadata
    app_name: str = "Meeting Recall"
    app_version: str = "1.0.0"
    environment: str = Environment.DEVELOPMENT.value
    log_level: str = Defaults.LOG_LEVEL

    # Meeting search
    segment_threshold: float = Defaults.SEGMENT_THRESHOLD
    max_segments_per_meeting: int = Defaults.MAX_SEGMENTS_PER_MEETING
    max_meeting_results: int = Defaults.MAX_MEETING_RESULTS

    # Board search
    canvas_threshold: float = Defaults.CANVAS_THRESHOLD
    max_canvas_results: int = Defaults.MAX_CANVAS_RESULTS
    canvas_min_content_length: int = Defaults.CANVAS_MIN_CONTENT_LENGTH

    # Fan-out: 1 keeps scoring on the calling thread
    search_workers: int = Defaults.SEARCH_WORKERS

    model_config = SettingsConfigDict(
        env_prefix="RECALL_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    @field_validator('segment_threshold', 'canvas_threshold')
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        """Validate thresholds are usable relevance scores."""
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"threshold must be between 0 and 1, got {v}")
        return v

    @field_validator(
        'max_segments_per_meeting', 'max_meeting_results', 'max_canvas_results', 'search_workers'
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate limits are positive."""
        if v < 1:
            raise ValueError(f"limit must be >= 1, got {v}")
        return v

    @field_validator('canvas_min_content_length')
    @classmethod
    def validate_min_length(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"canvas_min_content_length must be >= 0, got {v}")
        return v

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is recognized."""
        valid_envs = {e.value for e in Environment}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}, got {v}")
        return v.lower()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got {v}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Load and cache application settings.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If a configured value is invalid
    """
    try:
        settings = Settings()
    except PydanticValidationError as exc:
        fields = [".".join(str(part) for part in err["loc"]) for err in exc.errors()]
        logger.error("configuration_invalid", fields=fields)
        raise ConfigurationError(
            f"Invalid engine configuration: {', '.join(fields)}",
            context={"fields": fields, "errors": [err["msg"] for err in exc.errors()]},
        ) from exc

    logger.info(
        "configuration_loaded",
        environment=settings.environment,
        segment_threshold=settings.segment_threshold,
        canvas_threshold=settings.canvas_threshold,
        search_workers=settings.search_workers,
    )

    return settings
