"""
Comprehensive tests for shared_utils.logging_utils.

Covers get_scoped_logger(), LogLevel enum, configure_logging(),
the log_execution() decorator, and ContextualLogger.
"""

import logging
from unittest.mock import MagicMock, patch

import pytest

from shared_utils.constants import LogScope
from shared_utils.logging_utils import (
    ContextualLogger,
    LogLevel,
    configure_logging,
    get_scoped_logger,
    log_execution,
)


# ---------------------------------------------------------------------------
# get_scoped_logger
# ---------------------------------------------------------------------------


class TestGetScopedLogger:
    def test_returns_bound_logger(self) -> None:
        logger = get_scoped_logger(LogScope.SEARCH)
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "error", None))

    def test_different_scopes(self) -> None:
        for scope in (LogScope.CLASSIFIER, LogScope.SEARCH, LogScope.SYNTHESIS, LogScope.ASK_ENGINE):
            assert get_scoped_logger(scope) is not None


# ---------------------------------------------------------------------------
# LogLevel / configure_logging
# ---------------------------------------------------------------------------


class TestLogLevel:
    def test_values(self) -> None:
        assert LogLevel.DEBUG == "DEBUG"
        assert LogLevel.INFO == "INFO"
        assert LogLevel.WARNING == "WARNING"
        assert LogLevel.ERROR == "ERROR"
        assert LogLevel.CRITICAL == "CRITICAL"

    def test_membership(self) -> None:
        assert len(LogLevel) == 5


class TestConfigureLogging:
    def test_sets_root_level(self) -> None:
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
            configure_logging(LogLevel.WARNING.value)
            assert root.level == logging.WARNING
        finally:
            root.setLevel(previous)


# ---------------------------------------------------------------------------
# log_execution decorator
# ---------------------------------------------------------------------------


class TestLogExecution:
    def test_passes_through_return_value(self) -> None:
        @log_execution(scope=LogScope.ASK_ENGINE)
        def add(a: int, b: int) -> int:
            return a + b

        assert add(2, 3) == 5

    def test_propagates_exception(self) -> None:
        @log_execution(scope=LogScope.ASK_ENGINE)
        def boom() -> None:
            raise ValueError("oops")

        with pytest.raises(ValueError, match="oops"):
            boom()

    def test_preserves_function_name(self) -> None:
        @log_execution(scope=LogScope.ASK_ENGINE)
        def my_func() -> None:
            pass

        assert my_func.__name__ == "my_func"

    def test_emits_start_and_success_events(self) -> None:
        logger = MagicMock()

        @log_execution(scope=LogScope.SEARCH)
        def add(a: int, b: int) -> int:
            return a + b

        with patch("shared_utils.logging_utils.get_scoped_logger", return_value=logger) as get_logger:
            add(1, b=2)

        get_logger.assert_called_once_with(LogScope.SEARCH)
        events = [c.args[0] for c in logger.info.call_args_list]
        assert events == ["add_start", "add_success"]
        assert logger.info.call_args_list[0].kwargs["kwargs_keys"] == ["b"]

    def test_emits_failed_event(self) -> None:
        logger = MagicMock()

        @log_execution(scope=LogScope.SEARCH)
        def boom() -> None:
            raise RuntimeError("bad")

        with patch("shared_utils.logging_utils.get_scoped_logger", return_value=logger):
            with pytest.raises(RuntimeError):
                boom()

        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "boom_failed"
        assert logger.error.call_args.kwargs["error_type"] == "RuntimeError"

    def test_custom_level(self) -> None:
        logger = MagicMock()

        @log_execution(scope=LogScope.SEARCH, level=LogLevel.DEBUG.value)
        def noop() -> None:
            pass

        with patch("shared_utils.logging_utils.get_scoped_logger", return_value=logger):
            noop()

        assert logger.debug.call_count == 2
        logger.info.assert_not_called()


# ---------------------------------------------------------------------------
# ContextualLogger
# ---------------------------------------------------------------------------


class TestContextualLogger:
    def test_all_levels_callable(self) -> None:
        cl = ContextualLogger(scope=LogScope.SEARCH)
        for method_name in ("info", "debug", "warning", "error"):
            assert callable(getattr(cl, method_name))

    def test_info_does_not_raise(self) -> None:
        ContextualLogger(scope=LogScope.SEARCH).info("test_event", key="value")

    def test_error_does_not_raise(self) -> None:
        ContextualLogger(scope=LogScope.ERROR_HANDLER).error("bad_thing_happened", detail="x")

    def test_scope_stored(self) -> None:
        cl = ContextualLogger(scope=LogScope.ASK_SERVICE)
        assert cl.scope == LogScope.ASK_SERVICE

    def test_delegates_to_bound_logger(self) -> None:
        cl = ContextualLogger(scope=LogScope.SEARCH)
        cl.logger = MagicMock()

        cl.warning("slow_search", elapsed=1.5)

        cl.logger.warning.assert_called_once_with("slow_search", elapsed=1.5)
