"""
Test cases for structured logging.
"""

from unittest.mock import Mock

import pytest

from passcheck.core.enums import Environment, LogFormat, LogLevel
from passcheck.core.errors import ConfigurationError
from passcheck.core.logging import (
    LogConfig,
    LoggerFactory,
    LoggingContext,
    MessageLengthFilter,
    SensitiveDataFilter,
    StructuredLogger,
    configure_logging,
    get_logger,
)
from passcheck.modules.identity.domain.services import password_rule_validator

pytestmark = pytest.mark.unit


@pytest.fixture
def restore_logging():
    """Put the session logging configuration back after the test."""
    yield
    configure_logging(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))


class TestLogConfig:
    """Test logging configuration."""

    def test_minimum_message_length(self):
        with pytest.raises(ConfigurationError):
            LogConfig(max_message_length=10)

    @pytest.mark.parametrize(
        "environment,expected_format",
        [
            (Environment.DEVELOPMENT, LogFormat.CONSOLE),
            (Environment.TESTING, LogFormat.PLAIN),
            (Environment.PRODUCTION, LogFormat.JSON),
        ],
    )
    def test_environment_defaults(self, environment, expected_format):
        assert LogConfig(environment=environment).format == expected_format

    def test_production_always_filters(self):
        config = LogConfig(environment=Environment.PRODUCTION, enable_sensitive_data_filtering=False)

        assert config.enable_sensitive_data_filtering is True

    def test_to_dict(self):
        data = LogConfig(level=LogLevel.DEBUG, environment=Environment.STAGING).to_dict()

        assert data["level"] == "DEBUG"
        assert data["environment"] == "staging"


class TestSensitiveDataFilter:
    """Test password masking."""

    def test_masks_password_fields(self):
        record = {
            "message": "Validated",
            "password": "hunter2",
            "nested": {"old_password": "hunter1"},
            "items": [{"token": "t"}, "plain"],
            "count": 3,
        }

        filtered = SensitiveDataFilter().filter(record)

        assert filtered["password"] == "***[MASKED]"
        assert filtered["nested"]["old_password"] == "***[MASKED]"
        assert filtered["items"] == [{"token": "***[MASKED]"}, "plain"]
        assert filtered["count"] == 3
        assert filtered["message"] == "Validated"

    def test_masks_email_values(self):
        filtered = SensitiveDataFilter().filter({"note": "contact jsmith@example.com"})

        assert filtered["note"] == "contact ***[MASKED]"

    def test_preserve_length(self):
        filtered = SensitiveDataFilter(preserve_length=True).filter({"password": "hunter2"})

        assert filtered["password"] == "*******"

    def test_none_stays_none(self):
        assert SensitiveDataFilter().filter({"password": None})["password"] is None


class TestMessageLengthFilter:
    """Test message truncation."""

    def test_truncates(self):
        filtered = MessageLengthFilter(max_length=20).filter({"message": "x" * 30})

        assert filtered["message"] == "xxxxx... [TRUNCATED]"
        assert filtered["original_message_length"] == 30
        assert filtered["message_truncated"] is True

    def test_short_message_untouched(self):
        record = {"message": "short"}

        assert MessageLengthFilter(max_length=20).filter(record) == record


class TestLoggingContext:
    """Test operation context tracking."""

    def test_operation_context(self):
        context = LoggingContext()

        with context.operation_context("validate_password", policy="default"):
            current = context.get_current_context()
            assert current["operation_name"] == "validate_password"
            assert current["policy"] == "default"

        assert context.get_current_context() == {}
        assert context.get_operation_stats("validate_password")["call_count"] == 1
        assert context.get_operation_stats("other") == {"operation_name": "other", "call_count": 0}

    def test_nested_operations(self):
        context = LoggingContext()

        with context.operation_context("outer", policy="default"):
            with context.operation_context("inner"):
                assert context.get_current_context()["operation_name"] == "inner"
                assert context.get_current_context()["policy"] == "default"
            assert context.get_current_context()["operation_name"] == "outer"

        assert context.get_current_context() == {}


class TestStructuredLogger:
    """Test the logger wrapper."""

    def make_logger(self, level: LogLevel = LogLevel.DEBUG) -> StructuredLogger:
        logger = StructuredLogger("passcheck.test", LogConfig(level=level, environment=Environment.STAGING))
        logger._logger = Mock()
        return logger

    def test_filters_applied(self):
        logger = self.make_logger()

        logger.info("Password checked", password="hunter2", policy="default")

        logger._logger.info.assert_called_once_with(
            "Password checked", password="***[MASKED]", policy="default"
        )

    def test_level_threshold(self):
        logger = self.make_logger(LogLevel.WARNING)

        logger.debug("hidden")
        logger.warning("shown")

        logger._logger.debug.assert_not_called()
        logger._logger.warning.assert_called_once_with("shown")

    def test_level_and_message_fields_pass_through(self):
        logger = self.make_logger()

        logger.debug("AD complexity check failed", level="AD2003", name="jsmith")

        logger._logger.debug.assert_called_once_with(
            "AD complexity check failed", level="AD2003", name="jsmith"
        )

    def test_reconfigure(self):
        logger = self.make_logger(LogLevel.DEBUG)

        logger.reconfigure(LogConfig(level=LogLevel.ERROR, environment=Environment.STAGING))
        logger.warning("hidden")

        logger._logger.warning.assert_not_called()

    def test_stats(self):
        logger = self.make_logger()

        logger.info("one")
        logger.error("two")

        assert logger.get_stats() == {
            "logger_name": "passcheck.test",
            "log_count": 2,
            "error_count": 1,
        }

    def test_get_logger_cached(self):
        assert get_logger("passcheck.cached") is get_logger("passcheck.cached")


class TestLoggerFactory:
    """Test deferred configuration and reconfiguration of handed out loggers."""

    def test_get_logger_configures_nothing(self):
        factory = LoggerFactory()

        logger = factory.get_logger("passcheck.deferred")

        assert factory.is_configured is False
        assert logger.config is None
        assert logger.filters == []

    def test_first_record_configures_from_environment(self, isolated_environ, restore_logging):
        isolated_environ["PASSCHECK_LOG_LEVEL"] = "warning"
        factory = LoggerFactory()
        logger = factory.get_logger("passcheck.deferred")
        logger._logger = Mock()

        logger.info("hidden")
        logger.warning("shown")

        assert factory.is_configured is True
        assert logger.config.level == LogLevel.WARNING
        logger._logger.info.assert_not_called()
        logger._logger.warning.assert_called_once_with("shown")

    def test_configure_reaches_cached_loggers(self, restore_logging):
        factory = LoggerFactory(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))
        logger = factory.get_logger("passcheck.cached")

        factory.configure_logging(LogConfig(level=LogLevel.ERROR, environment=Environment.STAGING))

        assert logger.config.level == LogLevel.ERROR
        assert factory.get_logger("passcheck.cached") is logger

    def test_configure_without_config_is_idempotent(self, restore_logging):
        factory = LoggerFactory(LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING))
        factory.configure_logging()
        config = factory.config

        factory.configure_logging()

        assert factory.config is config


class TestGlobalConfiguration:
    """Test the module level configure_logging and get_logger."""

    def test_module_level_loggers_follow_configure_logging(self, restore_logging):
        logger = get_logger("passcheck.module_level")

        configure_logging(LogConfig(level=LogLevel.ERROR, environment=Environment.TESTING))

        assert logger.config.level == LogLevel.ERROR
        assert password_rule_validator.logger.config.level == LogLevel.ERROR

    def test_default_configuration_ignores_env_file(
        self, isolated_environ, tmp_path, monkeypatch, restore_logging
    ):
        (tmp_path / ".env").write_text(
            "PASSCHECK_LOG_LEVEL=error\nOTHER_APP_DATABASE_URL=postgres://db/app\n",
            encoding="utf-8",
        )
        monkeypatch.chdir(tmp_path)

        configure_logging()

        assert get_logger("passcheck.env").config.level == LogLevel.INFO
        assert "PASSCHECK_LOG_LEVEL" not in isolated_environ
        assert "OTHER_APP_DATABASE_URL" not in isolated_environ
