# ruff: noqa: A005
"""Structured logging configuration.

Provides the structlog based logging used throughout passcheck: a validated
configuration object, security filters that keep password material out of
log output, an operation context for correlating the stages of a single
validation, and a small factory with a module level ``get_logger``.

Pieces:
- LogConfig: level, format and filtering switches, checked on construction
- LogFilter: record sanitizers; password fields are always masked
- LoggingContext: per validation call context (operation id, policy name)
- StructuredLogger: wrapper that applies the filters before structlog
- LoggerFactory: configures structlog on first use and caches loggers by name

Note: This module name intentionally shadows the standard library 'logging'
module inside the package namespace.
"""

import logging
import re
import sys
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any
from uuid import uuid4

import structlog
from structlog.contextvars import merge_contextvars

from passcheck.core.enums import Environment, LogFormat, LogLevel
from passcheck.core.errors import ConfigurationError

LOGGER_NAMESPACE = "passcheck"

# =====================================================================================
# CONFIGURATION
# =====================================================================================


@dataclass
class LogConfig:
    """
    Logging configuration with validation and environment defaults.

    Usage Example:
        config = LogConfig(level=LogLevel.DEBUG, environment=Environment.TESTING)
        configure_logging(config)
    """

    level: LogLevel = field(default=LogLevel.INFO)
    format: LogFormat = field(default=LogFormat.JSON)
    environment: Environment = field(default=Environment.DEVELOPMENT)

    enable_timestamps: bool = field(default=True)
    enable_caller_info: bool = field(default=False)
    enable_exception_info: bool = field(default=True)
    enable_context_tracking: bool = field(default=True)

    enable_sensitive_data_filtering: bool = field(default=True)
    truncate_long_messages: bool = field(default=True)
    max_message_length: int = field(default=10000)

    def __post_init__(self):
        self.validate()
        self.apply_environment_defaults()

    @classmethod
    def from_environment(cls) -> "LogConfig":
        """Configuration from PASSCHECK_ variables only; the .env file is not read."""
        from passcheck.core.config import Settings

        settings = Settings.from_environment(env_file=None)
        return cls(
            level=settings.log_level,
            format=settings.log_format,
            environment=settings.environment,
        )

    def validate(self) -> None:
        """Raises ConfigurationError for unusable settings."""
        if self.max_message_length < 1000:
            raise ConfigurationError(
                "Maximum message length must be at least 1000 characters",
                config_key="max_message_length",
            )

    def apply_environment_defaults(self) -> None:
        """Apply environment-specific defaults."""
        if self.environment == Environment.DEVELOPMENT:
            self.format = LogFormat.CONSOLE
            self.enable_caller_info = True

        elif self.environment.is_testing:
            self.format = LogFormat.PLAIN
            self.enable_context_tracking = False

        elif self.environment.is_production:
            # Password material must never reach production logs
            self.format = LogFormat.JSON
            self.enable_caller_info = False
            self.enable_sensitive_data_filtering = True

    def to_dict(self) -> dict[str, Any]:
        """Settings as a plain dict, for diagnostics."""
        return {
            "level": self.level.level_name,
            "format": self.format.value,
            "environment": self.environment.value,
            "enable_timestamps": self.enable_timestamps,
            "enable_caller_info": self.enable_caller_info,
            "enable_context_tracking": self.enable_context_tracking,
            "enable_sensitive_data_filtering": self.enable_sensitive_data_filtering,
            "max_message_length": self.max_message_length,
        }


# =====================================================================================
# SECURITY FILTERS
# =====================================================================================


class LogFilter(ABC):
    """Base class for log record filtering and sanitization."""

    @abstractmethod
    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Filter and sanitize log record."""

    @abstractmethod
    def should_skip(self, record: dict[str, Any]) -> bool:
        """Determine if record should be skipped entirely."""


class SensitiveDataFilter(LogFilter):
    """
    Filter for masking sensitive data in log records.

    Any field whose name looks like a password, secret or token is masked,
    recursively through nested dicts and lists.
    """

    def __init__(self, mask_char: str = "*", preserve_length: bool = False):
        self.mask_char = mask_char
        self.preserve_length = preserve_length

        self.sensitive_patterns = [
            re.compile(r"password", re.IGNORECASE),
            re.compile(r"passwd", re.IGNORECASE),
            re.compile(r"token", re.IGNORECASE),
            re.compile(r"secret", re.IGNORECASE),
            re.compile(r"credential", re.IGNORECASE),
            re.compile(r"authorization", re.IGNORECASE),
        ]

        self.value_patterns = [
            re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b"),
        ]

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive fields and e-mail addresses, recursing into containers."""
        filtered_record = {}

        for key, value in record.items():
            if self._is_sensitive_field(key):
                filtered_record[key] = self._mask_value(value)
            elif isinstance(value, str):
                filtered_record[key] = self._sanitize_string_value(value)
            elif isinstance(value, dict):
                filtered_record[key] = self.filter(value)
            elif isinstance(value, list):
                filtered_record[key] = [
                    self.filter(item)
                    if isinstance(item, dict)
                    else self._sanitize_string_value(item)
                    if isinstance(item, str)
                    else item
                    for item in value
                ]
            else:
                filtered_record[key] = value

        return filtered_record

    def should_skip(self, record: dict[str, Any]) -> bool:
        """Never skip, only mask."""
        return False

    def _is_sensitive_field(self, field_name: str) -> bool:
        return any(pattern.search(field_name) for pattern in self.sensitive_patterns)

    def _mask_value(self, value: Any) -> str | None:
        if value is None:
            return None

        value_str = str(value)
        if self.preserve_length:
            return self.mask_char * len(value_str)
        return f"{self.mask_char * 3}[MASKED]"

    def _sanitize_string_value(self, value: str) -> str:
        sanitized = value
        for pattern in self.value_patterns:
            sanitized = pattern.sub(lambda m: self._mask_value(m.group()), sanitized)
        return sanitized


class MessageLengthFilter(LogFilter):
    """Truncates messages longer than ``max_length``."""

    def __init__(
        self, max_length: int = 10000, truncation_suffix: str = "... [TRUNCATED]"
    ):
        self.max_length = max_length
        self.truncation_suffix = truncation_suffix

    def filter(self, record: dict[str, Any]) -> dict[str, Any]:
        """Truncate the message, recording its original length."""
        filtered_record = record.copy()

        message = record.get("message", "")
        if isinstance(message, str) and len(message) > self.max_length:
            truncated_length = self.max_length - len(self.truncation_suffix)
            filtered_record["message"] = (
                message[:truncated_length] + self.truncation_suffix
            )
            filtered_record["original_message_length"] = len(message)
            filtered_record["message_truncated"] = True

        return filtered_record

    def should_skip(self, record: dict[str, Any]) -> bool:
        """Records are shortened, never dropped."""
        return False


# =====================================================================================
# CONTEXT MANAGEMENT
# =====================================================================================


class LoggingContext:
    """
    Operation context for a logger.

    The open operations are tracked per execution context, so one logger can
    serve concurrent validations without their context leaking into each
    other's records. Durations are kept for the most recent calls only.
    """

    TIMING_WINDOW = 100

    def __init__(self):
        self._stack: ContextVar[tuple[dict[str, Any], ...]] = ContextVar(
            f"passcheck_log_context_{id(self)}", default=()
        )
        self._operation_timings: dict[str, deque[float]] = {}
        self._timings_lock = threading.Lock()

    @contextmanager
    def operation_context(self, operation_name: str, **kwargs: Any):
        """
        Open an operation; its fields are added to every record logged inside.

        Yields:
            The operation id
        """
        operation_id = uuid4()
        started = time.perf_counter()
        context = {"operation_name": operation_name, "operation_id": str(operation_id), **kwargs}

        token = self._stack.set((*self._stack.get(), context))
        try:
            yield operation_id
        finally:
            self._stack.reset(token)
            self._record_timing(operation_name, time.perf_counter() - started)

    def _record_timing(self, operation_name: str, duration: float) -> None:
        with self._timings_lock:
            timings = self._operation_timings.get(operation_name)
            if timings is None:
                timings = self._operation_timings[operation_name] = deque(maxlen=self.TIMING_WINDOW)
            timings.append(duration)

    def get_current_context(self) -> dict[str, Any]:
        """Merged context of every open operation, innermost last."""
        context: dict[str, Any] = {}
        for frame in self._stack.get():
            context.update(frame)
        return context

    def get_operation_stats(self, operation_name: str) -> dict[str, Any]:
        """Call count and durations for an operation name."""
        with self._timings_lock:
            timings = list(self._operation_timings.get(operation_name, ()))
        if not timings:
            return {"operation_name": operation_name, "call_count": 0}

        return {
            "operation_name": operation_name,
            "call_count": len(timings),
            "avg_duration": sum(timings) / len(timings),
            "max_duration": max(timings),
        }


# =====================================================================================
# STRUCTURED LOGGER
# =====================================================================================


class StructuredLogger:
    """
    Structured logger applying security filters and operation context.

    A logger handed out before logging is configured has no config yet; it
    resolves one through its factory when the first record is emitted.
    """

    def __init__(
        self,
        name: str,
        config: LogConfig | None = None,
        factory: "LoggerFactory | None" = None,
    ):
        self.name = name
        self.config: LogConfig | None = None
        self.filters: list[LogFilter] = []
        self.context = LoggingContext()
        self._factory = factory
        if config is not None:
            self.reconfigure(config)

        self._logger = structlog.get_logger(name)
        self._log_count = 0
        self._error_count = 0

    def reconfigure(self, config: LogConfig) -> None:
        """Adopt a new configuration; the level threshold and filters follow it."""
        filters: list[LogFilter] = []
        if config.enable_sensitive_data_filtering:
            filters.append(SensitiveDataFilter(preserve_length=False))
        if config.truncate_long_messages:
            filters.append(MessageLengthFilter(config.max_message_length))

        self.filters = filters
        self.config = config

    def debug(self, message: str, /, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(LogLevel.DEBUG, message, **kwargs)

    def info(self, message: str, /, **kwargs: Any) -> None:
        """Log info message."""
        self._log(LogLevel.INFO, message, **kwargs)

    def warning(self, message: str, /, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(LogLevel.WARNING, message, **kwargs)

    def error(self, message: str, /, **kwargs: Any) -> None:
        """Log error message."""
        self._log(LogLevel.ERROR, message, **kwargs)
        self._error_count += 1

    def exception(self, message: str, /, **kwargs: Any) -> None:
        """Log at error level with the active exception attached."""
        kwargs["exc_info"] = True
        self.error(message, **kwargs)

    def _log(self, level: LogLevel, message: str, /, **kwargs: Any) -> None:
        config = self.config or self._resolve_config()
        if level.priority < config.level.priority:
            return

        record = {"message": message, **kwargs}

        if config.enable_context_tracking:
            record.update(self.context.get_current_context())

        for filter_instance in self.filters:
            if filter_instance.should_skip(record):
                return
            record = filter_instance.filter(record)

        message = record.pop("message")
        getattr(self._logger, level.level_name.lower())(message, **record)
        self._log_count += 1

    def _resolve_config(self) -> LogConfig:
        if self._factory is not None:
            self._factory.configure_logging()
        if self.config is None:
            self.reconfigure(LogConfig.from_environment())
        return self.config

    def get_stats(self) -> dict[str, Any]:
        """Get logger statistics."""
        return {
            "logger_name": self.name,
            "log_count": self._log_count,
            "error_count": self._error_count,
        }


# =====================================================================================
# LOGGER FACTORY
# =====================================================================================


class LoggerFactory:
    """
    Factory for creating and caching structured loggers.

    Handing out a logger configures nothing; structlog and the standard
    library are set up on the first record, or earlier by an explicit
    ``configure_logging`` call. A new configuration reaches every logger the
    factory has already handed out.
    """

    def __init__(self, config: LogConfig | None = None):
        self.config = config
        self._loggers: dict[str, StructuredLogger] = {}
        self._configured = False
        self._lock = threading.RLock()

    @property
    def is_configured(self) -> bool:
        return self._configured

    def configure_logging(self, config: LogConfig | None = None) -> None:
        """
        Configure structlog and the standard library logging.

        Args:
            config: Replacement configuration. Without one, the first call
                falls back to the environment and later calls do nothing.
        """
        with self._lock:
            if config is None and self._configured:
                return

            if config is not None:
                self.config = config
            elif self.config is None:
                self.config = LogConfig.from_environment()

            self._install()
            for logger in self._loggers.values():
                logger.reconfigure(self.config)

            self._configured = True

    def _install(self) -> None:
        processors = [
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
        ]

        if self.config.enable_timestamps:
            processors.append(structlog.processors.TimeStamper(fmt="iso"))

        if self.config.enable_caller_info:
            processors.append(
                structlog.processors.CallsiteParameterAdder(
                    parameters=[
                        structlog.processors.CallsiteParameter.FILENAME,
                        structlog.processors.CallsiteParameter.LINENO,
                        structlog.processors.CallsiteParameter.FUNC_NAME,
                    ]
                )
            )

        if self.config.enable_exception_info:
            processors.extend(
                [
                    structlog.processors.StackInfoRenderer(),
                    structlog.processors.format_exc_info,
                ]
            )

        processors.append(structlog.processors.UnicodeDecoder())

        if self.config.format == LogFormat.JSON:
            processors.append(structlog.processors.JSONRenderer())
        elif self.config.format == LogFormat.CONSOLE:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.KeyValueRenderer())

        # Not cached: a later configure_logging call must reach bound loggers
        structlog.configure(
            processors=processors,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

        # No-op when the host application already configured the root logger
        logging.basicConfig(format="%(message)s", stream=sys.stdout)
        logging.getLogger(LOGGER_NAMESPACE).setLevel(self.config.level.to_logging_level())

        if self.config.environment.is_production:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_logger(self, name: str) -> StructuredLogger:
        """Cached logger for ``name``."""
        with self._lock:
            logger = self._loggers.get(name)
            if logger is None:
                config = self.config if self._configured else None
                logger = self._loggers[name] = StructuredLogger(name, config, factory=self)
            return logger


# =====================================================================================
# GLOBAL CONFIGURATION AND FACTORY
# =====================================================================================

_logger_factory = LoggerFactory()


def configure_logging(config: LogConfig | None = None) -> None:
    """
    Configure global logging system.

    Loggers already obtained through ``get_logger``, including module level
    ones, switch to the new configuration.

    Args:
        config: Logging configuration (built from PASSCHECK_ environment
            variables if not provided; no .env file is read)
    """
    _logger_factory.configure_logging(config or LogConfig.from_environment())


def get_logger(name: str) -> StructuredLogger:
    """
    Get structured logger instance.

    Safe to call at import time: nothing is configured until the logger
    emits its first record.

    Args:
        name: Logger name (usually __name__)
    """
    return _logger_factory.get_logger(name)


__all__ = [
    "LogConfig",
    "LogFilter",
    "LoggerFactory",
    "LoggingContext",
    "MessageLengthFilter",
    "SensitiveDataFilter",
    "StructuredLogger",
    "configure_logging",
    "get_logger",
]
