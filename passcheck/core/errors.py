"""Base error classes and error handling helpers."""

import logging
import time
import uuid
from enum import Enum
from typing import Any

SENSITIVE_KEYS = {"password", "token", "secret", "key", "credential", "authorization"}


class ErrorSeverity(Enum):
    """Error severity levels for monitoring and alerting."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class PassCheckError(Exception):
    """
    Base exception for all passcheck errors.

    Carries an error id, a machine readable code, sanitized details and a
    user facing message. Every instance logs itself on construction.
    """

    default_code: str = "ERROR"
    severity: ErrorSeverity = ErrorSeverity.MEDIUM
    retryable: bool = False

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.code = kwargs.get("code") or self.default_code
        self.details = kwargs.get("details") or {}
        self.correlation_id = kwargs.get("correlation_id") or str(uuid.uuid4())
        self.error_id = str(uuid.uuid4())
        self.timestamp = time.time()
        self.user_message = kwargs.get("user_message") or message
        self.recovery_hint = kwargs.get("recovery_hint")
        self.context = kwargs.get("context") or {}
        self.__cause__ = kwargs.get("cause")

        self._log_error()

    def _log_error(self) -> None:
        """Log error with structured data."""
        logger = logging.getLogger(f"passcheck.errors.{self.__class__.__name__}")
        log_data = {
            "error_id": self.error_id,
            "correlation_id": self.correlation_id,
            "code": self.code,
            "error_message": self.message,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "details": self._sanitize_details(self.details),
            "context": self._sanitize_details(self.context),
            "error_class": self.__class__.__name__,
        }

        if self.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", extra=log_data)
        elif self.severity == ErrorSeverity.HIGH:
            logger.error("High severity error", extra=log_data)
        elif self.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error", extra=log_data)
        else:
            logger.info("Low severity error", extra=log_data)

    def _sanitize_details(self, details: dict) -> dict:
        """Sanitize error details to remove sensitive information."""
        if not details:
            return {}

        sanitized = {}
        for key, value in details.items():
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                sanitized[key] = "***REDACTED***"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_details(value)
            else:
                sanitized[key] = value

        return sanitized

    def to_dict(
        self, include_details: bool = True, include_internal: bool = False
    ) -> dict[str, Any]:
        """
        Serialize error for API/logging with control over what's included.

        Args:
            include_details: Include error details
            include_internal: Include internal debugging info (error_id, severity, ...)
        """
        data = {
            "error": self.code,
            "message": self.user_message,
            "timestamp": self.timestamp,
        }

        if include_details and self.details:
            data["details"] = self._sanitize_details(
                {k: v for k, v in self.details.items() if not k.startswith("_")}
            )

        if self.recovery_hint:
            data["recovery_hint"] = self.recovery_hint

        if self.retryable:
            data["retryable"] = True

        if include_internal:
            data.update(
                {
                    "error_id": self.error_id,
                    "correlation_id": self.correlation_id,
                    "severity": self.severity.value,
                    "internal_message": self.message,
                    "context": self._sanitize_details(self.context),
                }
            )

        return data

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.code}: {self.message}"


class DomainError(PassCheckError):
    """Base class for domain errors."""

    default_code = "DOMAIN_ERROR"
    severity = ErrorSeverity.MEDIUM


class InfrastructureError(PassCheckError):
    """Base class for infrastructure errors."""

    default_code = "INFRASTRUCTURE_ERROR"
    severity = ErrorSeverity.HIGH
    retryable = True


class ConfigurationError(InfrastructureError):
    """Configuration error."""

    default_code = "CONFIGURATION_ERROR"
    severity = ErrorSeverity.CRITICAL
    retryable = False

    def __init__(
        self, message: str, config_key: str | None = None, **kwargs: Any
    ) -> None:
        user_message = "Service configuration issue"
        super().__init__(message, user_message=user_message, **kwargs)
        if config_key:
            self.details["config_key"] = config_key
        self.code = self.default_code


class ExternalServiceError(InfrastructureError):
    """External service error."""

    default_code = "EXTERNAL_SERVICE_ERROR"
    severity = ErrorSeverity.HIGH
    retryable = True

    def __init__(
        self,
        service: str,
        message: str,
        service_status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        full_message = f"{service} error: {message}"
        kwargs.setdefault("user_message", "External service temporarily unavailable")
        kwargs.setdefault("recovery_hint", "Please try again in a few moments")
        super().__init__(full_message, **kwargs)
        self.details.update(
            {"service": service, "service_status_code": service_status_code}
        )
        self.code = kwargs.get("code") or self.default_code
