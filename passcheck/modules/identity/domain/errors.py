"""
Identity Domain Error Hierarchy

Rejections are reported with ``PasswordValidationError``. Conditions that
abort a validation attempt outright (external rule service or directory not
reachable) derive from ``ValidationAbortedError`` so callers can tell the
two apart.
"""

from typing import TYPE_CHECKING, Any

from passcheck.core.errors import (
    DomainError,
    ErrorSeverity,
    ExternalServiceError,
    InfrastructureError,
)

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.rules.base import PolicyViolation


class PasswordValidationError(DomainError):
    """Candidate password rejected by one or more rules.

    ``violation`` is the representative (first) reason, ``violations`` the
    full ordered list.
    """

    default_code = "PASSWORD_POLICY_VIOLATION"
    severity = ErrorSeverity.LOW

    def __init__(self, violations: list["PolicyViolation"], **kwargs: Any) -> None:
        if not violations:
            raise ValueError("PasswordValidationError requires at least one violation")
        self.violations = list(violations)
        self.violation = self.violations[0]
        super().__init__(
            f"Password rejected: {self.violation.kind.code}",
            user_message=self.violation.message,
            details={
                "error_kind": self.violation.kind.code,
                "violation_count": len(self.violations),
                "violations": [v.kind.code for v in self.violations],
            },
            **kwargs,
        )
        self.code = self.violation.kind.code


class ValidationAbortedError(InfrastructureError):
    """A validation attempt could not be completed."""

    default_code = "PASSWORD_VALIDATION_ABORTED"
    severity = ErrorSeverity.HIGH
    retryable = False


class ExternalRuleHaltError(ValidationAbortedError, ExternalServiceError):
    """External rule callout failed and halt-on-error is configured."""

    default_code = "EXTERNAL_RULE_HALT"

    def __init__(self, message: str, **kwargs: Any) -> None:
        ExternalServiceError.__init__(self, "external-rule", message, **kwargs)


class ExternalRuleStateError(ValidationAbortedError, ExternalServiceError):
    """External rule callout failed without halt-on-error; still fatal."""

    default_code = "EXTERNAL_RULE_FAILED"

    def __init__(self, message: str, **kwargs: Any) -> None:
        ExternalServiceError.__init__(self, "external-rule", message, **kwargs)


class DirectoryUnavailableError(ValidationAbortedError):
    """Directory could not be reached while testing the password policy."""

    default_code = "DIRECTORY_UNAVAILABLE"
    retryable = True


class DirectoryUnsupportedOperation(NotImplementedError):
    """Directory does not support password policy testing; the check is skipped."""


class DirectoryPolicyRejection(Exception):
    """Directory rejected the password.

    ``code`` is the directory's error code; it is translated to a violation
    kind by the validator.
    """

    def __init__(self, code: str | None = None, message: str | None = None) -> None:
        super().__init__(message or code or "directory rejected password")
        self.code = code
        self.message = message


class ExternalRuleTransportError(ExternalServiceError):
    """External rule service call could not be completed."""

    default_code = "EXTERNAL_RULE_TRANSPORT"

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__("external-rule", message, **kwargs)
