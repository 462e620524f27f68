"""
Base Rule Checker

Foundation for the password rule checkers in the identity domain.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from passcheck.modules.identity.domain.enums import PasswordErrorKind

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.value_objects import (
        CharacterCounter,
        PasswordPolicy,
        UserContext,
    )


@dataclass(frozen=True)
class PolicyViolation:
    """
    A single rule failure.

    ``detail`` carries extra human readable context, for example the
    message supplied by an external rule service. Violations are plain
    values: two evaluations of the same input produce equal violations.
    """

    kind: PasswordErrorKind
    detail: str | None = None
    rule_name: str | None = None

    @property
    def code(self) -> str:
        return self.kind.code

    @property
    def message(self) -> str:
        """Detail when present, otherwise the kind's default message."""
        return self.detail or self.kind.default_message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "code": self.kind.code,
            "message": self.message,
            "detail": self.detail,
            "rule_name": self.rule_name,
        }


class RuleChecker(ABC):
    """Base class for the syntax rule checkers."""

    def __init__(self, rule_name: str | None = None):
        self.rule_name = rule_name or self.__class__.__name__

    @abstractmethod
    def validate(
        self,
        password: str,
        counter: "CharacterCounter",
        policy: "PasswordPolicy",
        user_context: "UserContext | None" = None,
    ) -> list[PolicyViolation]:
        """Check the password and return any violations."""

    def create_violation(
        self, kind: PasswordErrorKind, detail: str | None = None
    ) -> PolicyViolation:
        """Helper method to create a violation tagged with this checker."""
        return PolicyViolation(kind=kind, detail=detail, rule_name=self.rule_name)
