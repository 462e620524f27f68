"""
Password Validation Result Value Object

Ordered violations produced by one evaluation of a candidate password.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from passcheck.modules.identity.domain.enums import PasswordErrorKind

from .base import ValueObject

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.rules.base import PolicyViolation


@dataclass(frozen=True)
class ValidationOutcome(ValueObject):
    """Violations in the order they were produced; empty means accepted."""

    violations: tuple["PolicyViolation", ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "violations", tuple(self.violations))

    @classmethod
    def from_violations(cls, violations: Iterable["PolicyViolation"]) -> "ValidationOutcome":
        return cls(violations=tuple(violations))

    @property
    def is_valid(self) -> bool:
        return not self.violations

    @property
    def first(self) -> "PolicyViolation | None":
        """Representative reason for a rejection."""
        return self.violations[0] if self.violations else None

    @property
    def kinds(self) -> list[PasswordErrorKind]:
        return [violation.kind for violation in self.violations]

    def has(self, kind: PasswordErrorKind) -> bool:
        return kind in self.kinds

    def count(self, kind: PasswordErrorKind) -> int:
        return self.kinds.count(kind)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "violations": [violation.to_dict() for violation in self.violations],
        }

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self):
        return iter(self.violations)
