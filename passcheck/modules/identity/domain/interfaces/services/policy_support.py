"""
Policy Support Interfaces

Ports for macro expansion, attribute containment, strength scoring and
statistics used while evaluating a policy.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.value_objects import UserContext


class IMacroExpander(Protocol):
    """Resolves tokens embedded in configured values."""

    def expand(self, template: str, user_context: "UserContext | None") -> str:
        """Expand macros in a template for the given user.

        Args:
            template: Configured value that may contain macros
            user_context: User the value is resolved for

        Returns:
            Expanded text; may be empty
        """
        ...


class IAttributeContainment(Protocol):
    """Compares a password against a user attribute value."""

    def contains_disallowed_value(self, password: str, value: str, threshold: int) -> bool:
        """Check if the password contains the value.

        Args:
            password: Candidate password
            value: Attribute value
            threshold: 0 for whole value containment, otherwise the length
                of the value slices that may not appear

        Returns:
            True if the password is too close to the value
        """
        ...


class IStrengthScorer(Protocol):
    """Scores password strength."""

    def score(self, password: str) -> int:
        """Strength score for the password; higher is stronger."""
        ...


class IStatisticsSink(Protocol):
    """Thread safe event counters."""

    def increment(self, statistic: str, amount: int = 1) -> None:
        """Increment a named counter."""
        ...
