"""
External Rule Service Interface

Port for delegating extra password rules to a third party service.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from passcheck.modules.identity.domain.rules.base import PolicyViolation
    from passcheck.modules.identity.domain.value_objects import (
        PasswordPolicy,
        UserContext,
    )


class IExternalRuleInvoker(Protocol):
    """External rule callout."""

    def invoke(
        self,
        policy: "PasswordPolicy",
        password: str,
        user_context: "UserContext | None",
    ) -> list["PolicyViolation"]:
        """Run the external rules for a password.

        Returns:
            Violations reported by the service; empty when accepted or
            when no service is configured

        Raises:
            ExternalRuleHaltError: Callout failed with halt-on-error set
            ExternalRuleStateError: Callout failed without halt-on-error
        """
        ...

    def close(self) -> None:
        """Release any connection held for the callout."""
        ...
