"""
Validator factory.

Wires a ``PasswordRuleValidator`` with the default adapters and, when an
endpoint is configured, the HTTP external rule client.
"""

from collections.abc import Iterable
from typing import Any

from passcheck.core.config import Settings, get_settings
from passcheck.modules.identity.application.services import ExternalRuleInvoker
from passcheck.modules.identity.domain.enums import ValidatorFlag
from passcheck.modules.identity.domain.services import PasswordRuleValidator
from passcheck.modules.identity.domain.value_objects import PasswordPolicy

from .adapters import (
    InMemoryStatistics,
    SubstringAttributeContainment,
    UserContextMacroExpander,
)
from .external import HttpExternalRuleClient


def create_password_validator(
    policy: PasswordPolicy,
    *,
    flags: Iterable[ValidatorFlag] = (),
    settings: Settings | None = None,
    external_rule_client: HttpExternalRuleClient | None = None,
    **collaborators: Any,
) -> PasswordRuleValidator:
    """
    Build a validator for a policy.

    An HTTP client created here is released by ``validator.close()`` (or by
    using the validator as a context manager); a client passed in stays
    open for its owner to close.

    Args:
        policy: Password policy to enforce
        flags: Validator flags
        settings: Settings to use (environment settings if not provided)
        external_rule_client: Transport for the external rule service
        **collaborators: Overrides for the validator collaborators
            (wordlist, shared_history, strength_scorer, ...)
    """
    settings = settings or get_settings()
    validator_settings = settings.validator

    collaborators.setdefault("macro_expander", UserContextMacroExpander())
    collaborators.setdefault("attribute_containment", SubstringAttributeContainment())
    collaborators.setdefault("statistics", InMemoryStatistics())

    if validator_settings.external_rule.enabled and "external_rules" not in collaborators:
        collaborators["external_rules"] = ExternalRuleInvoker(
            external_rule_client or HttpExternalRuleClient(),
            validator_settings,
            owns_transport=external_rule_client is None,
        )

    return PasswordRuleValidator(
        policy,
        flags=flags,
        settings=validator_settings,
        **collaborators,
    )
