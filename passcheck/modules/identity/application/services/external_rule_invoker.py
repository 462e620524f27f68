"""
External Rule Invoker

Sends the candidate password, the flattened policy and public user
information to the configured external rule service and turns its verdict
into violations.
"""

from typing import Protocol

from passcheck.core.config import ExternalRuleConfig, ValidatorSettings
from passcheck.core.logging import get_logger
from passcheck.modules.identity.application.dtos import (
    ExternalRuleRequest,
    ExternalRuleResponse,
)
from passcheck.modules.identity.domain.enums import PasswordErrorKind
from passcheck.modules.identity.domain.errors import (
    ExternalRuleHaltError,
    ExternalRuleStateError,
    ExternalRuleTransportError,
)
from passcheck.modules.identity.domain.rules import PolicyViolation
from passcheck.modules.identity.domain.value_objects import PasswordPolicy, UserContext

logger = get_logger(__name__)


class IExternalRuleTransport(Protocol):
    """Delivers an external rule request and returns the parsed verdict."""

    def send(self, config: ExternalRuleConfig, request: ExternalRuleRequest) -> ExternalRuleResponse:
        """Post the request to ``config.url``.

        Raises:
            ExternalRuleTransportError: Call failed or the response could
                not be read
        """
        ...

    def close(self) -> None:
        """Release the underlying connection."""
        ...


class ExternalRuleInvoker:
    """
    External rule callout.

    A transport failure always aborts the validation. ``halt_on_error``
    only selects the error raised: ``ExternalRuleHaltError`` when set,
    ``ExternalRuleStateError`` otherwise.

    ``close`` closes the transport only when ``owns_transport`` is set.
    """

    def __init__(
        self,
        transport: IExternalRuleTransport,
        settings: ValidatorSettings | None = None,
        *,
        owns_transport: bool = False,
    ) -> None:
        self._transport = transport
        self._owns_transport = owns_transport
        self.settings = settings or ValidatorSettings()

    @property
    def config(self) -> ExternalRuleConfig:
        return self.settings.external_rule

    def close(self) -> None:
        if self._owns_transport:
            self._transport.close()

    def invoke(
        self,
        policy: PasswordPolicy,
        password: str,
        user_context: UserContext | None = None,
    ) -> list[PolicyViolation]:
        if not self.config.enabled:
            return []

        request = ExternalRuleRequest.build(
            policy,
            password or "",
            user_context,
            attribute_names=self.settings.public_user_attributes,
        )

        try:
            response = self._transport.send(self.config, request)
        except ExternalRuleTransportError as e:
            logger.error(
                "Error executing external rule call",
                url=self.config.url,
                halt_on_error=self.config.halt_on_error,
                error=e.message,
            )
            message = f"call to {self.config.url} failed"
            if self.config.halt_on_error:
                raise ExternalRuleHaltError(message, cause=e) from e
            raise ExternalRuleStateError(message, cause=e) from e

        if not response.error:
            logger.debug("External rule service did not report an error")
            return []

        if response.error_message is not None:
            logger.debug("External rule service reported an error", error_message=response.error_message)
            return [PolicyViolation(PasswordErrorKind.CUSTOM_ERROR, detail=response.error_message)]

        logger.debug("External rule service reported an error without a message")
        return [PolicyViolation(PasswordErrorKind.CUSTOM_ERROR)]
