"""HTTP client for the external password rule service."""

import threading
from typing import Any

import httpx
from pydantic import ValidationError

from passcheck.core.config import ExternalRuleConfig
from passcheck.core.logging import get_logger
from passcheck.modules.identity.application.dtos import (
    ExternalRuleRequest,
    ExternalRuleResponse,
)
from passcheck.modules.identity.domain.errors import ExternalRuleTransportError

logger = get_logger(__name__)


class HttpExternalRuleClient:
    """Posts external rule requests as JSON over HTTP.

    Non-2xx responses, connection errors, timeouts and bodies that are not
    a JSON object all surface as ``ExternalRuleTransportError``.
    """

    USER_AGENT = "passcheck-external-rule-client/1.0"

    def __init__(
        self,
        client: httpx.Client | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            client: Preconfigured HTTP client (owned by the caller)
            transport: Custom transport for a client created on demand
        """
        self._client = client
        self._owns_client = client is None
        self._transport = transport
        self._client_lock = threading.Lock()

    def __enter__(self) -> "HttpExternalRuleClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def _ensure_client(self, config: ExternalRuleConfig) -> httpx.Client:
        client = self._client
        if client is not None:
            return client

        with self._client_lock:
            if self._client is None:
                self._client = httpx.Client(
                    timeout=httpx.Timeout(config.timeout_seconds),
                    transport=self._transport,
                )
            return self._client

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if not self._owns_client:
            return

        with self._client_lock:
            client, self._client = self._client, None
        if client is not None:
            client.close()

    def send(self, config: ExternalRuleConfig, request: ExternalRuleRequest) -> ExternalRuleResponse:
        client = self._ensure_client(config)
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.USER_AGENT,
            **config.headers,
        }

        try:
            response = client.post(
                config.url,
                content=request.to_json(),
                headers=headers,
                timeout=config.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise ExternalRuleTransportError(f"request timed out: {e}", cause=e) from e
        except httpx.HTTPStatusError as e:
            raise ExternalRuleTransportError(
                f"http response error code: {e.response.status_code}",
                service_status_code=e.response.status_code,
                cause=e,
            ) from e
        except httpx.HTTPError as e:
            raise ExternalRuleTransportError(f"request failed: {e}", cause=e) from e

        logger.debug("External rule service responded", status_code=response.status_code)
        return self._parse(response)

    def _parse(self, response: httpx.Response) -> ExternalRuleResponse:
        try:
            body: Any = response.json()
        except ValueError as e:
            raise ExternalRuleTransportError("response body is not valid JSON", cause=e) from e

        if not isinstance(body, dict):
            raise ExternalRuleTransportError("response body is not a JSON object")

        try:
            return ExternalRuleResponse.model_validate(body)
        except ValidationError as e:
            raise ExternalRuleTransportError(f"unexpected response body: {e}", cause=e) from e
