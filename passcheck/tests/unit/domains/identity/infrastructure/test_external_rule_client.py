"""
Test cases for HttpExternalRuleClient.

Uses httpx.MockTransport so no network access is needed.
"""

import json
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest

from passcheck.core.config import ExternalRuleConfig
from passcheck.modules.identity.application.dtos import ExternalRuleRequest
from passcheck.modules.identity.domain.errors import ExternalRuleTransportError
from passcheck.modules.identity.domain.value_objects import PasswordPolicy, UserContext
from passcheck.modules.identity.infrastructure.external import HttpExternalRuleClient

pytestmark = pytest.mark.unit

RULE_SERVICE_URL = "https://rules.example.com/check"


@pytest.fixture
def config():
    return ExternalRuleConfig(url=RULE_SERVICE_URL, headers={"X-Api-Key": "abc"})


@pytest.fixture
def request_body():
    return ExternalRuleRequest.build(
        PasswordPolicy.from_mapping({"MinimumLength": 8}),
        "Secret123",
        UserContext(user_id="jsmith"),
    )


def client_for(handler) -> HttpExternalRuleClient:
    return HttpExternalRuleClient(transport=httpx.MockTransport(handler))


class TestHttpExternalRuleClient:
    """Test the HTTP transport."""

    def test_posts_json(self, config, request_body):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"error": True, "errorMessage": "too common"})

        with client_for(handler) as client:
            response = client.send(config, request_body)

        assert response.error is True
        assert response.error_message == "too common"

        sent = captured[0]
        assert sent.method == "POST"
        assert str(sent.url) == RULE_SERVICE_URL
        assert sent.headers["content-type"] == "application/json"
        assert sent.headers["x-api-key"] == "abc"
        body = json.loads(sent.content)
        assert body["password"] == "Secret123"
        assert body["policy"]["MinimumLength"] == 8
        assert body["userInfo"]["userID"] == "jsmith"

    def test_string_error_flag(self, config, request_body):
        client = client_for(lambda request: httpx.Response(200, json={"error": "TRUE"}))

        assert client.send(config, request_body).error is True

    def test_http_error_status(self, config, request_body):
        client = client_for(lambda request: httpx.Response(500, text="boom"))

        with pytest.raises(ExternalRuleTransportError) as exc_info:
            client.send(config, request_body)

        assert exc_info.value.details["service_status_code"] == 500

    def test_invalid_json(self, config, request_body):
        client = client_for(lambda request: httpx.Response(200, content=b"not json"))

        with pytest.raises(ExternalRuleTransportError):
            client.send(config, request_body)

    def test_non_object_body(self, config, request_body):
        client = client_for(lambda request: httpx.Response(200, json=["error"]))

        with pytest.raises(ExternalRuleTransportError):
            client.send(config, request_body)

    def test_connection_error(self, config, request_body):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExternalRuleTransportError) as exc_info:
            client_for(handler).send(config, request_body)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout(self, config, request_body):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("too slow", request=request)

        with pytest.raises(ExternalRuleTransportError) as exc_info:
            client_for(handler).send(config, request_body)

        assert "timed out" in exc_info.value.message

    def test_caller_owned_client_not_closed(self, config, request_body):
        http_client = httpx.Client(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        )

        with HttpExternalRuleClient(client=http_client) as client:
            assert client.send(config, request_body).error is False

        assert not http_client.is_closed
        http_client.close()

    def test_concurrent_first_use_creates_one_client(self, config, request_body):
        client = client_for(lambda request: httpx.Response(200, json={}))

        with ThreadPoolExecutor(max_workers=8) as pool:
            created = list(pool.map(lambda _: client._ensure_client(config), range(32)))

        assert len({id(http_client) for http_client in created}) == 1
        client.close()

    def test_close_releases_created_client(self, config, request_body):
        client = client_for(lambda request: httpx.Response(200, json={}))
        client.send(config, request_body)
        http_client = client._client

        client.close()

        assert http_client.is_closed
        assert client._client is None
        client.close()
