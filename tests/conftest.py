"""
Shared test fixtures for the build gateway tests.

Provides a scripted identity-provider transport, provider configuration and
gateways wired to the mock transport.
"""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from builder_gateway.gateway import AuthGateway
from builder_gateway.models import ProviderConfig
from builder_gateway.registry import create_default_registry


# -----------------------------------------------------------------------------
# Mock HTTP Transport
# -----------------------------------------------------------------------------


TOKEN_PATH = "/oauth2/v1/token"
USERINFO_PATH = "/oauth2/v1/userinfo"


class MockTransport(httpx.AsyncBaseTransport):
    """
    Mock transport that returns predefined responses.

    Useful for testing provider exchanges without hitting real endpoints.
    """

    def __init__(self, responses: dict[str, tuple[int, Any]]):
        """
        Initialize mock transport with predefined responses.

        Args:
            responses: Dict mapping URL paths to (status_code, body) tuples.
                A str or bytes body is sent verbatim, an Exception is raised,
                anything else is sent as JSON.
        """
        self.responses = responses
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async request by returning a predefined response."""
        self.requests.append(request)

        path = request.url.path
        if path not in self.responses:
            return httpx.Response(404, json={"error": "Not found"})

        status, body = self.responses[path]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)


# -----------------------------------------------------------------------------
# Test Data
# -----------------------------------------------------------------------------


OKTA_TOKEN = {"access_token": "abc", "token_type": "Bearer", "expires_in": 3600}

OKTA_USERINFO = {
    "sub": "u1",
    "preferred_username": "alice",
    "email": "a@x.com",
    "name": "Alice Example",
}


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def provider_config() -> ProviderConfig:
    return ProviderConfig(
        client_id="builder-web",
        client_secret="s3cr3t",
        redirect_url="https://bldr.example.com/oauth/callback",
        token_url=f"https://idp.example.com{TOKEN_PATH}",
        userinfo_url=f"https://idp.example.com{USERINFO_PATH}",
    )


@pytest.fixture
def okta_transport() -> MockTransport:
    """Transport scripted for the happy path."""
    return MockTransport({
        TOKEN_PATH: (200, OKTA_TOKEN),
        USERINFO_PATH: (200, OKTA_USERINFO),
    })


@pytest.fixture
async def okta_gateway(
    provider_config: ProviderConfig,
    okta_transport: MockTransport,
):
    """Gateway configured for okta with the mock transport injected."""
    gateway = AuthGateway(
        registry=create_default_registry(),
        provider_name="okta",
        config=provider_config,
        client=httpx.AsyncClient(transport=okta_transport),
    )
    yield gateway
    await gateway.close()
