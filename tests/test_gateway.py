"""
Tests for the authentication gateway.

The gateway must surface every failure as a DomainError, log it once with
the full upstream detail, and never let a raw exception escape.
"""

import logging

import httpx
import pytest

from builder_gateway.errors import (
    CaughtPanic,
    ConfigurationError,
    ProviderHttpFailure,
)
from builder_gateway.gateway import AuthGateway
from builder_gateway.providers import IdentityProvider, OktaProvider
from builder_gateway.registry import ProviderRegistry, create_default_registry

from conftest import TOKEN_PATH, MockTransport


class ExplodingProvider(IdentityProvider):
    name = "exploding"

    async def authenticate(self, config, client, code):
        raise RuntimeError("adapter bug")


class TestAuthGateway:
    @pytest.mark.asyncio
    async def test_authenticate_success(self, okta_gateway):
        result = await okta_gateway.authenticate("code-1")
        assert result.access_token == "abc"
        assert result.user.id == "u1"

    @pytest.mark.asyncio
    async def test_concurrent_calls_are_independent(self, okta_gateway, okta_transport):
        import asyncio

        results = await asyncio.gather(
            *(okta_gateway.authenticate(f"code-{i}") for i in range(5))
        )
        assert all(r.access_token == "abc" for r in results)
        assert len(okta_transport.requests) == 10

    @pytest.mark.asyncio
    async def test_provider_failure_is_logged_with_body(self, provider_config, caplog):
        transport = MockTransport({TOKEN_PATH: (401, "invalid_grant")})
        gateway = AuthGateway(
            registry=create_default_registry(),
            provider_name="okta",
            config=provider_config,
            client=httpx.AsyncClient(transport=transport),
        )
        with caplog.at_level(logging.WARNING, logger="builder_gateway"):
            with pytest.raises(ProviderHttpFailure):
                await gateway.authenticate("stale")
        await gateway.close()

        assert "status=401" in caplog.text
        assert "invalid_grant" in caplog.text

    @pytest.mark.asyncio
    async def test_unknown_provider(self, provider_config):
        gateway = AuthGateway(
            registry=create_default_registry(),
            provider_name="bitbucket",
            config=provider_config,
        )
        with pytest.raises(ConfigurationError):
            await gateway.authenticate("c")

    @pytest.mark.asyncio
    async def test_adapter_fault_becomes_caught_panic(self, provider_config):
        gateway = AuthGateway(
            registry=ProviderRegistry([ExplodingProvider()]),
            provider_name="exploding",
            config=provider_config,
        )
        with pytest.raises(CaughtPanic) as exc_info:
            await gateway.authenticate("c")
        await gateway.close()

        err = exc_info.value
        assert err.panic_message == "adapter bug"
        assert "exploding" in err.context
        assert isinstance(err.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_client_is_lazy_and_closable(self, provider_config):
        gateway = AuthGateway(
            registry=ProviderRegistry([OktaProvider()]),
            provider_name="okta",
            config=provider_config,
        )
        assert gateway._client is None
        client = gateway.client
        assert isinstance(client, httpx.AsyncClient)
        assert gateway.client is client
        await gateway.close()
        assert gateway._client is None
