"""
Authentication Gateway

Selects the configured identity provider, runs its authorization code
exchange, and makes sure anything that goes wrong leaves as a DomainError.

Flow:
    authenticate(code)
      -> registry.get(provider_name)      ConfigurationError if unknown
      -> provider.authenticate(...)       inside capture_panics()
      -> AuthenticationResult | DomainError (logged once, re-raised)
"""

from __future__ import annotations

import logging

import httpx

from .boundary import capture_panics, log_failure
from .config import HTTP_TIMEOUT_SECONDS, OAUTH_PROVIDER, load_provider_config
from .errors import DomainError
from .models import AuthenticationResult, ProviderConfig
from .registry import ProviderRegistry, create_default_registry

logger = logging.getLogger(__name__)


class AuthGateway:
    """
    Request-scoped authentication against one configured provider.

    Holds no per-request state; the httpx client is shared across concurrent
    calls and owns timeouts and connection limits.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        provider_name: str,
        config: ProviderConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.registry = registry
        self.provider_name = provider_name
        self.config = config
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=HTTP_TIMEOUT_SECONDS)
        return self._client

    async def close(self) -> None:
        """Clean up HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def authenticate(self, code: str) -> AuthenticationResult:
        """
        Authenticate the user behind an authorization code.

        Raises:
            DomainError: Every failure, including uncaught faults inside the
                provider adapter (as CaughtPanic).
        """
        try:
            provider = self.registry.get(self.provider_name)
            with capture_panics(f"authenticating with {self.provider_name}"):
                result = await provider.authenticate(self.config, self.client, code)
        except DomainError as e:
            log_failure(e)
            raise

        logger.info(
            "authenticated %s user %s",
            self.provider_name,
            result.user.username,
        )
        return result


def create_gateway_from_env() -> AuthGateway:
    """Create a gateway from OAUTH_* environment settings."""
    return AuthGateway(
        registry=create_default_registry(),
        provider_name=OAUTH_PROVIDER,
        config=load_provider_config(),
    )
