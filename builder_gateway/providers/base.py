"""
Identity Provider Capability

One operation, ``authenticate``, implemented once per external provider.
The shared helpers below run the two round-trips of the authorization code
grant and fold every failure into the gateway taxonomy:

    exchange_code()   POST token endpoint  -> access token
    fetch_profile()   GET userinfo endpoint -> provider-specific profile

Non-2xx answers become ProviderHttpFailure (status + raw body), 2xx answers
that do not decode become SerializationFailure, and httpx transport errors
become TransportFailure. There is no caching, refresh or retry here; timeouts
come from the shared client.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..errors import ProviderHttpFailure, from_http_error, from_validation_error
from ..models import AuthenticationResult, ProviderConfig, TokenResponse

logger = logging.getLogger(__name__)

ACCEPT_JSON = "application/json"
FORM_URLENCODED = "application/x-www-form-urlencoded"

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class IdentityProvider(ABC):
    """
    Adapter for one external identity provider.

    Subclasses set ``name`` and ``auth_scheme`` and implement authenticate().
    They may override any step when a provider's contract differs.
    """

    name: str = ""
    auth_scheme: str = "Bearer"

    @abstractmethod
    async def authenticate(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        code: str,
    ) -> AuthenticationResult:
        """
        Exchange ``code`` for a token and fetch the user it belongs to.

        Raises:
            DomainError: ProviderHttpFailure, SerializationFailure or
                TransportFailure, depending on which step failed and how.
        """

    async def exchange_code(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        code: str,
    ) -> str:
        """Trade an authorization code for an access token."""
        form = {
            "client_id": config.client_id,
            "client_secret": config.client_secret.get_secret_value(),
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": config.redirect_url,
        }
        headers = {"Accept": ACCEPT_JSON, "Content-Type": FORM_URLENCODED}
        body = await self._send(client, "POST", config.token_url, headers=headers, data=form)
        return self.decode(TokenResponse, body, "token response").access_token

    async def fetch_profile(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        token: str,
        payload: type[PayloadT],
    ) -> PayloadT:
        """GET the userinfo endpoint with the token and decode ``payload``."""
        headers = {
            "Accept": ACCEPT_JSON,
            "Authorization": f"{self.auth_scheme} {token}",
        }
        body = await self._send(client, "GET", config.userinfo_url, headers=headers)
        return self.decode(payload, body, "user profile")

    def decode(self, payload: type[PayloadT], body: str, context: str) -> PayloadT:
        try:
            return payload.model_validate_json(body)
        except ValidationError as e:
            raise from_validation_error(e, f"{self.name} {context}") from e

    async def _send(
        self,
        client: httpx.AsyncClient,
        method: str,
        url: str,
        *,
        headers: dict[str, str],
        data: dict[str, Any] | None = None,
    ) -> str:
        try:
            response = await client.request(method, url, headers=headers, data=data)
        except httpx.HTTPError as e:
            raise from_http_error(e) from e

        body = response.text
        logger.debug(
            "%s %s %s -> HTTP %d (%d bytes)",
            self.name, method, url, response.status_code, len(body),
        )
        if not response.is_success:
            raise ProviderHttpFailure(response.status_code, body, raw=response.content)
        return body
