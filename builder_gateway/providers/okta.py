"""
Okta Identity Provider

OIDC flavoured: Bearer token, userinfo payload
{"sub", "preferred_username", "email"?}.
"""

from __future__ import annotations

import httpx

from ..models import AuthenticationResult, OAuth2User, OktaUserInfo, ProviderConfig
from .base import IdentityProvider


class OktaProvider(IdentityProvider):
    name = "okta"
    auth_scheme = "Bearer"

    async def authenticate(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        code: str,
    ) -> AuthenticationResult:
        token = await self.exchange_code(config, client, code)
        info = await self.fetch_profile(config, client, token, OktaUserInfo)
        user = OAuth2User(
            id=info.sub,
            username=info.preferred_username,
            email=info.email,
        )
        return AuthenticationResult(access_token=token, user=user)
