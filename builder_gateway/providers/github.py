"""
GitHub Identity Provider

GitHub's OAuth apps use the ``token`` authorization scheme and a /user
payload of {"id": <int>, "login", "email"?}. The numeric id is normalized
to a string so it fits OAuth2User.
"""

from __future__ import annotations

import httpx

from ..models import AuthenticationResult, GitHubUser, OAuth2User, ProviderConfig
from .base import IdentityProvider


class GitHubProvider(IdentityProvider):
    name = "github"
    auth_scheme = "token"

    async def authenticate(
        self,
        config: ProviderConfig,
        client: httpx.AsyncClient,
        code: str,
    ) -> AuthenticationResult:
        token = await self.exchange_code(config, client, code)
        profile = await self.fetch_profile(config, client, token, GitHubUser)
        user = OAuth2User(id=str(profile.id), username=profile.login, email=profile.email)
        return AuthenticationResult(access_token=token, user=user)
