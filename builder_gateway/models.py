"""
Identity Models

Pydantic schemas for provider configuration, the normalized user identity,
provider wire payloads, and the bodies the gateway returns to its callers.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, SecretStr


# -----------------------------------------------------------------------------
# Configuration and normalized identity
# -----------------------------------------------------------------------------


class ProviderConfig(BaseModel):
    """
    Provider-scoped OAuth2 client settings.

    Loaded by config.load_provider_config() or supplied by the embedding
    service. The client secret is a SecretStr so it never shows up in reprs
    or log lines.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_id: str
    client_secret: SecretStr
    redirect_url: str
    token_url: str
    userinfo_url: str


class OAuth2User(BaseModel):
    """
    A user identity normalized from one provider's profile payload.

    ``id`` is only unique within the issuing provider; use identity_key()
    whenever users from different providers can meet.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    username: str
    email: str | None = None

    def identity_key(self, provider: str) -> tuple[str, str]:
        return (provider, self.id)


class AuthenticationResult(BaseModel):
    """Opaque access token paired with the normalized user."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    access_token: str
    user: OAuth2User


# -----------------------------------------------------------------------------
# Provider wire payloads
# Providers add fields freely, so unknown keys are ignored here.
# -----------------------------------------------------------------------------


class TokenResponse(BaseModel):
    """Successful token-endpoint body: {"access_token": "<string>"}."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    access_token: str


class OktaUserInfo(BaseModel):
    """OIDC userinfo body as returned by Okta."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    sub: str
    preferred_username: str
    email: str | None = None


class GitHubUser(BaseModel):
    """GitHub /user body."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    login: str
    email: str | None = None


# -----------------------------------------------------------------------------
# Gateway response bodies
# -----------------------------------------------------------------------------


class AuthenticatedResponse(BaseModel):
    """Body returned to the external caller after a successful callback."""

    model_config = ConfigDict(extra="forbid")

    provider: str
    access_token: str
    user: OAuth2User


class ErrorResponse(BaseModel):
    """
    Body returned to the external caller on failure.

    Carries the status and category only. Internal error text stays in the
    logs.
    """

    model_config = ConfigDict(extra="forbid")

    status: int
    category: str
    code: str | None = None
