"""
Centralized configuration for the build gateway.

All magic values and settings in one place, with environment variable
overrides for deployment flexibility.
"""

from __future__ import annotations

import os
from urllib.parse import urlparse

from .errors import ConfigurationError
from .models import ProviderConfig

# -----------------------------------------------------------------------------
# Identity Provider
# -----------------------------------------------------------------------------

OAUTH_PROVIDER = os.environ.get("OAUTH_PROVIDER", "okta")

PROVIDER_SETTINGS: dict[str, str] = {
    "client_id": "OAUTH_CLIENT_ID",
    "client_secret": "OAUTH_CLIENT_SECRET",
    "redirect_url": "OAUTH_REDIRECT_URL",
    "token_url": "OAUTH_TOKEN_URL",
    "userinfo_url": "OAUTH_USERINFO_URL",
}

URL_SETTINGS = ("redirect_url", "token_url", "userinfo_url")

# -----------------------------------------------------------------------------
# HTTP Configuration
# -----------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "30.0"))

# -----------------------------------------------------------------------------
# Server Configuration
# -----------------------------------------------------------------------------

SERVER_NAME = "builder-gateway"
SERVER_VERSION = "0.1.0"
SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")
SERVER_PORT = os.environ.get("SERVER_PORT", "9636")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def validate_port(value: str | int) -> int:
    """Parse a TCP port, rejecting anything outside 1-65535."""
    try:
        port = int(value)
    except (TypeError, ValueError):
        raise ConfigurationError.bad_port(value) from None
    if not 1 <= port <= 65535:
        raise ConfigurationError.bad_port(value)
    return port


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_provider_config(environ: dict[str, str] | None = None) -> ProviderConfig:
    """
    Build the provider configuration from environment variables.

    Raises:
        ConfigurationError: If a setting is missing or a URL is malformed.
    """
    env = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for field, variable in PROVIDER_SETTINGS.items():
        value = env.get(variable, "").strip()
        if not value:
            raise ConfigurationError.missing_setting(variable)
        values[field] = value

    for field in URL_SETTINGS:
        if not _is_http_url(values[field]):
            raise ConfigurationError.invalid_url(PROVIDER_SETTINGS[field], values[field])

    return ProviderConfig(**values)
