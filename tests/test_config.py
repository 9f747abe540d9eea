"""Tests for environment-driven configuration."""

import logging

import pytest

from builder_gateway.config import PROVIDER_SETTINGS, load_provider_config, validate_port
from builder_gateway.errors import ConfigurationError
from builder_gateway.logs import configure_logging


VALID_ENV = {
    "OAUTH_CLIENT_ID": "builder-web",
    "OAUTH_CLIENT_SECRET": "s3cr3t",
    "OAUTH_REDIRECT_URL": "https://bldr.example.com/oauth/callback",
    "OAUTH_TOKEN_URL": "https://idp.example.com/oauth2/v1/token",
    "OAUTH_USERINFO_URL": "https://idp.example.com/oauth2/v1/userinfo",
}


class TestLoadProviderConfig:
    def test_loads_all_settings(self):
        config = load_provider_config(VALID_ENV)
        assert config.client_id == "builder-web"
        assert config.client_secret.get_secret_value() == "s3cr3t"
        assert config.token_url.endswith("/token")

    def test_secret_not_in_repr(self):
        config = load_provider_config(VALID_ENV)
        assert "s3cr3t" not in repr(config)

    @pytest.mark.parametrize("variable", list(PROVIDER_SETTINGS.values()))
    def test_missing_setting(self, variable):
        env = {k: v for k, v in VALID_ENV.items() if k != variable}
        with pytest.raises(ConfigurationError) as exc_info:
            load_provider_config(env)
        assert variable in str(exc_info.value)

    def test_invalid_url(self):
        env = dict(VALID_ENV, OAUTH_TOKEN_URL="idp.example.com/token")
        with pytest.raises(ConfigurationError) as exc_info:
            load_provider_config(env)
        assert "OAUTH_TOKEN_URL" in str(exc_info.value)


class TestValidatePort:
    @pytest.mark.parametrize("value", ["1", 80, "65535"])
    def test_valid(self, value):
        assert validate_port(value) == int(value)

    @pytest.mark.parametrize("value", ["0", "65536", "-1", "http", ""])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_port(value)
        assert "Valid range 1-65535" in str(exc_info.value)


class TestConfigureLogging:
    def test_sets_root_level(self):
        root = logging.getLogger()
        previous = root.level
        try:
            configure_logging("debug")
            assert root.level == logging.DEBUG
            configure_logging("not-a-level")
            assert root.level == logging.INFO
        finally:
            root.setLevel(previous)
