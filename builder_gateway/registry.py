"""
Identity Provider Registry

The only place that knows provider names. The mapping is frozen after
construction; build a new registry to change the set of providers.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from .errors import ConfigurationError
from .providers import GitHubProvider, IdentityProvider, OktaProvider


class ProviderRegistry:
    """Read-only mapping of provider name to adapter."""

    def __init__(self, providers: Iterable[IdentityProvider] = ()) -> None:
        table: dict[str, IdentityProvider] = {}
        for provider in providers:
            if not provider.name:
                raise ConfigurationError(
                    f"{type(provider).__name__} does not declare a provider name"
                )
            if provider.name in table:
                raise ConfigurationError(
                    f"Identity provider {provider.name!r} registered twice"
                )
            table[provider.name] = provider
        self.providers: Mapping[str, IdentityProvider] = MappingProxyType(table)

    def get(self, name: str) -> IdentityProvider:
        try:
            return self.providers[name]
        except KeyError:
            raise ConfigurationError.unknown_provider(name, self.names()) from None

    def names(self) -> list[str]:
        return sorted(self.providers)

    def __contains__(self, name: object) -> bool:
        return name in self.providers


def create_default_registry() -> ProviderRegistry:
    """Registry with every shipped adapter."""
    return ProviderRegistry([OktaProvider(), GitHubProvider()])
