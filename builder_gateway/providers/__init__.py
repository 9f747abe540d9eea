"""
Identity Provider Adapters

Each module implements IdentityProvider for one external provider.
Adding a provider is a single-file operation plus one line in
registry.create_default_registry(); the taxonomy and status translation are
untouched.
"""

from .base import IdentityProvider
from .github import GitHubProvider
from .okta import OktaProvider

__all__ = [
    "IdentityProvider",
    "GitHubProvider",
    "OktaProvider",
]
