"""Build gateway: failure taxonomy, status translation and OAuth2 sign-in."""

from .codes import WireStatusCode
from .errors import (
    CATEGORIES,
    CaughtPanic,
    ConfigurationError,
    DomainError,
    ObjectStoreFailure,
    PersistenceFailure,
    PoolTimeout,
    ProviderHttpFailure,
    RecordNotFound,
    RemoteServiceFailure,
    SerializationFailure,
    StorageAction,
    TransactionFailure,
    TransactionPhase,
    TransportFailure,
    UnknownKind,
    UnknownValue,
)
from .gateway import AuthGateway, create_gateway_from_env
from .models import (
    AuthenticationResult,
    OAuth2User,
    ProviderConfig,
)
from .providers import GitHubProvider, IdentityProvider, OktaProvider
from .registry import ProviderRegistry, create_default_registry
from .status import (
    WireError,
    domain_to_http,
    domain_to_wire,
    to_wire_error,
    wire_status,
)

__all__ = [
    # Taxonomy
    "DomainError",
    "CATEGORIES",
    "PersistenceFailure",
    "RecordNotFound",
    "PoolTimeout",
    "TransactionFailure",
    "TransactionPhase",
    "ObjectStoreFailure",
    "StorageAction",
    "SerializationFailure",
    "TransportFailure",
    "RemoteServiceFailure",
    "ProviderHttpFailure",
    "CaughtPanic",
    "UnknownValue",
    "UnknownKind",
    "ConfigurationError",
    # Status translation
    "WireStatusCode",
    "WireError",
    "wire_status",
    "domain_to_http",
    "domain_to_wire",
    "to_wire_error",
    # Identity
    "ProviderConfig",
    "OAuth2User",
    "AuthenticationResult",
    "IdentityProvider",
    "OktaProvider",
    "GitHubProvider",
    "ProviderRegistry",
    "create_default_registry",
    # Gateway
    "AuthGateway",
    "create_gateway_from_env",
]
