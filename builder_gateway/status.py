"""
Status Translation

Pure, total mappings from the failure taxonomy to the two status channels:

- wire_status:     WireStatusCode -> HTTPStatus
- domain_to_http:  DomainError    -> HTTPStatus (external clients)
- domain_to_wire:  DomainError    -> WireStatusCode (other internal services)

Every table is keyed by a closed domain. A missing entry is a defect caught
by tests/test_status.py, not something papered over with a default here.
"""

from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType
from typing import Mapping, TypeVar

from pydantic import BaseModel, ConfigDict

from .codes import WireStatusCode
from .errors import (
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
    TransactionFailure,
    TransportFailure,
    UnknownValue,
)

W = WireStatusCode
RuleT = TypeVar("RuleT")

WIRE_STATUS_TABLE: Mapping[WireStatusCode, HTTPStatus] = MappingProxyType({
    W.TIMEOUT: HTTPStatus.GATEWAY_TIMEOUT,
    W.REMOTE_REJECTED: HTTPStatus.NOT_ACCEPTABLE,
    W.ENTITY_NOT_FOUND: HTTPStatus.NOT_FOUND,
    W.ENTITY_CONFLICT: HTTPStatus.CONFLICT,
    W.ACCESS_DENIED: HTTPStatus.UNAUTHORIZED,
    W.SESSION_EXPIRED: HTTPStatus.UNAUTHORIZED,
    W.BAD_REMOTE_REPLY: HTTPStatus.BAD_GATEWAY,
    W.SECRET_KEY_FETCH: HTTPStatus.BAD_GATEWAY,
    W.VCS_CLONE: HTTPStatus.BAD_GATEWAY,
    W.NO_SHARD: HTTPStatus.SERVICE_UNAVAILABLE,
    W.SOCK: HTTPStatus.SERVICE_UNAVAILABLE,
    W.REMOTE_UNAVAILABLE: HTTPStatus.SERVICE_UNAVAILABLE,
    W.BAD_TOKEN: HTTPStatus.FORBIDDEN,
    W.GROUP_NOT_COMPLETE: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.BUILD: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.EXPORT: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.POST_PROCESSOR: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.SECRET_KEY_IMPORT: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.INVALID_INTEGRATIONS: HTTPStatus.UNPROCESSABLE_ENTITY,
    W.PARTIAL_JOB_GROUP_PROMOTE: HTTPStatus.PARTIAL_CONTENT,
    W.BUG: HTTPStatus.INTERNAL_SERVER_ERROR,
    W.SYS: HTTPStatus.INTERNAL_SERVER_ERROR,
    W.DATA_STORE: HTTPStatus.INTERNAL_SERVER_ERROR,
    W.WORKSPACE_SETUP: HTTPStatus.INTERNAL_SERVER_ERROR,
    W.REG_CONFLICT: HTTPStatus.INTERNAL_SERVER_ERROR,
    W.REG_NOT_FOUND: HTTPStatus.INTERNAL_SERVER_ERROR,
})

# Status for categories that carry no wire code. RemoteServiceFailure is listed
# for completeness; its attached code always wins in domain_to_http.
CATEGORY_STATUS_TABLE: Mapping[type[DomainError], HTTPStatus] = MappingProxyType({
    PersistenceFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    RecordNotFound: HTTPStatus.NOT_FOUND,
    PoolTimeout: HTTPStatus.INTERNAL_SERVER_ERROR,
    TransactionFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    ObjectStoreFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    SerializationFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    TransportFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    RemoteServiceFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    ProviderHttpFailure: HTTPStatus.INTERNAL_SERVER_ERROR,
    CaughtPanic: HTTPStatus.INTERNAL_SERVER_ERROR,
    UnknownValue: HTTPStatus.INTERNAL_SERVER_ERROR,
    ConfigurationError: HTTPStatus.INTERNAL_SERVER_ERROR,
})

# Used when a failure has to be handed to another internal service.
CATEGORY_WIRE_TABLE: Mapping[type[DomainError], WireStatusCode] = MappingProxyType({
    PersistenceFailure: W.DATA_STORE,
    RecordNotFound: W.ENTITY_NOT_FOUND,
    PoolTimeout: W.DATA_STORE,
    TransactionFailure: W.DATA_STORE,
    ObjectStoreFailure: W.DATA_STORE,
    SerializationFailure: W.BAD_REMOTE_REPLY,
    TransportFailure: W.SOCK,
    RemoteServiceFailure: W.BUG,
    ProviderHttpFailure: W.REMOTE_REJECTED,
    CaughtPanic: W.BUG,
    UnknownValue: W.DATA_STORE,
    ConfigurationError: W.SYS,
})


def _lookup(table: Mapping[type[DomainError], RuleT], err: DomainError) -> RuleT:
    for klass in type(err).__mro__:
        if klass in table:
            return table[klass]
    raise LookupError(f"No translation rule for failure category {type(err).__name__}")


def wire_status(code: WireStatusCode) -> HTTPStatus:
    """Map an inter-service status code to the external HTTP status."""
    return WIRE_STATUS_TABLE[WireStatusCode(code)]


def domain_to_http(err: DomainError) -> HTTPStatus:
    """
    Map a taxonomy error to the HTTP status returned to external clients.

    An attached wire code takes precedence; otherwise the category decides
    (404 for RecordNotFound, 500 for the rest). The error's message never
    influences the result.
    """
    if err.wire_code is not None:
        return wire_status(err.wire_code)
    return _lookup(CATEGORY_STATUS_TABLE, err)


def domain_to_wire(err: DomainError) -> WireStatusCode:
    """Map a taxonomy error to the code propagated to other internal services."""
    if err.wire_code is not None:
        return err.wire_code
    return _lookup(CATEGORY_WIRE_TABLE, err)


class WireError(BaseModel):
    """Failure payload sent to another internal service."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    code: WireStatusCode
    msg: str


def to_wire_error(err: DomainError) -> WireError:
    """Render a taxonomy error for inter-service propagation."""
    return WireError(code=domain_to_wire(err), msg=str(err))
