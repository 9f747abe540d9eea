"""
Gateway Failure Types

Canonical failure taxonomy for the build gateway. Every failure reported by a
collaborator (persistence, connection pool, object storage, decoding,
transport, identity providers, uncaught faults) is wrapped in exactly one of
these categories before it reaches a response or a log line.

The set is closed: CATEGORIES lists every concrete category, and status.py
must carry a translation rule for each of them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

import httpx
from pydantic import ValidationError

from .codes import WireStatusCode


class DomainError(Exception):
    """
    Base class for all gateway failures.

    Instances are immutable once constructed. The wrapped cause is kept on
    ``cause`` so diagnostics never lose the collaborator's own message.
    """

    failure_category: str = "unknown"
    wire_code: WireStatusCode | None = None

    def __init__(self, message: str, *, cause: Any = None) -> None:
        if type(self) is DomainError:
            raise TypeError(
                "DomainError is abstract; raise one of the categories in CATEGORIES"
            )
        super().__init__(message)
        self.message = message
        self.cause = cause
        self._sealed = True

    def __setattr__(self, name: str, value: Any) -> None:
        # Exception machinery still needs __traceback__, __notes__, etc.
        if getattr(self, "_sealed", False) and not name.startswith("__"):
            raise AttributeError(
                f"{type(self).__name__} is immutable; cannot set {name!r}"
            )
        super().__setattr__(name, value)

    def __str__(self) -> str:
        return self.message

    def __reduce__(self) -> tuple[Any, ...]:
        return (_restore, (type(self), dict(self.__dict__)))


def _restore(cls: type[DomainError], state: dict[str, Any]) -> DomainError:
    # Rebuild without re-running __init__; the state is already rendered.
    err = cls.__new__(cls)
    err.args = (state["message"],)
    err.__dict__.update(state)
    return err


def _describe(cause: Any) -> str:
    text = str(cause)
    return text if text else type(cause).__name__


# -----------------------------------------------------------------------------
# Persistence
# -----------------------------------------------------------------------------


class PersistenceFailure(DomainError):
    """
    A read or write against the data store failed.

    ``operation`` names the logical operation in prose, e.g. "creating a new
    job" or "setting group state".
    """

    failure_category = "persistence"

    def __init__(self, operation: str, cause: Any) -> None:
        self.operation = operation
        super().__init__(
            f"Database error {operation}, {_describe(cause)}", cause=cause
        )


class RecordNotFound(DomainError):
    """The data store reported that the requested record does not exist."""

    failure_category = "record_not_found"

    def __init__(self, operation: str, cause: Any) -> None:
        self.operation = operation
        super().__init__(
            f"Database error {operation}, record not found, {_describe(cause)}",
            cause=cause,
        )


class PoolTimeout(DomainError):
    """
    Acquiring a connection from a bounded pool exceeded its timeout.

    ``pool`` names the pool: the data store pool by default, or the shared
    HTTP client pool for provider calls.
    """

    failure_category = "pool_timeout"

    def __init__(self, cause: Any, *, pool: str = "database") -> None:
        self.pool = pool
        super().__init__(
            f"Timeout getting connection from the {pool} pool, {_describe(cause)}",
            cause=cause,
        )


class TransactionPhase(str, Enum):
    START = "start"
    COMMIT = "commit"
    EXECUTE = "execute"


_TRANSACTION_PREFIX: dict[TransactionPhase, str] = {
    TransactionPhase.START: "Failed to start database transaction",
    TransactionPhase.COMMIT: "Failed to commit database transaction",
    TransactionPhase.EXECUTE: "Database transaction error",
}


class TransactionFailure(DomainError):
    failure_category = "transaction"

    def __init__(self, phase: TransactionPhase, cause: Any) -> None:
        self.phase = phase
        super().__init__(
            f"{_TRANSACTION_PREFIX[phase]}, {_describe(cause)}", cause=cause
        )


# -----------------------------------------------------------------------------
# Object storage
# -----------------------------------------------------------------------------


class StorageAction(str, Enum):
    PUT = "put"
    GET = "get"


class ObjectStoreFailure(DomainError):
    """
    Storing or fetching an object (e.g. an archived job log) failed.

    ``resource_id`` is opaque to the gateway; it is only rendered.
    """

    failure_category = "object_store"

    def __init__(self, action: StorageAction, resource_id: Any, cause: Any) -> None:
        self.action = action
        self.resource_id = resource_id
        verb = "archiving" if action is StorageAction.PUT else "retrieval"
        super().__init__(
            f"Log {verb} error for {resource_id}, {_describe(cause)}",
            cause=cause,
        )


# -----------------------------------------------------------------------------
# Decoding and transport
# -----------------------------------------------------------------------------


class SerializationFailure(DomainError):
    """
    A payload could not be decoded into the expected shape.

    Distinct from ProviderHttpFailure: the remote side answered successfully
    but the body was malformed.
    """

    failure_category = "serialization"

    def __init__(self, cause: Any, *, context: str | None = None) -> None:
        self.context = context
        subject = context or "payload"
        super().__init__(f"Unable to decode {subject}, {_describe(cause)}", cause=cause)


class TransportFailure(DomainError):
    """Communication with a remote party failed below the application layer."""

    failure_category = "transport"

    def __init__(self, cause: Any) -> None:
        super().__init__(f"Transport error, {_describe(cause)}", cause=cause)


class RemoteServiceFailure(DomainError):
    """
    Another internal service reported a failure with a wire status code.

    This is the only category that carries an attached WireStatusCode, so its
    external status is derived from the code rather than from the category.
    """

    failure_category = "remote_service"

    def __init__(self, code: WireStatusCode, message: str) -> None:
        self.wire_code = WireStatusCode(code)
        self.detail = message
        super().__init__(f"[{self.wire_code.value}] {message}", cause=message)


# -----------------------------------------------------------------------------
# Identity providers
# -----------------------------------------------------------------------------


class ProviderHttpFailure(DomainError):
    """
    An identity provider answered with a non-2xx status.

    The body is kept for operators, decoded as ``body`` and byte-for-byte as
    ``raw`` (bodies that are not valid UTF-8 lose nothing there). Neither is
    ever forwarded to the external caller.
    """

    failure_category = "provider_http"

    def __init__(self, status: int, body: str, *, raw: bytes | None = None) -> None:
        self.status = status
        self.body = body
        self.raw = body.encode() if raw is None else raw
        super().__init__(
            f"Provider responded with HTTP {status}, {body or '<empty body>'}",
            cause=body,
        )


# -----------------------------------------------------------------------------
# Runtime faults
# -----------------------------------------------------------------------------


class CaughtPanic(DomainError):
    """An uncaught fault captured at the request boundary, kept as data."""

    failure_category = "caught_panic"

    def __init__(self, message: str, context: str) -> None:
        self.panic_message = message
        self.context = context
        super().__init__(f"Caught a panic: {message}. {context}", cause=message)


# -----------------------------------------------------------------------------
# Stale enum values from persistence
# -----------------------------------------------------------------------------


class UnknownKind(str, Enum):
    VCS = "VCS"
    JOB_GROUP = "Group"
    JOB_GROUP_STATE = "Group State"
    JOB_GRAPH_PACKAGE = "Package"
    PROJECT_STATE = "Project State"
    JOB_STATE = "Job State"


class UnknownValue(DomainError):
    """
    A value read from persistence no longer matches a known domain value.
    """

    failure_category = "unknown_value"

    def __init__(self, kind: UnknownKind, value: Any = None) -> None:
        self.kind = kind
        self.value = value
        message = f"Unknown {kind.value}"
        if value is not None:
            message = f"{message} {value!r}"
        super().__init__(message, cause=value)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------


class ConfigurationError(DomainError):
    """
    The gateway is misconfigured and cannot serve the request.

    Raised at startup for bad settings and at request time when the configured
    identity provider is not registered.
    """

    failure_category = "configuration"

    def __init__(self, message: str, *, cause: Any = None) -> None:
        if cause is not None:
            message = f"{message}: {_describe(cause)}"
        super().__init__(message, cause=cause)

    @classmethod
    def bad_port(cls, value: Any) -> ConfigurationError:
        return cls(f"{value} is an invalid port. Valid range 1-65535.")

    @classmethod
    def invalid_url(cls, setting: str, value: Any) -> ConfigurationError:
        return cls(f"Bad URL for {setting}: {value!r}")

    @classmethod
    def missing_setting(cls, setting: str) -> ConfigurationError:
        return cls(f"Missing required setting {setting}")

    @classmethod
    def unknown_provider(cls, name: str, known: list[str]) -> ConfigurationError:
        available = ", ".join(known) or "none"
        return cls(f"Unknown identity provider {name!r} (available: {available})")


CATEGORIES: tuple[type[DomainError], ...] = (
    PersistenceFailure,
    RecordNotFound,
    PoolTimeout,
    TransactionFailure,
    ObjectStoreFailure,
    SerializationFailure,
    TransportFailure,
    RemoteServiceFailure,
    ProviderHttpFailure,
    CaughtPanic,
    UnknownValue,
    ConfigurationError,
)


# -----------------------------------------------------------------------------
# Adapters from collaborator exceptions
# -----------------------------------------------------------------------------


def from_http_error(exc: httpx.HTTPError) -> PoolTimeout | TransportFailure:
    """
    Wrap an httpx error (connect, read, timeout, protocol).

    Waiting too long for a connection from the client pool is a PoolTimeout;
    everything else is a TransportFailure.
    """
    if isinstance(exc, httpx.PoolTimeout):
        return PoolTimeout(exc, pool="HTTP client")
    return TransportFailure(exc)


def from_validation_error(
    exc: ValidationError | ValueError, context: str
) -> SerializationFailure:
    """Wrap a pydantic (or json) decoding error raised while parsing ``context``."""
    return SerializationFailure(exc, context=context)
