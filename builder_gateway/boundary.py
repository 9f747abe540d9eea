"""
Request Boundary

Where a DomainError is consumed: uncaught faults are turned into CaughtPanic
data, failures are logged once, and the external response is built from the
status translation alone.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi.responses import JSONResponse

from .errors import CaughtPanic, DomainError, ProviderHttpFailure
from .models import ErrorResponse
from .status import domain_to_http

logger = logging.getLogger(__name__)


def panic_from(exc: BaseException, context: str) -> CaughtPanic:
    message = str(exc) or type(exc).__name__
    return CaughtPanic(message, context)


@contextmanager
def capture_panics(context: str) -> Iterator[None]:
    """
    Convert any non-taxonomy exception raised inside the block into CaughtPanic.

    DomainErrors pass through untouched. The original exception stays
    reachable as ``__cause__``.
    """
    try:
        yield
    except DomainError:
        raise
    except Exception as e:
        raise panic_from(e, context) from e


def log_failure(err: DomainError) -> None:
    """Emit the full diagnostic for a failure that is about to leave the gateway."""
    if isinstance(err, ProviderHttpFailure):
        logger.warning(
            "identity provider rejected request: status=%d body=%r",
            err.status,
            err.body,
        )
    elif isinstance(err, CaughtPanic):
        logger.error("%s", err, exc_info=err.__cause__)
    else:
        logger.error("%s [%s]", err, err.failure_category)


def error_body(err: DomainError) -> ErrorResponse:
    return ErrorResponse(
        status=int(domain_to_http(err)),
        category=err.failure_category,
        code=err.wire_code.value if err.wire_code is not None else None,
    )


def error_response(err: DomainError) -> JSONResponse:
    """Build the client-visible response. No internal message text is included."""
    body = error_body(err)
    return JSONResponse(content=body.model_dump(), status_code=body.status)
