"""
Gateway Server

FastAPI application exposing the OAuth2 callback. Any DomainError raised
while serving a request is translated through status.domain_to_http; any
other exception is captured as CaughtPanic first.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .boundary import error_response, log_failure, panic_from
from .config import LOG_LEVEL, SERVER_NAME, SERVER_VERSION
from .errors import DomainError
from .gateway import AuthGateway, create_gateway_from_env
from .logs import configure_logging
from .models import AuthenticatedResponse

# -----------------------------------------------------------------------------
# Application Lifecycle
# -----------------------------------------------------------------------------

gateway: AuthGateway | None = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage gateway lifecycle - startup and shutdown."""
    global gateway
    configure_logging(LOG_LEVEL)
    if gateway is None:
        gateway = create_gateway_from_env()
    yield
    if gateway:
        await gateway.close()
        gateway = None


# -----------------------------------------------------------------------------
# FastAPI Application
# -----------------------------------------------------------------------------

app = FastAPI(
    title=SERVER_NAME,
    description="OAuth2 callback gateway for the build service.",
    version=SERVER_VERSION,
    lifespan=lifespan,
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(Exception)
async def panic_handler(request: Request, exc: Exception) -> JSONResponse:
    panic = panic_from(exc, f"{request.method} {request.url.path}")
    panic.__cause__ = exc
    log_failure(panic)
    return error_response(panic)


def _require_gateway() -> AuthGateway:
    if gateway is None:
        raise HTTPException(status_code=503, detail="Gateway not initialized")
    return gateway


@app.get("/oauth/callback")
async def oauth_callback(code: str) -> AuthenticatedResponse:
    """
    Authorization code callback.

    The provider redirects the user agent here with ``code``; the gateway
    exchanges it and returns the token with the normalized user.
    """
    active = _require_gateway()
    result = await active.authenticate(code)
    return AuthenticatedResponse(
        provider=active.provider_name,
        access_token=result.access_token,
        user=result.user,
    )


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/providers")
async def providers() -> dict[str, Any]:
    """Configured provider plus every provider the registry knows."""
    active = _require_gateway()
    return {
        "configured": active.provider_name,
        "available": active.registry.names(),
    }


if __name__ == "__main__":
    import uvicorn

    from .config import SERVER_HOST, SERVER_PORT, validate_port

    uvicorn.run(app, host=SERVER_HOST, port=validate_port(SERVER_PORT))
