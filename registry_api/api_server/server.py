"""
FastAPI server: read-only API over a registry Storage.

create_app() wires routes, the allowed-host guard and exception handlers
around a Storage implementation; serve() runs it with uvicorn.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

import registry_api
from registry_api.api_server.envelope import Envelope
from registry_api.api_server.middleware import AllowedHostMiddleware
from registry_api.api_server.routes import build_router
from registry_api.config import Settings, get_settings
from registry_api.config.settings import normalize_port
from registry_api.logging import get_logger
from registry_api.storage import Storage

logger = get_logger(__name__)


def create_app(
    storage: Storage,
    settings: Settings | None = None,
    envelope: Envelope | None = None,
) -> FastAPI:
    """Build the ASGI app. settings default to the environment; envelope to one writing to stderr."""
    settings = settings if settings is not None else get_settings()
    envelope = envelope if envelope is not None else Envelope()

    app = FastAPI(
        title="Registry API",
        description="Read-only API over the company registry (CNPJ lookup, search, update date).",
        version=registry_api.__version__,
        docs_url=None,
        redoc_url=None,
    )
    app.state.storage = storage
    app.state.settings = settings
    app.state.envelope = envelope

    app.include_router(build_router())
    app.add_middleware(AllowedHostMiddleware, allowed_host=settings.allowed_host, envelope=envelope)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
        return envelope.respond(exc.status_code, str(exc.detail or ""))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> Response:
        return envelope.respond(400, "Invalid request parameters.")

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
        return envelope.respond(
            500,
            "Internal server error.",
            detail=f"{request.method} {request.url.path}: {exc!r}",
        )

    logger.info("api_created", allowed_host=settings.allowed_host or None, storage=type(storage).__name__)
    return app


def serve(storage: Storage, port: str | int | None = None, settings: Settings | None = None) -> None:
    """Run the API with uvicorn until interrupted. port overrides settings.port ("8000" or ":8000")."""
    import uvicorn

    settings = settings if settings is not None else get_settings()
    bind_port = normalize_port(port) if port is not None else settings.port
    app = create_app(storage, settings)
    logger.info("api_serving", url=f"http://{settings.api_host}:{bind_port}")
    uvicorn.run(app, host=settings.api_host, port=bind_port)
