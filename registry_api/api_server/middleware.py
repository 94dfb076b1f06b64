"""
HTTP middleware: host-based access control.

AllowedHostMiddleware wraps the whole application, so every route (and
unknown paths) is checked before any handler runs.
"""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from registry_api.api_server.envelope import Envelope
from registry_api.logging import get_logger

logger = get_logger(__name__)


class AllowedHostMiddleware(BaseHTTPMiddleware):
    """Reject requests whose Host header differs from allowed_host (403). Empty allowed_host disables the check."""

    def __init__(self, app: ASGIApp, allowed_host: str, envelope: Envelope) -> None:
        super().__init__(app)
        self.allowed_host = allowed_host
        self.envelope = envelope

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.allowed_host:
            host = request.headers.get("host", "")
            if host != self.allowed_host:
                logger.warning("host_not_allowed", host=host, path=request.url.path)
                return self.envelope.respond(403, f"Host {host} not allowed.")
        return await call_next(request)
