"""
Response envelope: uniform {"message": ...} bodies and the operational error channel.

Every non-2xx response and every 500 goes through Envelope.respond(), which is
the single place where server errors are reported to operators: each 500
produces exactly one error channel write, carrying the internal detail that
is never sent to the client.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import Request
from fastapi.responses import Response

from registry_api.logging import get_error_logger

NO_MESSAGE_SUPPLIED = "no error message supplied"
JSON_CONTENT_TYPE = "application/json"


class ErrorChannel:
    """Append-only sink for operational errors (structlog on stderr)."""

    def __init__(self, logger: Any = None) -> None:
        self._logger = logger if logger is not None else get_error_logger()

    def write(self, message: str, **fields: Any) -> None:
        self._logger.error("internal_server_error", message=message, **fields)


class Envelope:
    """Builds JSON message responses and mirrors server errors to the error channel."""

    def __init__(self, channel: ErrorChannel | None = None) -> None:
        self.channel = channel if channel is not None else ErrorChannel()

    def _report(self, message: str, detail: str | None) -> None:
        fields: dict[str, Any] = {}
        if detail:
            fields["detail"] = detail
        self.channel.write(message, **fields)

    def respond(self, status: int, message: str = "", detail: str | None = None) -> Response:
        """
        Return a response with status and an optional {"message": message} body.

        An empty message yields a bodyless response. A message that cannot be
        encoded downgrades the response to a bodyless 500. detail is internal
        only and is recorded solely for 500s.
        """
        if not message:
            if status == 500:
                self._report(NO_MESSAGE_SUPPLIED, detail)
            return Response(status_code=status)

        try:
            body = json.dumps({"message": message}, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            self._report(f"Could not wrap message in JSON: {message!r}", detail or str(e))
            return Response(status_code=500)

        if status == 500:
            self._report(message, detail)
        return Response(content=body, status_code=status, media_type=JSON_CONTENT_TYPE)


def get_envelope(request: Request) -> Envelope:
    """Dependency: the app-scoped envelope installed by create_app()."""
    return request.app.state.envelope
