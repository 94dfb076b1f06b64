"""
Route handlers: company lookup, updated marker, health probe, search, root redirect.

Each route accepts every method and rejects the wrong ones itself, so 405s
carry the same {"message": ...} body as every other error. Storage failures
are converted into responses here, once, through the envelope.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse, Response
from starlette.concurrency import run_in_threadpool

from registry_api.api_server.envelope import JSON_CONTENT_TYPE, Envelope, get_envelope
from registry_api.api_server.pagination import (
    InvalidSearchRequest,
    build_query,
    decode_search_request,
    encode_search_response,
)
from registry_api.config import Settings
from registry_api.core.exceptions import NotFoundError
from registry_api.core.identifier import format_cnpj, is_valid_cnpj, unmask
from registry_api.logging import get_logger
from registry_api.storage import UPDATED_AT_KEY, Storage

logger = get_logger(__name__)

# Registry snapshots are immutable between publication cycles
CACHE_MAX_AGE_SEC = 24 * 60 * 60
CACHE_CONTROL = f"max-age={CACHE_MAX_AGE_SEC}"

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
READ_METHODS = ("GET", "HEAD")

READ_ONLY_MESSAGE = "This endpoint accepts only GET and HEAD requests."


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def root(
    request: Request,
    envelope: Envelope = Depends(get_envelope),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """Redirect to the API documentation."""
    if request.method not in READ_METHODS:
        return envelope.respond(405, READ_ONLY_MESSAGE)
    return RedirectResponse(settings.docs_url, status_code=302)


def updated(
    request: Request,
    storage: Storage = Depends(get_storage),
    envelope: Envelope = Depends(get_envelope),
) -> Response:
    """Return the date the dataset was extracted, as stored under the updated-at metadata key."""
    if request.method not in READ_METHODS:
        return envelope.respond(405, READ_ONLY_MESSAGE)
    try:
        value = storage.fetch_metadata(UPDATED_AT_KEY)
    except Exception as e:
        return envelope.respond(500, "Could not fetch the update date.", detail=f"fetch_metadata {UPDATED_AT_KEY}: {e!r}")
    if not value:
        return envelope.respond(500, "Could not fetch the update date.", detail=f"empty {UPDATED_AT_KEY} metadata")
    return envelope.respond(200, value)


async def healthz(
    request: Request,
    storage: Storage = Depends(get_storage),
    envelope: Envelope = Depends(get_envelope),
    settings: Settings = Depends(get_app_settings),
) -> Response:
    """
    Liveness probe. Calls Storage.ping() in a worker thread, bounded by
    health_check_timeout_sec; a slow or failing storage answers 503.
    """
    if request.method not in READ_METHODS:
        return envelope.respond(405, READ_ONLY_MESSAGE)
    loop = asyncio.get_running_loop()
    try:
        await asyncio.wait_for(
            loop.run_in_executor(None, storage.ping),
            timeout=settings.health_check_timeout_sec,
        )
    except asyncio.TimeoutError:
        logger.warning("health_check_timeout", timeout_sec=settings.health_check_timeout_sec)
        return envelope.respond(503, "Storage did not answer in time.")
    except Exception as e:
        logger.warning("health_check_failed", error=str(e))
        return envelope.respond(503, "Storage is unreachable.")
    return Response(status_code=200)


async def search(
    request: Request,
    storage: Storage = Depends(get_storage),
    envelope: Envelope = Depends(get_envelope),
) -> Response:
    """
    Paginated search. Body: {"page": int, "results": int, ...filters}.

    Response: {"results": [...], "page": int, "total": int} where total is the
    number of items in this page.
    """
    if request.method != "POST":
        return envelope.respond(405, "This endpoint accepts only POST requests.")

    try:
        req = decode_search_request(await request.body())
    except InvalidSearchRequest as e:
        logger.info("search_bad_request", error=str(e))
        return envelope.respond(
            400,
            "Could not decode the search request: expected a JSON object with integer page and results.",
        )

    query = build_query(req)
    try:
        items: list[Any] = await run_in_threadpool(storage.search, query)
    except Exception as e:
        return envelope.respond(
            500,
            "Could not run the search.",
            detail=f"search page={query.page} results={query.results} offset={query.offset}: {e!r}",
        )

    try:
        body = encode_search_response(items, query.page)
    except (TypeError, ValueError) as e:
        return envelope.respond(500, "Could not serialize the search results.", detail=repr(e))

    logger.debug("search_served", page=query.page, results=query.results, offset=query.offset, total=len(items))
    return Response(content=body, media_type=JSON_CONTENT_TYPE)


def company(
    identifier: str,
    request: Request,
    storage: Storage = Depends(get_storage),
    envelope: Envelope = Depends(get_envelope),
) -> Response:
    """
    Return the stored JSON document for a CNPJ, masked or not
    (33.683.111/0002-80 and 33683111000280 are equivalent).
    """
    if request.method not in READ_METHODS:
        return envelope.respond(405, READ_ONLY_MESSAGE)
    if not is_valid_cnpj(identifier):
        return envelope.respond(400, f"CNPJ {identifier} is invalid.")

    cnpj = unmask(identifier)
    try:
        payload = storage.fetch_by_identifier(cnpj)
    except NotFoundError:
        return envelope.respond(404, f"CNPJ {format_cnpj(cnpj)} not found.")
    except Exception as e:
        return envelope.respond(500, "Could not fetch the company.", detail=f"fetch_by_identifier {cnpj}: {e!r}")

    return Response(
        content=payload,
        media_type=JSON_CONTENT_TYPE,
        headers={"Cache-Control": CACHE_CONTROL},
    )


def build_router() -> APIRouter:
    """
    Bind every path to its handler. The catch-all company route goes last so
    the fixed paths take precedence.
    """
    router = APIRouter()
    for path, handler in (
        ("/", root),
        ("/updated", updated),
        ("/healthz", healthz),
        ("/search", search),
        ("/{identifier:path}", company),
    ):
        router.add_api_route(path, handler, methods=ALL_METHODS, include_in_schema=path != "/")
    return router
