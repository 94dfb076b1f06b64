"""
Search pagination: request decoding, page/page-size normalization, response encoding.

Pages are contiguous, non-overlapping windows: page N covers items
[(N - 1) * results, N * results). Values <= 0 fall back to the defaults;
there is no upper bound on the page size.
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from registry_api.storage.models import SearchQuery

DEFAULT_PAGE = 1
DEFAULT_RESULTS = 100


class InvalidSearchRequest(ValueError):
    """Search body is not a JSON object with integer page/results."""


class SearchRequest(BaseModel):
    """POST /search body: pagination fields plus any filter keys."""

    model_config = ConfigDict(extra="allow")

    page: StrictInt | None = Field(None, description="1-based page number; <= 0 or absent means 1")
    results: StrictInt | None = Field(None, description="Page size; <= 0 or absent means 100")

    @property
    def filters(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class SearchResponse(BaseModel):
    """POST /search response. total counts the items of this page only, not the whole dataset."""

    results: list[Any]
    page: int
    total: int


def normalize_page(page: int | None) -> int:
    return page if page is not None and page > 0 else DEFAULT_PAGE


def normalize_results(results: int | None) -> int:
    return results if results is not None and results > 0 else DEFAULT_RESULTS


def decode_search_request(body: bytes) -> SearchRequest:
    """Parse the raw body; raises InvalidSearchRequest on malformed or too deeply nested JSON, or bad field types."""
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise InvalidSearchRequest(f"malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidSearchRequest("body must be a JSON object")
    try:
        return SearchRequest.model_validate(data)
    except ValidationError as e:
        raise InvalidSearchRequest(str(e)) from e


def build_query(req: SearchRequest) -> SearchQuery:
    """Normalize pagination and carry filters through to the storage port."""
    return SearchQuery(
        page=normalize_page(req.page),
        results=normalize_results(req.results),
        filters=req.filters,
    )


def encode_search_response(items: list[Any], page: int) -> bytes:
    """Serialize a page of results; raises TypeError/ValueError if an item is not JSON-serializable."""
    resp = SearchResponse(results=list(items), page=page, total=len(items))
    return json.dumps(resp.model_dump(), ensure_ascii=False, allow_nan=False).encode("utf-8")
