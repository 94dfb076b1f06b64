"""
Tests for page/page-size normalization and the offset window.
"""

from __future__ import annotations

import pytest

from registry_api.api_server.pagination import (
    DEFAULT_PAGE,
    DEFAULT_RESULTS,
    InvalidSearchRequest,
    build_query,
    decode_search_request,
    normalize_page,
    normalize_results,
)


@pytest.mark.parametrize("page", [None, 0, -1, -1000])
def test_non_positive_page_becomes_default(page):
    assert normalize_page(page) == DEFAULT_PAGE == 1


@pytest.mark.parametrize("page", [1, 2, 57, 10**9])
def test_positive_page_kept_and_idempotent(page):
    assert normalize_page(page) == page
    assert normalize_page(normalize_page(page)) == page


@pytest.mark.parametrize("results", [None, 0, -5])
def test_non_positive_results_becomes_default(results):
    assert normalize_results(results) == DEFAULT_RESULTS == 100


def test_no_upper_bound_on_results():
    assert normalize_results(1_000_000) == 1_000_000


@pytest.mark.parametrize(
    "page,results,offset",
    [(1, 100, 0), (2, 100, 100), (3, 50, 100), (1, 1, 0), (10, 7, 63)],
)
def test_offset(page, results, offset):
    query = build_query(decode_search_request(f'{{"page": {page}, "results": {results}}}'.encode()))
    assert query.offset == offset


def test_windows_do_not_overlap():
    ends = []
    for page in range(1, 6):
        q = build_query(decode_search_request(f'{{"page": {page}, "results": 20}}'.encode()))
        if ends:
            assert q.offset == ends[-1]
        ends.append(q.offset + q.results)


def test_extra_keys_become_filters():
    req = decode_search_request(b'{"page": 2, "uf": "SP", "cnae": [6201501]}')
    assert req.page == 2
    assert req.results is None
    assert req.filters == {"uf": "SP", "cnae": [6201501]}
    assert build_query(req).filters == {"uf": "SP", "cnae": [6201501]}


@pytest.mark.parametrize(
    "body",
    [b"{", b"null", b'"page"', b'{"page": "1"}', b"\xff\xfe", pytest.param(b"[" * 200_000 + b"]" * 200_000, id="deeply-nested")],
)
def test_decode_rejects(body):
    with pytest.raises(InvalidSearchRequest):
        decode_search_request(body)
