"""
In-memory storage backend.

Keeps companies as JSON documents keyed by unmasked CNPJ. Used by tests and
for running the API locally without a database. Read-only after construction,
so concurrent handlers can share one instance.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

from registry_api.core.exceptions import NotFoundError
from registry_api.core.identifier import unmask
from registry_api.logging import get_logger
from registry_api.storage.models import SearchQuery
from registry_api.storage.port import Storage

logger = get_logger(__name__)


class MemoryStorage(Storage):
    """Dict-backed Storage; documents are serialized once at construction."""

    def __init__(
        self,
        companies: Mapping[str, dict[str, Any]] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        self._documents: dict[str, dict[str, Any]] = {}
        self._serialized: dict[str, str] = {}
        for identifier, doc in (companies or {}).items():
            key = unmask(identifier)
            self._documents[key] = doc
            self._serialized[key] = json.dumps(doc, ensure_ascii=False)
        self._metadata = dict(metadata or {})
        logger.debug("memory_storage_loaded", companies=len(self._documents), metadata_keys=len(self._metadata))

    def fetch_by_identifier(self, identifier: str) -> str:
        try:
            return self._serialized[unmask(identifier)]
        except KeyError:
            raise NotFoundError(identifier) from None

    def fetch_metadata(self, key: str) -> str:
        try:
            return self._metadata[key]
        except KeyError:
            raise NotFoundError(key) from None

    def search(self, query: SearchQuery) -> list[Any]:
        """Equality match on top-level fields for every filter, ordered by identifier."""
        matches = [
            self._documents[key]
            for key in sorted(self._documents)
            if all(self._documents[key].get(f) == v for f, v in query.filters.items())
        ]
        return matches[query.offset : query.offset + query.results]
