"""
Storage port consumed by the API.

The API only depends on this interface; the query engine behind it (PostgreSQL,
an index, the in-memory backend) is swappable. Implementations raise
NotFoundError for missing keys and any other exception for backend failures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from registry_api.storage.models import SearchQuery

UPDATED_AT_KEY = "updated-at"


class Storage(ABC):
    """Abstract read-only access to the registry dataset."""

    @abstractmethod
    def fetch_by_identifier(self, identifier: str) -> str:
        """
        Return the serialized JSON document for an unmasked CNPJ.

        Raises NotFoundError when no company has this identifier.
        """
        ...

    @abstractmethod
    def fetch_metadata(self, key: str) -> str:
        """Return the raw metadata value for key; raises NotFoundError if absent."""
        ...

    @abstractmethod
    def search(self, query: SearchQuery) -> list[Any]:
        """Return at most query.results items starting at query.offset."""
        ...

    def ping(self) -> None:
        """Raise if the backend is unreachable. Default: always reachable."""
        return None
