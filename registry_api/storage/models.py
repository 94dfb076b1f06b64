"""
Query models handed to the storage port.

No ORM or HTTP coupling so storage backends stay swappable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SearchQuery:
    """Normalized search: pagination window plus free-form filters."""

    page: int
    results: int
    """Page size."""
    filters: dict[str, Any] = field(default_factory=dict)
    """Extra keys from the request body; meaning is owned by the storage backend."""

    @property
    def offset(self) -> int:
        """Index of the first item of this page; page 1 starts at 0."""
        return (self.page - 1) * self.results
