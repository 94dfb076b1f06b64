"""
Application-level exceptions.

Storage implementations raise these; route handlers translate them into
HTTP responses through the response envelope.
"""

from __future__ import annotations


class RegistryError(Exception):
    """Base class for registry errors."""


class NotFoundError(RegistryError):
    """Requested company or metadata key does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(f"{key} not found")
        self.key = key


class StorageError(RegistryError):
    """Storage backend is unreachable or failed to answer a query."""
