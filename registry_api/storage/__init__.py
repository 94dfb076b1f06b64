"""
Storage layer: the port the API consumes plus an in-memory backend.

Production deployments plug their own Storage implementation into
registry_api.api_server.server.create_app().
"""

from registry_api.storage.memory import MemoryStorage
from registry_api.storage.models import SearchQuery
from registry_api.storage.port import UPDATED_AT_KEY, Storage

__all__ = [
    "MemoryStorage",
    "SearchQuery",
    "Storage",
    "UPDATED_AT_KEY",
]
