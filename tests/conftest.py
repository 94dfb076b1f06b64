"""
Pytest fixtures for Registry API tests. Builds the app around an in-memory
storage and an error channel that records writes instead of printing them.
"""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from registry_api.api_server.envelope import Envelope, ErrorChannel
from registry_api.api_server.server import create_app
from registry_api.config import Settings
from registry_api.core.exceptions import StorageError
from registry_api.storage import MemoryStorage

# Valid CNPJs (check digits verified)
SERPRO = "33683111000280"
OKBR = "19131243000197"

COMPANIES: dict[str, dict[str, Any]] = {
    SERPRO: {"cnpj": SERPRO, "razao_social": "SERVICO FEDERAL DE PROCESSAMENTO DE DADOS (SERPRO)", "uf": "DF"},
    OKBR: {"cnpj": OKBR, "razao_social": "OPEN KNOWLEDGE BRASIL", "uf": "SP"},
}


class RecordingChannel(ErrorChannel):
    """Error channel that keeps every write in memory."""

    def __init__(self) -> None:
        self.writes: list[dict[str, Any]] = []

    def write(self, message: str, **fields: Any) -> None:
        self.writes.append({"message": message, **fields})


@pytest.fixture
def channel() -> RecordingChannel:
    return RecordingChannel()


@pytest.fixture
def envelope(channel) -> Envelope:
    return Envelope(channel)


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage(companies=COMPANIES, metadata={"updated-at": "2026-09-14"})


@pytest.fixture
def make_client(envelope):
    """Factory: TestClient around any storage, with optional settings overrides."""

    def _make(storage, raise_server_exceptions: bool = True, **overrides: Any) -> TestClient:
        settings = Settings(**overrides)
        return TestClient(
            create_app(storage, settings=settings, envelope=envelope),
            raise_server_exceptions=raise_server_exceptions,
        )

    return _make


@pytest.fixture
def client(make_client, storage) -> TestClient:
    return make_client(storage)


class FailingStorage(MemoryStorage):
    """Storage whose every call fails like an unreachable database; counts calls."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def _fail(self):
        self.calls += 1
        raise StorageError("connection refused: db:5432")

    def fetch_by_identifier(self, identifier: str) -> str:
        self._fail()

    def fetch_metadata(self, key: str) -> str:
        self._fail()

    def search(self, query):
        self._fail()

    def ping(self) -> None:
        self._fail()


class SpyStorage(MemoryStorage):
    """MemoryStorage that records every query it receives."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.queries: list[Any] = []
        self.lookups: list[str] = []

    def fetch_by_identifier(self, identifier: str) -> str:
        self.lookups.append(identifier)
        return super().fetch_by_identifier(identifier)

    def search(self, query):
        self.queries.append(query)
        return super().search(query)


@pytest.fixture
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture
def spy_storage() -> SpyStorage:
    return SpyStorage(companies=COMPANIES, metadata={"updated-at": "2026-09-14"})
