"""Pytest configuration and fixtures."""

import sqlite3
import sys
from collections.abc import Iterator
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from fastapi.testclient import TestClient

from conferences.app import create_app
from conferences.config import Settings
from conferences.records import Conference
from conferences.search import Fts5SearchIndex
from conferences.services import ConferenceSyncService
from conferences.storage import SqliteConferenceStore


class RecordingSearchIndex:
    """Search index wrapper that records every call it forwards."""

    def __init__(self, inner: Fts5SearchIndex) -> None:
        self.inner = inner
        self.puts: list[Conference] = []
        self.deletes: list[int] = []

    def put(self, conference: Conference) -> None:
        self.puts.append(conference)
        self.inner.put(conference)

    def delete_by_id(self, conference_id: int) -> None:
        self.deletes.append(conference_id)
        self.inner.delete_by_id(conference_id)

    def search(self, query: str) -> Iterator[Conference]:
        return self.inner.search(query)

    def clear(self) -> None:
        self.inner.clear()


class FailingSearchIndex:
    """Search index whose writes always fail."""

    def put(self, conference: Conference) -> None:
        raise sqlite3.OperationalError("database is locked")

    def delete_by_id(self, conference_id: int) -> None:
        raise sqlite3.OperationalError("database is locked")

    def search(self, query: str) -> Iterator[Conference]:
        return iter(())

    def clear(self) -> None:
        pass


@pytest.fixture
def store() -> Iterator[SqliteConferenceStore]:
    """In-memory conference store."""
    conference_store = SqliteConferenceStore(":memory:")
    conference_store.initialize()
    yield conference_store
    conference_store.close()


@pytest.fixture
def search_index() -> Iterator[Fts5SearchIndex]:
    """In-memory FTS5 search index."""
    index = Fts5SearchIndex()
    index.initialize()
    yield index
    index.close()


@pytest.fixture
def recording_index(search_index: Fts5SearchIndex) -> RecordingSearchIndex:
    return RecordingSearchIndex(search_index)


@pytest.fixture
def failing_index() -> FailingSearchIndex:
    return FailingSearchIndex()


@pytest.fixture
def service(
    store: SqliteConferenceStore, recording_index: RecordingSearchIndex
) -> ConferenceSyncService:
    """Sync service over an in-memory store and a recording index."""
    return ConferenceSyncService(store, recording_index)


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        host="127.0.0.1",
        port=8000,
        debug=True,
        app_name="testApp",
        database_path=":memory:",
        search_index_path=":memory:",
    )


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """Create test client with configured app and run its lifespan."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client
