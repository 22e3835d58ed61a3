"""
NoteCache Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (temp cache dirs, stores, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── cache_dir: Empty temporary note cache directory
    ├── memory_store: NoteStore over an InMemoryBackend
    ├── file_store: NoteStore over a FileSystemBackend in cache_dir
    ├── test_settings: Settings pointing at cache_dir
    └── test_client: HTTPX AsyncClient bound to a fresh app
"""

import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Override settings for testing BEFORE any app imports
os.environ["NOTECACHE_LOG_LEVEL"] = "WARNING"

from notecache.config import Settings  # noqa: E402
from notecache.main import create_app  # noqa: E402
from notecache.services.file_storage import FileSystemBackend  # noqa: E402
from notecache.services.memory_storage import InMemoryBackend  # noqa: E402
from notecache.services.note_service import NoteStore  # noqa: E402


@pytest.fixture
def cache_dir(tmp_path):
    """
    Provides an empty note cache directory.

    Uses pytest's tmp_path fixture (automatically cleaned up).
    """
    directory = tmp_path / "cache"
    directory.mkdir()
    return directory


@pytest.fixture
def memory_store():
    """NoteStore with no file system behind it."""
    return NoteStore(InMemoryBackend())


@pytest.fixture
def file_store(cache_dir):
    """NoteStore writing real files into cache_dir."""
    return NoteStore(FileSystemBackend(str(cache_dir)))


@pytest.fixture
def test_settings(cache_dir):
    return Settings(host="127.0.0.1", port=8000, cache=str(cache_dir), log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(test_settings):
    """
    Provides an async HTTP test client for endpoint testing.

    What:    HTTPX AsyncClient configured to talk to a fresh app whose cache
             is the per-test cache_dir.
    How:     Uses ASGITransport to route requests directly to the app.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/notes")
            assert response.status_code == 200
    """
    app = create_app(test_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
