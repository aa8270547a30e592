"""
AP Exam Sync: Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── db_file:          Path of a JSON document in a temp directory (not created)
    ├── test_settings:    Settings pointing at db_file
    ├── store:            DocumentStore on db_file
    ├── app:              FastAPI app built from test_settings
    ├── test_client:      HTTPX AsyncClient routed into the app
    ├── registered_user:  A user created through POST /api/auth/signup
    └── mirror:           LocalMirror in a temp directory
"""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Set BEFORE any apsync import: the module-level app must not touch ./db.json
os.environ["DB_FILE"] = os.path.join(tempfile.mkdtemp(prefix="apsync_test_"), "db.json")
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["APSYNC_CACHE_DIR"] = tempfile.mkdtemp(prefix="apsync_cache_")


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def db_file(tmp_path):
    """Location of the document for one test; the file does not exist yet."""
    return tmp_path / "data" / "db.json"


@pytest.fixture
def test_settings(db_file):
    from apsync.config import Settings

    return Settings(db_file=str(db_file), log_level="WARNING")


@pytest.fixture
def store(db_file):
    from apsync.store import DocumentStore

    return DocumentStore(str(db_file))


@pytest.fixture
def app(test_settings):
    from apsync.main import create_app

    return create_app(test_settings)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient wired straight into the app.

    ASGITransport does not run the lifespan; the store seeds in memory on
    first load when the file is missing, so behaviour is the same.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def registered_user(test_client):
    """A user signed up through the API: {id, email, name}."""
    response = await test_client.post(
        "/api/auth/signup",
        json={"email": "author@example.com", "password": "secret", "name": "Author"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.fixture
def mirror(tmp_path):
    from apsync.client.cache import LocalMirror

    return LocalMirror(tmp_path / "mirror")
