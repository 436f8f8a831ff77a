"""Root conftest: test settings, stores and the HTTP client.

Invariants:
    - Settings are pinned through the environment before any project import
    - Every test gets a fresh database: in-memory SQLite by default, a file
      under tmp_path for tests that need several concurrent connections
    - The HTTP client talks to the real app with only the entity store
      dependency overridden
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE__URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECURITY__SECRET_KEY", "test-secret-key-not-for-production")

import pytest
from httpx import ASGITransport, AsyncClient

from giving_server.infrastructure.database import build_engine, build_session_factory, create_tables
from giving_server.infrastructure.database.repositories import SqlEntityStore
from giving_server.interfaces.http.deps import get_entity_store
from giving_server.main import app

from tests.fakes import MemoryEntityStore


@pytest.fixture
def memory_store():
    return MemoryEntityStore()


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def file_engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'ledger.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_store(test_engine):
    return SqlEntityStore(build_session_factory(test_engine))


@pytest.fixture
def file_store(file_engine):
    return SqlEntityStore(build_session_factory(file_engine))


@pytest.fixture
async def client(sql_store):
    """FastAPI test client backed by a fresh SQL entity store."""
    app.dependency_overrides[get_entity_store] = lambda: sql_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
