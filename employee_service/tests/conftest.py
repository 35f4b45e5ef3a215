# tests/conftest.py
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from employee_service.bootstrap import initialize_schema
from employee_service.database import create_session_factory, get_async_session
from employee_service.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def engine():
    # One shared in-memory connection so every session sees the same tables.
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def seeded_engine(engine):
    assert await initialize_schema(engine) is True
    return engine


@pytest_asyncio.fixture
async def session(seeded_engine):
    async with create_session_factory(seeded_engine)() as db:
        yield db


@pytest_asyncio.fixture
async def client(seeded_engine):
    session_factory = create_session_factory(seeded_engine)

    async def override_get_async_session():
        async with session_factory() as db:
            yield db

    app.dependency_overrides[get_async_session] = override_get_async_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def database_env(monkeypatch, tmp_path):
    """Point the application at a fresh file-backed SQLite store."""
    for name in ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    url = f"sqlite+aiosqlite:///{tmp_path / 'employees.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url
