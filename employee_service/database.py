# database.py
import os
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from dotenv import load_dotenv

load_dotenv()

REQUIRED_DB_VARS = ("DB_HOST", "DB_PORT", "DB_NAME", "DB_USER", "DB_PASSWORD")


def get_database_url() -> str | URL:
    """Resolve the store URL from the environment.

    DATABASE_URL wins when set. Otherwise every DB_* credential variable must be
    present; there are no built-in defaults for them.
    """
    database_url = os.getenv("DATABASE_URL")
    if database_url:
        return database_url

    missing = [name for name in REQUIRED_DB_VARS if not os.getenv(name)]
    if missing:
        raise ValueError(
            f"Database environment variables are not set: {', '.join(missing)}"
        )

    return URL.create(
        "postgresql+asyncpg",
        username=os.environ["DB_USER"],
        password=os.environ["DB_PASSWORD"],
        host=os.environ["DB_HOST"],
        port=int(os.environ["DB_PORT"]),
        database=os.environ["DB_NAME"],
    )


def create_engine(url: str | URL | None = None) -> AsyncEngine:
    """Create the process-wide async engine; its queue pool is the connection pool."""
    url = make_url(url if url is not None else get_database_url())
    pool_options = {}
    # SQLite picks its own pool class; sizing only applies to server databases.
    if url.get_backend_name() != "sqlite":
        pool_options = {
            "pool_size": int(os.getenv("DB_POOL_SIZE", "10")),
            "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "0")),
            "pool_timeout": float(os.getenv("DB_POOL_TIMEOUT", "30")),
        }
    return create_async_engine(
        url,
        echo=os.getenv("DB_ECHO", "").lower() in ("1", "true", "yes"),
        **pool_options,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency to get an async session on the shared pool."""
    async with request.app.state.session_factory() as session:
        yield session
