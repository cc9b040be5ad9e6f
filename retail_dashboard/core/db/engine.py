"""
Async database engine configuration.

The dashboard only reads, but it reads several things at once: every
concurrent query gets its own session from ``AsyncSessionLocal``, so the
session factory itself is exposed as a dependency next to the usual
per-request session.
"""

from typing import AsyncGenerator
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from retail_dashboard.core.config import config as settings


def _get_engine_options(database_url: str) -> dict:
    """
    Get engine options based on database type.
    SQLite requires special handling for async and concurrency.
    """
    options = {"echo": False}

    if database_url.startswith("sqlite"):
        # aiosqlite does not pool; in-memory databases must share one connection
        if ":memory:" in database_url:
            options["poolclass"] = StaticPool
            options["connect_args"] = {"check_same_thread": False}
        else:
            options["poolclass"] = NullPool
    elif not settings.is_production:
        options["poolclass"] = NullPool

    return options


def _configure_sqlite_connection(dbapi_connection, connection_record):
    """
    Configure SQLite connection for concurrent readers.

    - WAL mode: readers never block each other or the writer
    - busy_timeout: wait up to 30s for locks instead of failing
    - foreign_keys: enforce referential integrity
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA busy_timeout=30000")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str):
    engine = create_async_engine(database_url, **_get_engine_options(database_url))

    if database_url.startswith("sqlite"):
        # For aiosqlite, pool events are registered on the sync engine
        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            _configure_sqlite_connection(dbapi_connection, connection_record)

    return engine


def build_session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


database_url = settings.database_url

engine = build_engine(database_url)

AsyncSessionLocal = build_session_factory(engine)


async def get_db_util() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency for FastAPI.
    Nothing here writes, so the session is simply closed at the end.
    """
    async with AsyncSessionLocal() as session:
        yield session


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Dependency returning the session factory for fan-out reads."""
    return AsyncSessionLocal


async def check_database_connection(
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> bool:
    """
    Verify database connection is working.
    Used by the health check endpoint.
    """
    try:
        async with session_factory() as session:
            result = await session.execute(text("SELECT 1"))
            return result.scalar() == 1
    except Exception:
        return False
