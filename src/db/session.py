"""Async database access for the analytics tables.

``engine`` and ``async_session_factory`` are built once from settings.
Request handlers get a session through the ``get_async_session``
dependency; the read path never commits.
"""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from src.config.settings import ASYNC_DRIVER_SCHEME, LogLevel, get_settings


class Base(DeclarativeBase):
    """Declarative base shared by the table mappings in src.db.tables."""


def _connect_args(database_url: str) -> dict:
    # Supabase's transaction pooler cannot hold asyncpg prepared statements.
    if database_url.startswith(ASYNC_DRIVER_SCHEME):
        return {"statement_cache_size": 0}
    return {}


_settings = get_settings()

engine = create_async_engine(
    _settings.DATABASE_URL,
    echo=_settings.LOG_LEVEL == LogLevel.DEBUG,
    pool_pre_ping=True,
    connect_args=_connect_args(_settings.DATABASE_URL),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield one session per request, rolled back when the request ends."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
