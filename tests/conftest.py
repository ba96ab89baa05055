"""Shared pytest fixtures.

- db_engine: in-memory SQLite async engine with the five analytics tables
- db_session: session joined to an outer transaction that is never committed
- seeded_session: db_session loaded with the demo workforce dataset
- client: httpx AsyncClient whose requests read through db_session
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

import src.db.tables  # noqa: F401  registers the mappings on Base.metadata
from scripts.seed import seed_demo_data
from src.db.session import Base, get_async_session

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_engine():
    eng = create_async_engine(TEST_DATABASE_URL, poolclass=StaticPool)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Session whose commits and rollbacks only touch a SAVEPOINT.

    The outer transaction is rolled back at teardown, so nothing written in
    one test is visible in the next.
    """
    async with db_engine.connect() as conn:
        outer = await conn.begin()
        session = AsyncSession(
            bind=conn,
            expire_on_commit=False,
            join_transaction_mode="create_savepoint",
        )
        try:
            yield session
        finally:
            await session.close()
            await outer.rollback()


@pytest.fixture
async def seeded_session(db_session):
    await seed_demo_data(db_session)
    return db_session


@pytest.fixture
async def client(db_session):
    """AsyncClient with get_async_session overridden to yield db_session."""
    from src.api.main import app

    async def _session_override():
        yield db_session

    app.dependency_overrides[get_async_session] = _session_override
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
