# tests/fixtures/db.py
"""
DB fixtures for tests (async, SQLite via aiosqlite):
- One fresh database file per test (no cross-test leakage)
- NullPool (no lingering connections between tests)
- Function-scoped session shared with the app through `get_async_db`
"""

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.db import base


@pytest.fixture(scope="session", autouse=True)
def anyio_backend():
    return "asyncio"


@pytest.fixture()
async def db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reelbase.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(base.Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Fresh session per test; the app under test uses this same session."""
    async with session_factory() as session:
        yield session


def get_override_get_db(session: AsyncSession):
    """FastAPI dependency override using the provided session."""
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield session
    return _override
