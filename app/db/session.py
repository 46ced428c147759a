# app/db/session.py
from __future__ import annotations

"""
Reelbase — Database Engine & Session Dependency

- One async engine/session factory for the app, the sync job and tests.
- PostgreSQL (asyncpg) gets a sized connection pool; SQLite (aiosqlite) is
  used for local runs and tests and keeps SQLAlchemy's default pool.
"""

from typing import Any, AsyncGenerator, Dict
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.core.config import settings

logger = logging.getLogger(__name__)

ASYNC_DATABASE_URL: str = settings.ASYNC_DATABASE_URL

# Pool knobs (ignored for SQLite)
_POOL_PRE_PING = True
_POOL_RECYCLE = 1800
_POOL_TIMEOUT = 30
_POOL_SIZE = 10
_MAX_OVERFLOW = 20


def engine_kwargs(url: str) -> Dict[str, Any]:
    """Return `create_async_engine` options appropriate for the driver in `url`."""
    if url.startswith("sqlite"):
        return {"echo": settings.DB_ECHO}
    return {
        "pool_pre_ping": _POOL_PRE_PING,
        "pool_recycle": _POOL_RECYCLE,
        "pool_size": _POOL_SIZE,
        "max_overflow": _MAX_OVERFLOW,
        "pool_timeout": _POOL_TIMEOUT,
        "echo": settings.DB_ECHO,
    }


# ───────────────────────────────────────────────────────────────
# ⚡ ASYNC ENGINE
# ───────────────────────────────────────────────────────────────

async_engine: AsyncEngine = create_async_engine(ASYNC_DATABASE_URL, **engine_kwargs(ASYNC_DATABASE_URL))

async_session_maker = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that yields one async session per request."""
    async with async_session_maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def db_healthcheck() -> bool:
    """Quick SELECT 1 to verify DB connectivity (used by /readyz)."""
    try:
        async with async_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception:
        logger.exception("DB healthcheck failed")
        return False


__all__ = [
    "async_engine",
    "async_session_maker",
    "engine_kwargs",
    "get_async_db",
    "db_healthcheck",
]
