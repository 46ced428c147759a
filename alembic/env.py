"""Alembic environment for the Reelbase catalog schema (async engine)."""

import asyncio
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import create_async_engine

# `alembic` runs from the repo root without installing the package
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.core.config import settings
from app.db.base import Base  # registers every catalog model on the metadata

config = context.config
DATABASE_URL = settings.ASYNC_DATABASE_URL

if config.config_ini_section:
    config.set_main_option("sqlalchemy.url", DATABASE_URL)

if config.config_file_name:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def migrate_offline() -> None:
    """Emit the catalog DDL as SQL (`alembic upgrade head --sql`)."""
    _configure(url=DATABASE_URL, literal_binds=True, dialect_opts={"paramstyle": "named"})


async def migrate_online() -> None:
    """Apply revisions over a throwaway asyncpg/aiosqlite engine."""
    engine = create_async_engine(DATABASE_URL, poolclass=pool.NullPool)
    try:
        async with engine.connect() as connection:
            await connection.run_sync(lambda conn: _configure(connection=conn))
    finally:
        await engine.dispose()


if context.is_offline_mode():
    migrate_offline()
else:
    asyncio.run(migrate_online())
