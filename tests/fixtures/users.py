from __future__ import annotations

from typing import Awaitable, Callable

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.movie import Movie
from app.db.models.user import User
from tests.utils.factory import create_movie, create_user


# ──────────────────────────────────────────────────────────────
# 🧪 Factories
# ──────────────────────────────────────────────────────────────
@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _create(**kwargs) -> User:
        return await create_user(db_session, **kwargs)

    return _create


@pytest.fixture
def make_movie(db_session: AsyncSession) -> Callable[..., Awaitable[Movie]]:
    async def _create(**kwargs) -> Movie:
        return await create_movie(db_session, **kwargs)

    return _create


@pytest.fixture
async def user(make_user) -> User:
    return await make_user(name="Ada", email="ada@example.com")


@pytest.fixture
async def movie(make_movie) -> Movie:
    return await make_movie(title="Arrival", popularity=50.0)
