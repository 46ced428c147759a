# tests/utils/factory.py
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import get_password_hash
from app.db.models.movie import Movie
from app.db.models.review import Review
from app.db.models.user import User
from app.repositories.user import get_or_create_role

DEFAULT_PASSWORD = "secret123"
_DEFAULT_HASH = get_password_hash(DEFAULT_PASSWORD)


async def create_user(
    session: AsyncSession,
    *,
    name: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
    avatar_url: Optional[str] = None,
) -> User:
    role = await get_or_create_role(session)
    user = User(
        name=name or f"User {uuid4().hex[:6]}",
        email=(email or f"user_{uuid4().hex[:10]}@example.com").lower(),
        hashed_password=get_password_hash(password) if password else _DEFAULT_HASH,
        avatar_url=avatar_url,
        role_id=role.id,
        role=role,
    )
    session.add(user)
    await session.commit()
    return user


async def create_movie(
    session: AsyncSession,
    *,
    title: Optional[str] = None,
    tmdb_id: Optional[int] = None,
    popularity: Optional[float] = 10.0,
    release_date: Optional[date] = None,
) -> Movie:
    movie = Movie(
        tmdb_id=tmdb_id if tmdb_id is not None else int(uuid4().int % 10_000_000),
        title=title or f"Movie {uuid4().hex[:6]}",
        description="A film.",
        release_date=release_date,
        popularity=popularity,
    )
    session.add(movie)
    await session.commit()
    return movie


async def create_review(
    session: AsyncSession,
    *,
    user_id: UUID,
    movie_id: UUID,
    content: str = "Pretty good.",
    created_at: Optional[datetime] = None,
) -> Review:
    when = created_at or datetime.now(timezone.utc)
    review = Review(
        user_id=user_id,
        movie_id=movie_id,
        content=content,
        created_at=when,
        updated_at=when,
    )
    session.add(review)
    await session.commit()
    return review


def minutes_ago(n: int) -> datetime:
    return datetime.now(timezone.utc) - timedelta(minutes=n)
