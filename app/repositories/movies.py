from __future__ import annotations

"""
Catalog queries: thin, read-only delegations to the store.

Ordering for listings is `popularity DESC` (unknown popularity last), then
`id` so equal popularities still page deterministically.
"""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.movie import Movie


async def list_movies(db: AsyncSession, page: int, limit: int) -> Tuple[List[Movie], int]:
    """Return one offset page of movies plus the total catalog size."""
    offset = (page - 1) * limit
    stmt = (
        select(Movie)
        .order_by(Movie.popularity.desc().nulls_last(), Movie.id)
        .offset(offset)
        .limit(limit)
    )
    items = list((await db.execute(stmt)).scalars().all())
    total = (await db.execute(select(func.count()).select_from(Movie))).scalar_one()
    return items, int(total)


async def get_movie(db: AsyncSession, movie_id: UUID) -> Optional[Movie]:
    return await db.get(Movie, movie_id)


async def movie_exists(db: AsyncSession, movie_id: UUID) -> bool:
    result = await db.execute(select(Movie.id).where(Movie.id == movie_id))
    return result.scalar_one_or_none() is not None


__all__ = ["list_movies", "get_movie", "movie_exists"]
