from __future__ import annotations

"""
Rating aggregation
==================

Keeps `Movie.rating_count` / `Movie.average_rating` equal to the count and
arithmetic mean of the movie's stored ratings.

Concurrency
-----------
The movie row is locked (`SELECT ... FOR UPDATE`) before the caller's
existing rating is read, so two raters of the same movie are applied one
after the other on PostgreSQL. The rating row is flushed and the aggregate is
recomputed from the `ratings` table inside that same transaction; a running
float mean would drift past the 1..5 range after enough updates. Any failure
rolls both back.
"""

import logging
from typing import Tuple
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException, ValidationException
from app.db.models.movie import Movie
from app.db.models.rating import Rating

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating_value(value: object) -> int:
    # bool is an int subclass; True must not count as a one-star rating
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationException("Rating must be a whole number", details={"field": "value"})
    if not MIN_RATING <= value <= MAX_RATING:
        raise ValidationException(
            f"Rating must be between {MIN_RATING} and {MAX_RATING}",
            details={"field": "value", "min": MIN_RATING, "max": MAX_RATING},
        )
    return value


# ─────────────────────────────────────────────────────────────
# 🧮 Aggregate from the store
# ─────────────────────────────────────────────────────────────
async def movie_rating_stats(db: AsyncSession, movie_id: UUID) -> Tuple[int, float]:
    """`(count, mean)` of the stored ratings of `movie_id`; `(0, 0.0)` when unrated."""
    count, average = (
        await db.execute(
            select(func.count(Rating.value), func.avg(Rating.value)).where(Rating.movie_id == movie_id)
        )
    ).one()
    return int(count), float(average) if average is not None else 0.0


# ─────────────────────────────────────────────────────────────
# ⭐ Rate a movie
# ─────────────────────────────────────────────────────────────
async def rate_movie(db: AsyncSession, user_id: UUID, movie_id: UUID, value: int) -> bool:
    """Create or update `user_id`'s rating of `movie_id` and refresh the aggregate."""
    value = validate_rating_value(value)

    try:
        locked = (
            select(Movie)
            .where(Movie.id == movie_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        movie = (await db.execute(locked)).scalar_one_or_none()
        if movie is None:
            raise NotFoundException("Movie not found", details={"movie_id": str(movie_id)})

        existing = (
            await db.execute(
                select(Rating).where(Rating.user_id == user_id, Rating.movie_id == movie_id)
            )
        ).scalar_one_or_none()

        if existing is None:
            db.add(Rating(user_id=user_id, movie_id=movie_id, value=value))
        else:
            existing.value = value
        await db.flush()

        count, average = await movie_rating_stats(db, movie_id)
        movie.rating_count = count
        movie.average_rating = average
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(
        "Rated movie %s by user %s: value=%s count=%s avg=%.4f",
        movie_id, user_id, value, count, average,
    )
    return True


__all__ = [
    "validate_rating_value",
    "movie_rating_stats",
    "rate_movie",
    "MIN_RATING",
    "MAX_RATING",
]
