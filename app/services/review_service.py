from __future__ import annotations

"""
Reviews: keyset pagination per movie and the per-user upsert.

Pagination
----------
Order is `created_at DESC, id DESC`; `id` breaks ties between reviews written
in the same instant, so pages never overlap or skip rows. A page fetches
`take + 1` rows strictly after the cursor review and uses the extra row only
to decide `has_next_page`.

A cursor that cannot be parsed, whose review no longer exists, or whose
review belongs to a different movie yields an empty final page rather than
an error.
"""

import asyncio
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import NotFoundException, ValidationException
from app.db.models.review import Review
from app.loaders.user_loader import UserLoader
from app.repositories.movies import movie_exists
from app.schemas.reviews import ReviewItem, ReviewPage

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
# 📄 Listing
# ─────────────────────────────────────────────────────────────
def _page_size(limit: int) -> int:
    if limit < 1:
        raise ValidationException("limit must be at least 1", details={"field": "limit"})
    return min(limit, settings.REVIEWS_MAX_LIMIT)


def _parse_cursor(cursor: str) -> Optional[UUID]:
    try:
        return UUID(cursor)
    except (TypeError, ValueError):
        return None


async def fetch_review_rows(
    db: AsyncSession,
    movie_id: UUID,
    cursor: Optional[str] = None,
    limit: int = settings.REVIEWS_DEFAULT_LIMIT,
) -> Tuple[List[Review], Optional[str], bool]:
    """Return `(rows, next_cursor, has_next_page)` for one page of a movie's reviews."""
    take = _page_size(limit)
    stmt = select(Review).where(Review.movie_id == movie_id)

    if cursor:
        anchor_id = _parse_cursor(cursor)
        anchor = None
        if anchor_id is not None:
            anchor = (
                await db.execute(
                    select(Review.id, Review.created_at).where(
                        Review.id == anchor_id, Review.movie_id == movie_id
                    )
                )
            ).first()
        if anchor is None:
            logger.info("Unknown review cursor for movie %s; returning empty page", movie_id)
            return [], None, False
        stmt = stmt.where(
            or_(
                Review.created_at < anchor.created_at,
                and_(Review.created_at == anchor.created_at, Review.id < anchor.id),
            )
        )

    stmt = stmt.order_by(Review.created_at.desc(), Review.id.desc()).limit(take + 1)
    rows = list((await db.execute(stmt)).scalars().all())

    has_next_page = len(rows) > take
    rows = rows[:take]
    next_cursor = str(rows[-1].id) if has_next_page else None
    return rows, next_cursor, has_next_page


async def reviews_by_movie(
    db: AsyncSession,
    loader: UserLoader,
    movie_id: UUID,
    cursor: Optional[str] = None,
    limit: int = settings.REVIEWS_DEFAULT_LIMIT,
) -> ReviewPage:
    """One page of reviews with authors resolved through the request's loader."""
    rows, next_cursor, has_next_page = await fetch_review_rows(db, movie_id, cursor, limit)

    authors = await asyncio.gather(*(loader.load(row.user_id) for row in rows))
    items: List[ReviewItem] = []
    for row, author in zip(rows, authors):
        if author is None:
            raise NotFoundException("User not found", details={"user_id": str(row.user_id)})
        items.append(
            ReviewItem(
                id=row.id,
                content=row.content,
                is_spoiler=row.is_spoiler,
                created_at=row.created_at,
                updated_at=row.updated_at,
                user=author,
            )
        )
    return ReviewPage(items=items, next_cursor=next_cursor, has_next_page=has_next_page)


# ─────────────────────────────────────────────────────────────
# ✍️ Create or update
# ─────────────────────────────────────────────────────────────
def normalize_review_content(content: str) -> str:
    trimmed = (content or "").strip()
    if len(trimmed) < settings.REVIEW_MIN_LENGTH:
        raise ValidationException("Review too short", details={"min_length": settings.REVIEW_MIN_LENGTH})
    if len(trimmed) > settings.REVIEW_MAX_LENGTH:
        raise ValidationException("Review too long", details={"max_length": settings.REVIEW_MAX_LENGTH})
    return trimmed


async def _find_review(db: AsyncSession, user_id: UUID, movie_id: UUID) -> Optional[Review]:
    result = await db.execute(
        select(Review).where(Review.user_id == user_id, Review.movie_id == movie_id)
    )
    return result.scalar_one_or_none()


async def create_or_update_review(
    db: AsyncSession,
    user_id: UUID,
    movie_id: UUID,
    content: str,
    is_spoiler: Optional[bool] = None,
) -> bool:
    """Upsert the caller's single review of a movie, replacing content and spoiler flag."""
    trimmed = normalize_review_content(content)
    spoiler = bool(is_spoiler) if is_spoiler is not None else False

    if not await movie_exists(db, movie_id):
        raise NotFoundException("Movie not found", details={"movie_id": str(movie_id)})

    try:
        review = await _find_review(db, user_id, movie_id)
        if review is None:
            db.add(Review(user_id=user_id, movie_id=movie_id, content=trimmed, is_spoiler=spoiler))
        else:
            review.content = trimmed
            review.is_spoiler = spoiler
        await db.commit()
    except IntegrityError as exc:
        # Lost the insert race on (user_id, movie_id): apply as an update instead.
        await db.rollback()
        logger.info("Review insert raced for user %s movie %s; updating", user_id, movie_id)
        try:
            review = await _find_review(db, user_id, movie_id)
            if review is None:
                raise exc
            review.content = trimmed
            review.is_spoiler = spoiler
            await db.commit()
        except Exception:
            await db.rollback()
            raise
    except Exception:
        await db.rollback()
        raise
    return True


__all__ = [
    "fetch_review_rows",
    "reviews_by_movie",
    "normalize_review_content",
    "create_or_update_review",
]
