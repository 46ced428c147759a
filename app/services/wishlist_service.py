from __future__ import annotations

"""
Wishlist: idempotent "add movie to my wishlist".

The composite primary key `(user_id, movie_id)` guarantees at most one row;
a repeated add, including one that loses an insert race, reports success.
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundException
from app.db.models.wishlist import WishlistItem
from app.repositories.movies import movie_exists

logger = logging.getLogger(__name__)


async def add_to_wishlist(db: AsyncSession, user_id: UUID, movie_id: UUID) -> bool:
    if not await movie_exists(db, movie_id):
        raise NotFoundException("Movie not found", details={"movie_id": str(movie_id)})

    existing = (
        await db.execute(
            select(WishlistItem.movie_id).where(
                WishlistItem.user_id == user_id, WishlistItem.movie_id == movie_id
            )
        )
    ).scalar_one_or_none()
    if existing is not None:
        return True

    try:
        db.add(WishlistItem(user_id=user_id, movie_id=movie_id))
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Wishlist insert raced for user %s movie %s; already present", user_id, movie_id)
    except Exception:
        await db.rollback()
        raise
    return True


__all__ = ["add_to_wishlist"]
