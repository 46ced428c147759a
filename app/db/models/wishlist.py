# app/db/models/wishlist.py
from __future__ import annotations

"""
🔖 Reelbase — WishlistItem (user ↔ movie bookmark)
==================================================

Composite PK `(user_id, movie_id)`: no surrogate key and no duplicates, which
is what makes "add to wishlist" idempotent.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Uuid, func

from app.db.base_class import Base, utcnow


class WishlistItem(Base):
    __tablename__ = "wishlist_items"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        Index("ix_wishlist_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<WishlistItem user_id={self.user_id} movie_id={self.movie_id}>"
