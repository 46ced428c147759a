from __future__ import annotations

"""
📝 Reelbase — Review
====================

A user's text review of a movie, at most one per (user, movie).

Conventions
-----------
• `content` is stored **trimmed** and is 3..2000 characters long.
• Listing is keyset-paginated on `(created_at DESC, id DESC)`; the composite
  index below serves that ordering per movie.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Text,
    UniqueConstraint,
    Uuid,
    text,
)

from app.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Review(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "reviews"

    # ── Ownership ──────────────────────────────────────────────────────────
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False)

    # ── Body ───────────────────────────────────────────────────────────────
    content = Column(Text, nullable=False)
    is_spoiler = Column(Boolean, nullable=False, default=False, server_default=text("false"))

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        UniqueConstraint("user_id", "movie_id", name="uq_reviews_user_movie"),
        CheckConstraint("length(content) BETWEEN 3 AND 2000", name="content_len"),
        Index("ix_reviews_movie_created_id", "movie_id", "created_at", "id"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Review id={self.id} user={self.user_id} movie={self.movie_id}>"
