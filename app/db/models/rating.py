from __future__ import annotations

"""
⭐ Reelbase — Rating
====================

One integer rating (1..5) per (user, movie). Re-rating updates the row in
place; `Movie.rating_count` / `Movie.average_rating` are kept in step by
`app.services.rating_service`.
"""

from sqlalchemy import CheckConstraint, Column, ForeignKey, Index, SmallInteger, Uuid

from app.db.base_class import Base, TimestampMixin


class Rating(TimestampMixin, Base):
    __tablename__ = "ratings"

    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    value = Column(SmallInteger, nullable=False, doc="Whole stars, 1..5.")

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("value BETWEEN 1 AND 5", name="value_range"),
        Index("ix_ratings_movie", "movie_id"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Rating user={self.user_id} movie={self.movie_id} value={self.value}>"
