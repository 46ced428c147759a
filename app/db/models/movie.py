from __future__ import annotations

"""
🎬 Reelbase — Movie (catalog entry)
===================================

A film imported from TMDB plus the denormalized rating aggregate.

Aggregate invariant
-------------------
`average_rating` is the arithmetic mean of exactly `rating_count` stored
`Rating.value`s. It is only written by `app.services.rating_service`, inside
the same transaction as the rating row and under a row lock on the movie.
While `rating_count == 0` the stored average is meaningless and is exposed
as `null`.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Float,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base, TimestampMixin, UUIDPKMixin


class Movie(UUIDPKMixin, TimestampMixin, Base):
    __tablename__ = "movies"

    # ── Identity ───────────────────────────────────────────────────────────
    tmdb_id = Column(Integer, nullable=False, unique=True, doc="External TMDB id (sync upsert key).")

    # ── Metadata ───────────────────────────────────────────────────────────
    title = Column(String(512), nullable=False)
    description = Column(Text, nullable=True)
    release_date = Column(Date, nullable=True)
    poster_url = Column(String(2048), nullable=True)
    backdrop_url = Column(String(2048), nullable=True)
    popularity = Column(Float, nullable=True)

    # ── Rating aggregate ───────────────────────────────────────────────────
    rating_count = Column(Integer, nullable=False, default=0, server_default=text("0"))
    average_rating = Column(Float, nullable=False, default=0.0, server_default=text("0"))

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("rating_count >= 0", name="rating_count_nonneg"),
        CheckConstraint(
            "rating_count = 0 OR (average_rating >= 1 AND average_rating <= 5)",
            name="average_rating_range",
        ),
        Index("ix_movies_popularity_id", "popularity", "id"),
    )

    # ── Relationships ──────────────────────────────────────────────────────
    genres = relationship(
        "Genre",
        secondary="movie_genres",
        lazy="selectin",
        viewonly=True,
        order_by="Genre.name",
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Movie id={self.id} tmdb_id={self.tmdb_id} title={self.title!r}>"
