from __future__ import annotations

"""
🎬 Reelbase — Movie ⇄ Genre association
=======================================

Mapped link row so the sync job can check and insert pairs explicitly.
Each `(movie_id, genre_id)` pair is unique.
"""

from sqlalchemy import Column, ForeignKey, Index, Integer, UniqueConstraint, Uuid

from app.db.base_class import Base, UUIDPKMixin


class MovieGenre(UUIDPKMixin, Base):
    __tablename__ = "movie_genres"

    movie_id = Column(Uuid, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False)
    genre_id = Column(Integer, ForeignKey("genres.id", ondelete="CASCADE"), nullable=False)

    __table_args__ = (
        UniqueConstraint("movie_id", "genre_id", name="uq_movie_genres_movie_genre"),
        Index("ix_movie_genres_genre", "genre_id"),
    )
