from __future__ import annotations

"""
🍿 Reelbase — Genre
===================

Genres keyed by their TMDB id, so the sync job can upsert them directly from
`genre_ids` on each movie. Names come from TMDB's genre list; ids missing from
that list get a `Genre-<id>` placeholder until a later sync fills them in.
"""

from sqlalchemy import CheckConstraint, Column, Integer, String

from app.db.base_class import Base


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, autoincrement=False, doc="TMDB genre id.")
    name = Column(String(80), nullable=False)

    __table_args__ = (
        CheckConstraint("length(trim(name)) > 0", name="name_not_blank"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<Genre id={self.id} name={self.name!r}>"
