# app/db/base.py
"""
Reelbase — SQLAlchemy Base registry
===================================

Import all ORM models so their tables are registered on `Base.metadata`.
Alembic's `env.py` and the test fixtures import `Base` from here.

Tip: Keep this file import-only; no runtime logic.
"""

from app.db.base_class import Base
from app.db.models import (  # noqa: F401
    Genre,
    Movie,
    MovieGenre,
    Rating,
    Review,
    Role,
    User,
    WishlistItem,
)

__all__ = [
    "Base",
    "Role",
    "User",
    "Movie",
    "Genre",
    "MovieGenre",
    "Rating",
    "Review",
    "WishlistItem",
]
