# app/db/models/__init__.py
"""
Reelbase — ORM model package

Importing this package registers every table on `Base.metadata`.
"""

from app.db.base_class import Base

# ───────────────────────────────────────────────────────────────
# Accounts
# ───────────────────────────────────────────────────────────────
from .role import Role
from .user import User

# ───────────────────────────────────────────────────────────────
# Catalog
# ───────────────────────────────────────────────────────────────
from .movie import Movie
from .genre import Genre
from .movie_genre import MovieGenre

# ───────────────────────────────────────────────────────────────
# Engagement
# ───────────────────────────────────────────────────────────────
from .rating import Rating
from .review import Review
from .wishlist import WishlistItem

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
