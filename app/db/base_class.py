# app/db/base_class.py
from __future__ import annotations

"""
# Reelbase — SQLAlchemy Base & Mixins

SQLAlchemy 2.0 declarative **Base** with:
- Global **naming conventions** (Alembic-friendly)
- Automatic **snake_case `__tablename__`** (models may still set it explicitly)
- Helpful `__repr__` for debugging
- Common mixins:
  - `UUIDPKMixin` — UUID primary key generated client-side
  - `TimestampMixin` — `created_at` / `updated_at` (UTC)

Usage:
    from app.db.base_class import Base, UUIDPKMixin, TimestampMixin

    class Movie(UUIDPKMixin, TimestampMixin, Base):
        __tablename__ = "movies"

Notes:
- Columns use the generic `Uuid` type so the same models run on PostgreSQL
  (native UUID) and SQLite (CHAR(32)).
- Timestamps get a Python-side default as well as a server default, so rows
  written in the same second still order correctly on SQLite.
"""

import re
import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column

# ──────────────────────────────────────────────────────────────────────────────
# 🏷️ Naming conventions (stable constraint names for Alembic)
# ──────────────────────────────────────────────────────────────────────────────

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def _to_snake(name: str) -> str:
    """Convert `CamelCase` / `PascalCase` to `snake_case` for table names."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ──────────────────────────────────────────────────────────────────────────────
# 🧱 Declarative Base
# ──────────────────────────────────────────────────────────────────────────────

class Base(AsyncAttrs, DeclarativeBase):
    """Global declarative base for Reelbase models."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:  # type: ignore[override]
        return _to_snake(cls.__name__)

    def __repr__(self) -> str:  # pragma: no cover
        attrs: list[str] = []
        for key in ("id", "name", "title", "user_id", "movie_id"):
            value = self.__dict__.get(key)
            if value is not None:
                attrs.append(f"{key}={value!r}")
        return f"{self.__class__.__name__}({', '.join(attrs)})"


# ──────────────────────────────────────────────────────────────────────────────
# 🧩 Common mixins
# ──────────────────────────────────────────────────────────────────────────────

class UUIDPKMixin:
    """UUID primary key, generated in Python so it is known before flush."""
    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """
    UTC timestamps.
    - `created_at`: set once at insert
    - `updated_at`: set at insert and refreshed on every ORM update
    """
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


__all__ = [
    "Base",
    "UUIDPKMixin",
    "TimestampMixin",
    "NAMING_CONVENTION",
    "utcnow",
]
