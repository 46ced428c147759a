from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.role import Role
from app.db.models.user import User

DEFAULT_ROLE = "user"


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == normalize_email(email)))
    return result.scalar_one_or_none()


async def get_or_create_role(db: AsyncSession, name: str = DEFAULT_ROLE) -> Role:
    """Fetch a role by name, adding it to the session when missing (flushed, not committed)."""
    result = await db.execute(select(Role).where(Role.name == name))
    role = result.scalar_one_or_none()
    if role is None:
        role = Role(name=name)
        db.add(role)
        await db.flush()
    return role


__all__ = ["DEFAULT_ROLE", "normalize_email", "get_user_by_email", "get_or_create_role"]
