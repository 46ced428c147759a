"""
Signup service
==============

Core implementation for **new user registration**, kept separate from the
API layer.

Key behaviors
-------------
- **Normalized email** (trimmed, lower-cased) and server-side bcrypt hashing.
- New accounts are attached to the `user` role, created on first use.
- **Race-safe** duplicate handling: a fast pre-check, plus IntegrityError
  recovery at commit when two signups for the same email collide.
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ConflictException
from app.core.security import get_password_hash
from app.db.models.user import User
from app.repositories.user import get_or_create_role, get_user_by_email, normalize_email
from app.schemas.auth import RegisterRequest

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


# ─────────────────────────────────────────────────────────────
# 📝 Register a new user
# ─────────────────────────────────────────────────────────────
async def register_user(db: AsyncSession, payload: RegisterRequest) -> User:
    """Create an account and return the persisted `User`.

    Steps
    -----
    1) **Normalize** the email.
    2) **Check duplicates** to short-circuit an already-used email.
    3) **Hash** the password and attach the `user` role.
    4) **Commit**, mapping a lost unique race to `ConflictException`.
    """
    email_norm = normalize_email(payload.email)

    if await get_user_by_email(db, email_norm) is not None:
        raise ConflictException(DUPLICATE_EMAIL_MESSAGE)

    try:
        role = await get_or_create_role(db)
        user = User(
            name=payload.name,
            email=email_norm,
            hashed_password=get_password_hash(payload.password),
            role_id=role.id,
        )
        db.add(user)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.info("Signup lost a unique race for an existing email")
        raise ConflictException(DUPLICATE_EMAIL_MESSAGE)
    except Exception:
        await db.rollback()
        raise

    logger.info("Registered user %s", user.id)
    return user


__all__ = ["register_user", "DUPLICATE_EMAIL_MESSAGE"]
