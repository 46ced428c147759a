# app/services/auth/login_service.py
from __future__ import annotations

"""
Login service — Reelbase
========================

- **Email + password login** returning a signed access token and the user.
- **Neutral errors**: an unknown email and a wrong password raise the same
  `InvalidCredentialsException`, so responses cannot be used to enumerate
  accounts.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidCredentialsException
from app.core.security import create_access_token, get_password_hash, verify_password
from app.repositories.user import get_user_by_email
from app.schemas.auth import AuthPayload, LoginRequest
from app.schemas.user import UserOut

logger = logging.getLogger(__name__)

# Verified against on unknown emails so both failure paths cost one bcrypt check.
_DUMMY_HASH = get_password_hash("reelbase-timing-equalizer")


async def login_user(db: AsyncSession, payload: LoginRequest) -> AuthPayload:
    """Authenticate by email and password and issue an access token."""
    user = await get_user_by_email(db, payload.email)

    if user is None:
        verify_password(payload.password, _DUMMY_HASH)
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsException()

    if not verify_password(payload.password, user.hashed_password):
        logger.info("Login failed: bad password for user %s", user.id)
        raise InvalidCredentialsException()

    # Awaitable access so an unloaded `role` is fetched without implicit IO.
    role = await user.awaitable_attrs.role
    token = create_access_token(user.id, role.name)
    logger.info("Login succeeded for user %s", user.id)
    return AuthPayload(token=token, user=UserOut.model_validate(user))


__all__ = ["login_user"]
