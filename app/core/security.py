# app/core/security.py
from __future__ import annotations

"""
Reelbase — Authentication & Security Helpers
============================================
- bcrypt password hashing (passlib)
- JWT access-token creation (iss/aud/iat/nbf/jti), decoding lives in `app.core.jwt`
- Identity resolution that **degrades to anonymous** instead of failing
- `require_auth` enforcement for protected operations

Verification and enforcement are deliberately split: `get_current_identity`
only answers "who is calling, if anyone", and protected routes depend on
`require_identity`, which raises `UnauthenticatedException` for anonymous
callers before any handler code runs.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import UUID, uuid4
import logging

from fastapi import Depends, Request
from jose import jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import InvalidTokenException, UnauthenticatedException
from app.core.jwt import decode_token, get_bearer_token
from app.db.models.role import Role
from app.db.models.user import User
from app.db.session import get_async_db

# ───────────────────────────────────────────────
# 🔐 Security Constants and Setup
# ───────────────────────────────────────────────
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
logger = logging.getLogger("app.security")


@dataclass(frozen=True)
class Identity:
    """Verified caller: the user id plus the role name read from the store."""

    user_id: UUID
    role: str


# ───────────────────────────────────────────────
# 🔐 Password Hashing Utilities
# ───────────────────────────────────────────────
def get_password_hash(password: str) -> str:
    """Return a salted hash using Passlib's bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Constant-time verify of a plaintext password against a stored hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Unknown/corrupt hash format
        logger.warning("Stored password hash could not be parsed")
        return False


# ───────────────────────────────────────────────
# 🪪 JWT — Access Token Generation
# ───────────────────────────────────────────────
def create_access_token(
    user_id: UUID,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token carrying the user id (`sub`) and role name."""
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))

    payload: Dict[str, Any] = {
        "sub": str(user_id),
        "role": role,
        "exp": expire,
        "iat": now,
        "nbf": now,
        "jti": str(uuid4()),
    }
    if settings.JWT_ISSUER:
        payload["iss"] = settings.JWT_ISSUER
    if settings.JWT_AUDIENCE:
        payload["aud"] = settings.JWT_AUDIENCE

    return jwt.encode(payload, settings.JWT_SECRET_KEY.get_secret_value(), algorithm=settings.JWT_ALGORITHM)


# ───────────────────────────────────────────────
# 👤 Dependency — Resolve the caller (never raises)
# ───────────────────────────────────────────────
async def get_current_identity(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
) -> Optional[Identity]:
    """Return the caller's `Identity`, or `None` for anonymous requests.

    Missing header, wrong scheme, bad/expired token and unknown users all
    resolve to `None`; the request continues either way.
    """
    token = get_bearer_token(request)
    if token is None:
        return None

    try:
        payload = decode_token(token)
        user_id = UUID(payload.sub)
    except InvalidTokenException as e:
        logger.info("Treating request as anonymous: %s", e.message)
        return None
    except ValueError:
        logger.info("Treating request as anonymous: malformed subject")
        return None

    result = await db.execute(
        select(User.id, Role.name).join(Role, User.role_id == Role.id).where(User.id == user_id)
    )
    row = result.first()
    if row is None:
        logger.info("Treating request as anonymous: user %s no longer exists", user_id)
        return None

    request.state.user_id = row[0]
    return Identity(user_id=row[0], role=row[1])


# ───────────────────────────────────────────────
# 🚧 Enforcement
# ───────────────────────────────────────────────
def require_auth(identity: Optional[Identity]) -> Identity:
    """Return `identity` or raise `UnauthenticatedException` when anonymous."""
    if identity is None:
        raise UnauthenticatedException("Authentication required")
    return identity


async def require_identity(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """FastAPI dependency form of `require_auth`."""
    return require_auth(identity)


__all__ = [
    "Identity",
    "pwd_context",
    "get_password_hash",
    "verify_password",
    "create_access_token",
    "get_current_identity",
    "require_auth",
    "require_identity",
]
