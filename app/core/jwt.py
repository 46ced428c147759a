# app/core/jwt.py
from __future__ import annotations

"""
Reelbase — JWT helpers
======================
- `decode_token` with optional issuer/audience enforcement
- Case-insensitive Bearer token extraction that never raises

Notes
-----
- Token *creation* lives in `app.core.security`.
- Standard `exp`/`nbf`/`iat` checks are delegated to python-jose.
"""

from typing import Any, Dict, Optional
import logging

from fastapi import Request
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from app.core.config import settings
from app.core.exceptions import InvalidTokenException
from app.schemas.auth import TokenPayload

logger = logging.getLogger("app.auth")


# ─────────────────────────────────────────────────────────────
# 🔓 Decode JWT
# ─────────────────────────────────────────────────────────────
def decode_token(token: str) -> TokenPayload:
    """Decode and validate a JWT into a `TokenPayload`.

    Security checks
    ---------------
    1) Verify signature and standard claims (exp/nbf/iat)
    2) Enforce issuer/audience when configured
    3) Require `sub`, `role` and `jti`

    Raises
    ------
    InvalidTokenException
        For invalid, expired or structurally malformed tokens.
    """
    issuer = settings.JWT_ISSUER or None
    audience = settings.JWT_AUDIENCE or None
    options: Dict[str, Any] = {"verify_aud": bool(audience)}

    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
            options=options,
            audience=audience,
            issuer=issuer,
        )
    except ExpiredSignatureError:
        logger.info("Token expired.")
        raise InvalidTokenException("Token has expired")
    except JWTError as e:
        logger.warning("JWT decoding failed: %s", e)
        raise InvalidTokenException()

    try:
        return TokenPayload(**claims)
    except ValidationError:
        logger.warning("Token payload is missing required claims.")
        raise InvalidTokenException("Invalid token payload")


# ─────────────────────────────────────────────────────────────
# 📥 Extract Bearer Token from Authorization Header
# ─────────────────────────────────────────────────────────────
def get_bearer_token(request: Request) -> Optional[str]:
    """Return the Bearer token from `Authorization`, or None when absent/malformed."""
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.debug("Ignoring non-Bearer Authorization header.")
        return None

    return parts[1].strip() or None


__all__ = ["decode_token", "get_bearer_token"]
