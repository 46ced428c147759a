# app/api/v1/routers/auth/login.py
from __future__ import annotations

"""
Authentication API — Reelbase
=============================

POST /auth/login
    Email + password sign-in. Returns `{token, user}`; the token is a
    Bearer JWT valid for `ACCESS_TOKEN_EXPIRE_DAYS`.

Security & DX
-------------
- **Route rate limit** (`5/minute` per client).
- **Sensitive cache headers** on the token-issuing response (no-store).
- Neutral errors: unknown email and wrong password are indistinguishable.

Notes
-----
- We return the Pydantic model directly so headers set on `response` are
  preserved by FastAPI.
"""

from fastapi import APIRouter, Body, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.limiter import rate_limit
from app.db.session import get_async_db
from app.schemas.auth import AuthPayload, LoginRequest
from app.security_headers import set_sensitive_cache
from app.services.auth.login_service import login_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


# ──────────────────────────────────────────────────────────────
# 🔐 POST /auth/login — Email + Password
# ──────────────────────────────────────────────────────────────
@router.post("/login", response_model=AuthPayload, summary="Email + password login")
@rate_limit("5/minute")
async def login(
    request: Request,
    response: Response,
    payload: LoginRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> AuthPayload:
    """Authenticate with email/password and issue an access token."""
    # [Step 0] Cache hardening
    set_sensitive_cache(response)

    # [Step 1] Delegate to login service
    return await login_user(db, payload)


__all__ = ["router", "login"]
