# app/api/v1/routers/auth/signup.py
from __future__ import annotations

"""
Registration API — Reelbase
===========================

POST /auth/register
    Create an account. Returns the public user (201). A taken email yields
    409 `CONFLICT`.
"""

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.limiter import rate_limit
from app.db.session import get_async_db
from app.schemas.auth import RegisterRequest
from app.schemas.user import UserOut
from app.security_headers import set_sensitive_cache
from app.services.auth.signup_service import register_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
)
@rate_limit("10/minute")
async def register(
    request: Request,
    response: Response,
    payload: RegisterRequest = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> UserOut:
    set_sensitive_cache(response)
    user = await register_user(db, payload)
    return UserOut.model_validate(user)


__all__ = ["router", "register"]
