"""
🧭✨ Reelbase • API v1 Router Aggregator
=======================================

Exports both the **combined `router`** (ready to include) and each **individual
sub-router** so callers can mount them as needed.

Layout
------
- 🎬 Public catalog (no extra prefix): `/movies`, `/movies/{id}`, `/movies/{id}/reviews`
- 🔐 Authentication: `/auth/register`, `/auth/login`
- 👤 User mutations under `/me`: wishlist, ratings, reviews

Quick usage
-----------
    from app.api.v1.routers import router as v1_router
    app.include_router(v1_router, prefix="/api/v1")

Security notes
--------------
- 🔐 This layer is a pure aggregator; **auth & rate limits live in child routers**.
"""

from fastapi import APIRouter

from .auth.login import router as login_router
from .auth.signup import router as signup_router
from .public.movies import router as movies_router
from .user.me import router as me_router


# ─────────────────────────────────────────────────────────────────────────────
# 🧩 Factory: build a combined v1 router with stable path layout
# ─────────────────────────────────────────────────────────────────────────────
def build_v1_router() -> APIRouter:
    """Compose the API v1 surface into a single `APIRouter`."""
    r = APIRouter()

    r.include_router(movies_router)
    r.include_router(signup_router)
    r.include_router(login_router)
    r.include_router(me_router, prefix="/me")

    return r


router = build_v1_router()

__all__ = [
    "build_v1_router",
    "router",
    "movies_router",
    "signup_router",
    "login_router",
    "me_router",
]
