# ╔══════════════════════════════════════════════════════════════════════════╗
# ║ Reelbase · User API (Wishlist, Ratings, Reviews)                          ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║ Endpoints (user-authenticated):                                           ║
# ║  - POST /me/wishlist/{movie_id}   → Add to wishlist (idempotent)          ║
# ║  - POST /me/ratings/{movie_id}    → Rate 1..5 (create or update)          ║
# ║  - PUT  /me/reviews/{movie_id}    → Create or replace own review          ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║ Security & Operational Practices                                          
# ║  - Auth: `require_identity` runs before the handler, so anonymous calls   
# ║    get 401 before any read or write happens.                              
# ║  - Rate limiting per user via `rate_limit`.                               
# ║  - Responses are `Cache-Control: no-store`.                               
# ╚══════════════════════════════════════════════════════════════════════════╝
"""
User-facing mutations. Each returns `true` on success.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Body, Depends, Path, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.limiter import rate_limit
from app.core.security import Identity, require_identity
from app.db.session import get_async_db
from app.schemas.reviews import RatingInput, ReviewInput
from app.security_headers import set_sensitive_cache
from app.services.rating_service import rate_movie
from app.services.review_service import create_or_update_review
from app.services.wishlist_service import add_to_wishlist

logger = logging.getLogger(__name__)

router = APIRouter(tags=["User"])


# ─────────────────────────────────────────────────────────────────────────────
# 🔖 Wishlist
# ─────────────────────────────────────────────────────────────────────────────
@router.post("/wishlist/{movie_id}", response_model=bool, summary="Add a movie to my wishlist")
@rate_limit("60/minute")
async def wishlist_add(
    request: Request,
    response: Response,
    identity: Identity = Depends(require_identity),
    movie_id: UUID = Path(...),
    db: AsyncSession = Depends(get_async_db),
) -> bool:
    set_sensitive_cache(response)
    return await add_to_wishlist(db, identity.user_id, movie_id)


# ─────────────────────────────────────────────────────────────────────────────
# ⭐ Ratings
# ─────────────────────────────────────────────────────────────────────────────
@router.post("/ratings/{movie_id}", response_model=bool, summary="Rate a movie (1..5)")
@rate_limit("60/minute")
async def rating_set(
    request: Request,
    response: Response,
    identity: Identity = Depends(require_identity),
    movie_id: UUID = Path(...),
    payload: RatingInput = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> bool:
    set_sensitive_cache(response)
    return await rate_movie(db, identity.user_id, movie_id, payload.value)


# ─────────────────────────────────────────────────────────────────────────────
# 📝 Reviews
# ─────────────────────────────────────────────────────────────────────────────
@router.put("/reviews/{movie_id}", response_model=bool, summary="Create or update my review")
@rate_limit("30/minute")
async def review_upsert(
    request: Request,
    response: Response,
    identity: Identity = Depends(require_identity),
    movie_id: UUID = Path(...),
    payload: ReviewInput = Body(...),
    db: AsyncSession = Depends(get_async_db),
) -> bool:
    set_sensitive_cache(response)
    return await create_or_update_review(
        db, identity.user_id, movie_id, payload.content, payload.is_spoiler
    )


__all__ = ["router"]
