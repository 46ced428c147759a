# ╔══════════════════════════════════════════════════════════════════════════╗
# ║ 🎬 Reelbase · Public Catalog API                                          ║
# ║                                                                          ║
# ║ Endpoints (anonymous or authenticated):                                  ║
# ║  - GET /movies?page=&limit=                    → Popularity-ordered page  ║
# ║  - GET /movies/{movie_id}                      → Movie detail or null     ║
# ║  - GET /movies/{movie_id}/reviews?cursor=&limit= → Keyset review page     ║
# ╠──────────────────────────────────────────────────────────────────────────╣
# ║ Notes                                                                    
# ║  - Review authors are resolved through the request's batched loader.     
# ║  - `X-Total-Count` accompanies the movie list.                            
# ╚══════════════════════════════════════════════════════════════════════════╝

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import get_async_db
from app.dependencies.context import RequestContext, get_request_context
from app.repositories.movies import get_movie, list_movies
from app.schemas.movies import MovieOut, PaginatedMovies
from app.schemas.reviews import ReviewPage
from app.services.review_service import reviews_by_movie

log = logging.getLogger(__name__)
router = APIRouter(
    tags=["Public Catalog"],
    responses={404: {"description": "Not Found"}, 422: {"description": "Validation Error"}},
)


# ─────────────────────────────────────────────────────────────────────────────
# 📚 GET /movies
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/movies", response_model=PaginatedMovies, summary="List movies by popularity")
async def movies(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=settings.MOVIES_MAX_PAGE_SIZE),
    db: AsyncSession = Depends(get_async_db),
) -> PaginatedMovies:
    items, total = await list_movies(db, page, limit)
    response.headers["X-Total-Count"] = str(total)
    return PaginatedMovies(
        items=[MovieOut.model_validate(m) for m in items],
        page=page,
        limit=limit,
        total=total,
    )


# ─────────────────────────────────────────────────────────────────────────────
# 🎞️ GET /movies/{movie_id}
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/movies/{movie_id}", response_model=Optional[MovieOut], summary="Movie detail")
async def movie(
    movie_id: UUID = Path(...),
    db: AsyncSession = Depends(get_async_db),
) -> Optional[MovieOut]:
    found = await get_movie(db, movie_id)
    return MovieOut.model_validate(found) if found is not None else None


# ─────────────────────────────────────────────────────────────────────────────
# 📝 GET /movies/{movie_id}/reviews
# ─────────────────────────────────────────────────────────────────────────────
@router.get("/movies/{movie_id}/reviews", response_model=ReviewPage, summary="Reviews of a movie (cursor paged)")
async def movie_reviews(
    movie_id: UUID = Path(...),
    cursor: Optional[str] = Query(None, description="`next_cursor` from the previous page"),
    limit: int = Query(settings.REVIEWS_DEFAULT_LIMIT, description="Page size; capped at 50"),
    db: AsyncSession = Depends(get_async_db),
    ctx: RequestContext = Depends(get_request_context),
) -> ReviewPage:
    return await reviews_by_movie(db, ctx.loaders.users, movie_id, cursor=cursor, limit=limit)


__all__ = ["router"]
