from __future__ import annotations

"""
TMDB API client (httpx, async).

Only the two endpoints the catalog sync needs:
- `GET /movie/popular`   → `get_popular_movies(page)`
- `GET /genre/movie/list` → `get_movie_genres()`

Authentication uses the v3 `api_key` query parameter. Tests inject an
`httpx.MockTransport` through the `transport` argument.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from app.core.config import settings

logger = logging.getLogger(__name__)


class TMDBError(RuntimeError):
    """TMDB answered with a non-2xx status or an unreadable body."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TMDBConfigurationError(TMDBError):
    """No API key configured."""


class TMDBMovie(BaseModel):
    id: int
    title: str
    overview: Optional[str] = None
    release_date: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    genre_ids: List[int] = Field(default_factory=list)
    popularity: Optional[float] = None


class TMDBClient:
    """Thin async wrapper; use as `async with TMDBClient() as tmdb: ...`."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        language: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if api_key is None and settings.TMDB_API_KEY is not None:
            api_key = settings.TMDB_API_KEY.get_secret_value()
        if not api_key:
            raise TMDBConfigurationError("TMDB_API_KEY missing in environment variables")

        self._api_key = api_key
        self._language = language or settings.TMDB_LANGUAGE
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.TMDB_BASE_URL).rstrip("/"),
            timeout=timeout or settings.TMDB_TIMEOUT_SECONDS,
            headers={"accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "TMDBClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, **params: Any) -> Dict[str, Any]:
        query = {"api_key": self._api_key, "language": self._language, **params}
        try:
            response = await self._client.get(path, params=query)
        except httpx.HTTPError as e:
            raise TMDBError(f"TMDB request to {path} failed: {e}") from e

        if response.status_code != 200:
            logger.warning("TMDB %s returned %s", path, response.status_code)
            raise TMDBError(f"TMDB {path} returned {response.status_code}", status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise TMDBError(f"TMDB {path} returned invalid JSON") from e

    async def get_popular_movies(self, page: int = 1) -> List[TMDBMovie]:
        data = await self._get("/movie/popular", page=page)
        return [TMDBMovie.model_validate(item) for item in data.get("results", [])]

    async def get_movie_genres(self) -> Dict[int, str]:
        data = await self._get("/genre/movie/list")
        return {int(g["id"]): str(g["name"]) for g in data.get("genres", [])}


__all__ = ["TMDBClient", "TMDBMovie", "TMDBError", "TMDBConfigurationError"]
