from __future__ import annotations

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    tmdb_id: int
    title: str
    description: Optional[str] = None
    release_date: Optional[date] = None
    poster_url: Optional[str] = None
    backdrop_url: Optional[str] = None
    popularity: Optional[float] = None
    rating_count: int = 0
    average_rating: Optional[float] = None

    @model_validator(mode="after")
    def _hide_unrated_average(self) -> "MovieOut":
        # The stored average is meaningless until someone has rated.
        if not self.rating_count:
            self.average_rating = None
        return self


class PaginatedMovies(BaseModel):
    items: List[MovieOut]
    page: int
    limit: int
    total: int = Field(..., ge=0)
