from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import ReviewAuthor


class RatingInput(BaseModel):
    value: int = Field(..., strict=True, description="Whole stars, 1 to 5")


class ReviewInput(BaseModel):
    content: str = Field(..., description="Review text; trimmed before length checks")
    is_spoiler: Optional[bool] = None


class ReviewItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    content: str
    is_spoiler: bool
    created_at: datetime
    updated_at: datetime
    user: ReviewAuthor


class ReviewPage(BaseModel):
    items: List[ReviewItem]
    next_cursor: Optional[str] = None
    has_next_page: bool = False
