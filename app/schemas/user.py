from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class ReviewAuthor(BaseModel):
    """Public projection of a user attached to a review."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    avatar_url: Optional[str] = None
