from __future__ import annotations

"""
Per-request context: the caller's identity plus fresh data loaders.

FastAPI caches dependencies per request, so the identity, the loaders and
the route handler all share the same `AsyncSession`.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import Identity, get_current_identity
from app.db.session import get_async_db
from app.loaders.user_loader import UserLoader


@dataclass
class Loaders:
    users: UserLoader


@dataclass
class RequestContext:
    identity: Optional[Identity]
    loaders: Loaders


async def get_request_context(
    db: AsyncSession = Depends(get_async_db),
    identity: Optional[Identity] = Depends(get_current_identity),
) -> RequestContext:
    return RequestContext(identity=identity, loaders=Loaders(users=UserLoader(db)))


__all__ = ["Loaders", "RequestContext", "get_request_context"]
