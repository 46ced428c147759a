from __future__ import annotations

"""
Reelbase — Batched User Loader
==============================

Collapses the per-review "who wrote this?" lookups of one request into a
single query, on top of the DataLoader that ships with graphene.

Semantics
---------
- Every `load()` issued before the event loop regains control joins the same
  batch, resolved by **one** `SELECT ... WHERE id IN (...)` over the distinct ids.
- Results are aligned to the requested ids; unknown ids resolve to `None`.
- Repeated ids share one cached future for the lifetime of the loader.
- A failing batch query rejects every id of that batch and evicts them, so a
  later `load()` retries them.
- Callers receive a shielded view of the cached future. Cancelling one caller
  leaves the cached lookup intact for everyone else.
- If the batch itself is cancelled, its ids are evicted and their waiters are
  cancelled rather than left pending.
- Batches run one at a time on the request's `AsyncSession`.

Lifetime
--------
One instance per inbound request (see `app.dependencies.context`). Never
share a loader between requests: its cache would serve stale users and its
session would be closed.
"""

import asyncio
import logging
from typing import List, Optional, Sequence
from uuid import UUID

from graphene.utils.dataloader import DataLoader
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.user import User
from app.schemas.user import ReviewAuthor

logger = logging.getLogger(__name__)


class UserLoader(DataLoader):
    """Per-request batching + memoizing loader for review authors."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__()
        self._db = db
        self._lock = asyncio.Lock()
        self.batch_count = 0

    def load(self, user_id: UUID) -> "asyncio.Future[Optional[ReviewAuthor]]":
        """Return an awaitable resolving to the author for `user_id` (or None)."""
        cached = self._cache.get(self.get_cache_key(user_id))
        if cached is not None and cached.cancelled():
            self.clear(user_id)
        return asyncio.shield(super().load(user_id))

    async def batch_load_fn(self, keys: Sequence[UUID]) -> List[Optional[ReviewAuthor]]:
        async with self._lock:
            self.batch_count += 1
            try:
                return await self._batch_load(keys)
            except asyncio.CancelledError:
                logger.warning("User batch of %d cancelled", len(keys))
                for key in keys:
                    future = self._cache.get(self.get_cache_key(key))
                    self.clear(key)
                    if future is not None and not future.done():
                        future.cancel()
                raise
            except Exception as exc:
                # DataLoader rejects and evicts the whole batch
                logger.warning("User batch of %d failed: %s", len(keys), exc)
                raise

    async def _batch_load(self, keys: Sequence[UUID]) -> List[Optional[ReviewAuthor]]:
        result = await self._db.execute(
            select(User.id, User.name, User.avatar_url).where(User.id.in_(keys))
        )
        by_id = {
            row.id: ReviewAuthor(id=row.id, name=row.name, avatar_url=row.avatar_url)
            for row in result
        }
        return [by_id.get(key) for key in keys]


__all__ = ["UserLoader"]
