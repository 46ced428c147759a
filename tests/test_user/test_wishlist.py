from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.db.models.wishlist import WishlistItem


@pytest.mark.anyio
async def test_wishlist_add_is_idempotent(async_client: AsyncClient, db_session, movie, user, auth_headers):
    url = f"/api/v1/me/wishlist/{movie.id}"

    for _ in range(2):
        resp = await async_client.post(url, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() is True
        assert resp.headers["cache-control"] == "no-store"

    rows = (await db_session.execute(select(WishlistItem))).scalars().all()
    assert [(r.user_id, r.movie_id) for r in rows] == [(user.id, movie.id)]


@pytest.mark.anyio
async def test_wishlists_are_per_user(async_client: AsyncClient, db_session, make_user, movie, auth_headers_for):
    a, b = await make_user(), await make_user()
    for u in (a, b):
        await async_client.post(f"/api/v1/me/wishlist/{movie.id}", headers=auth_headers_for(u))

    rows = (await db_session.execute(select(WishlistItem))).scalars().all()
    assert {r.user_id for r in rows} == {a.id, b.id}


@pytest.mark.anyio
async def test_wishlist_unknown_movie_is_not_found(async_client: AsyncClient, db_session, auth_headers):
    resp = await async_client.post(f"/api/v1/me/wishlist/{uuid4()}", headers=auth_headers)
    assert resp.status_code == 404
    assert (await db_session.execute(select(WishlistItem))).scalars().all() == []
