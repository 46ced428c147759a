from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.utils.factory import create_review


async def _seed_reviews(db_session, make_user, movie, n: int):
    """n reviews by n distinct authors, newest first in the returned list."""
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    reviews = []
    for i in range(n):
        author = await make_user(name=f"Critic {i:02d}")
        reviews.append(
            await create_review(
                db_session,
                user_id=author.id,
                movie_id=movie.id,
                content=f"Review number {i}",
                created_at=base + timedelta(minutes=i),
            )
        )
    return list(reversed(reviews))


@pytest.mark.anyio
async def test_twelve_reviews_page_as_ten_then_two(async_client: AsyncClient, db_session, make_user, movie):
    expected = await _seed_reviews(db_session, make_user, movie, 12)
    url = f"/api/v1/movies/{movie.id}/reviews"

    first = (await async_client.get(url)).json()
    assert len(first["items"]) == 10
    assert first["has_next_page"] is True
    assert first["next_cursor"] == first["items"][-1]["id"]

    second = (await async_client.get(url, params={"cursor": first["next_cursor"]})).json()
    assert len(second["items"]) == 2
    assert second["has_next_page"] is False
    assert second["next_cursor"] is None

    seen = [r["id"] for r in first["items"] + second["items"]]
    assert seen == [str(r.id) for r in expected]
    assert len(set(seen)) == 12


@pytest.mark.anyio
async def test_review_items_carry_author(async_client: AsyncClient, db_session, make_user, movie):
    author = await make_user(name="Pauline", avatar_url="https://img.example.com/p.png")
    await create_review(db_session, user_id=author.id, movie_id=movie.id, content="Stunning score.")

    item = (await async_client.get(f"/api/v1/movies/{movie.id}/reviews")).json()["items"][0]
    assert item["content"] == "Stunning score."
    assert item["is_spoiler"] is False
    assert item["user"] == {"id": str(author.id), "name": "Pauline", "avatar_url": "https://img.example.com/p.png"}


@pytest.mark.anyio
async def test_limit_is_capped_at_fifty(async_client: AsyncClient, db_session, make_user, movie):
    await _seed_reviews(db_session, make_user, movie, 52)

    page = (await async_client.get(f"/api/v1/movies/{movie.id}/reviews", params={"limit": 500})).json()
    assert len(page["items"]) == 50
    assert page["has_next_page"] is True


@pytest.mark.anyio
async def test_ties_on_created_at_are_broken_by_id(async_client: AsyncClient, db_session, make_user, movie):
    same = datetime(2026, 2, 2, tzinfo=timezone.utc)
    ids = []
    for i in range(5):
        author = await make_user()
        r = await create_review(db_session, user_id=author.id, movie_id=movie.id, content=f"tie {i}", created_at=same)
        ids.append(str(r.id))

    url = f"/api/v1/movies/{movie.id}/reviews"
    collected, cursor = [], None
    while True:
        params = {"limit": 2}
        if cursor:
            params["cursor"] = cursor
        page = (await async_client.get(url, params=params)).json()
        collected += [r["id"] for r in page["items"]]
        if not page["has_next_page"]:
            break
        cursor = page["next_cursor"]

    assert sorted(collected) == sorted(ids)
    assert len(collected) == 5


@pytest.mark.anyio
async def test_unusable_cursors_give_an_empty_page(async_client: AsyncClient, db_session, make_user, make_movie, movie):
    await _seed_reviews(db_session, make_user, movie, 3)
    other = await make_movie(title="Other")
    foreign = (await _seed_reviews(db_session, make_user, other, 1))[0]

    url = f"/api/v1/movies/{movie.id}/reviews"
    for cursor in ("not-a-cursor", str(uuid4()), str(foreign.id)):
        page = (await async_client.get(url, params={"cursor": cursor})).json()
        assert page == {"items": [], "next_cursor": None, "has_next_page": False}


@pytest.mark.anyio
async def test_unknown_movie_has_no_reviews(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/movies/{uuid4()}/reviews")
    assert resp.status_code == 200
    assert resp.json()["items"] == []


@pytest.mark.anyio
async def test_limit_below_one_is_rejected(async_client: AsyncClient, movie):
    resp = await async_client.get(f"/api/v1/movies/{movie.id}/reviews", params={"limit": 0})
    assert resp.status_code == 422
    assert resp.json()["code"] == "VALIDATION_ERROR"
