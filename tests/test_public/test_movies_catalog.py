from uuid import uuid4

import pytest
from httpx import AsyncClient


# ─────────────────────────────────────────────────────────────
# GET /movies
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_movies_are_ordered_by_popularity(async_client: AsyncClient, make_movie):
    low = await make_movie(title="Low", popularity=1.5)
    unknown = await make_movie(title="Unknown", popularity=None)
    high = await make_movie(title="High", popularity=99.0)
    mid = await make_movie(title="Mid", popularity=42.0)

    resp = await async_client.get("/api/v1/movies")
    assert resp.status_code == 200
    body = resp.json()
    assert [m["id"] for m in body["items"]] == [str(high.id), str(mid.id), str(low.id), str(unknown.id)]
    assert body["page"] == 1 and body["limit"] == 20 and body["total"] == 4
    assert resp.headers["x-total-count"] == "4"


@pytest.mark.anyio
async def test_movies_offset_pagination(async_client: AsyncClient, make_movie):
    for i in range(5):
        await make_movie(title=f"M{i}", popularity=float(100 - i))

    first = (await async_client.get("/api/v1/movies", params={"page": 1, "limit": 2})).json()
    third = (await async_client.get("/api/v1/movies", params={"page": 3, "limit": 2})).json()
    beyond = (await async_client.get("/api/v1/movies", params={"page": 9, "limit": 2})).json()

    assert [m["title"] for m in first["items"]] == ["M0", "M1"]
    assert [m["title"] for m in third["items"]] == ["M4"]
    assert beyond["items"] == [] and beyond["total"] == 5


@pytest.mark.anyio
@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"limit": 101}, {"page": "x"}])
async def test_movies_rejects_bad_paging(async_client: AsyncClient, params):
    resp = await async_client.get("/api/v1/movies", params=params)
    assert resp.status_code == 422
    assert resp.json()["code"] == "VALIDATION_ERROR"


# ─────────────────────────────────────────────────────────────
# GET /movies/{id}
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_movie_detail(async_client: AsyncClient, movie):
    resp = await async_client.get(f"/api/v1/movies/{movie.id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "Arrival"
    assert body["tmdb_id"] == movie.tmdb_id
    assert body["rating_count"] == 0
    assert body["average_rating"] is None


@pytest.mark.anyio
async def test_missing_movie_is_null(async_client: AsyncClient):
    resp = await async_client.get(f"/api/v1/movies/{uuid4()}")
    assert resp.status_code == 200
    assert resp.json() is None


@pytest.mark.anyio
async def test_movie_id_must_be_uuid(async_client: AsyncClient):
    resp = await async_client.get("/api/v1/movies/123")
    assert resp.status_code == 422


# ─────────────────────────────────────────────────────────────
# Meta
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_healthz_and_request_id(async_client: AsyncClient):
    resp = await async_client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}
    assert resp.headers.get("x-request-id")
    assert resp.headers["x-content-type-options"] == "nosniff"


@pytest.mark.anyio
async def test_problem_body_carries_request_id(async_client: AsyncClient):
    rid = "0b4a3a6e-8f7e-4c1f-9d2e-3c5b1f0a7e21"
    resp = await async_client.get("/api/v1/movies", params={"page": 0}, headers={"X-Request-ID": rid})
    assert resp.headers["x-request-id"] == rid
    assert resp.json()["request_id"] == rid
