import pytest
from httpx import AsyncClient

from app.core.jwt import decode_token


# ─────────────────────────────────────────────────────────────
# /login
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_login_success_returns_token_and_user(async_client: AsyncClient, make_user):
    u = await make_user(name="Lin", email="lin@example.com", password="Password123!")

    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "lin@example.com", "password": "Password123!"},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()
    assert data["user"] == {"id": str(u.id), "name": "Lin", "email": "lin@example.com"}
    assert resp.headers["cache-control"] == "no-store"

    claims = decode_token(data["token"])
    assert claims.sub == str(u.id)
    assert claims.role == "user"


@pytest.mark.anyio
async def test_login_email_is_case_insensitive(async_client: AsyncClient, make_user):
    await make_user(email="case@example.com", password="Password123!")
    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "CASE@Example.COM", "password": "Password123!"},
    )
    assert resp.status_code == 200


@pytest.mark.anyio
async def test_login_after_register(async_client: AsyncClient):
    reg = await async_client.post(
        "/api/v1/auth/register",
        json={"name": "New", "email": "new@example.com", "password": "secret123"},
    )
    assert reg.status_code == 201

    resp = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "new@example.com", "password": "secret123"},
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["id"] == reg.json()["id"]


@pytest.mark.anyio
async def test_wrong_password_and_unknown_email_look_the_same(async_client: AsyncClient, make_user):
    await make_user(email="wrongpass@example.com", password="Correct1!")

    wrong = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "wrongpass@example.com", "password": "nope-nope"},
    )
    unknown = await async_client.post(
        "/api/v1/auth/login",
        json={"email": "ghost@example.com", "password": "nope-nope"},
    )

    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["code"] == unknown.json()["code"] == "INVALID_CREDENTIALS"
    assert wrong.json()["detail"] == unknown.json()["detail"] == "Invalid email or password"
