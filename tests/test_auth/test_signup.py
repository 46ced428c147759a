import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.core.security import verify_password
from app.db.models.user import User


# ─────────────────────────────────────────────────────────────
# POST /auth/register
# ─────────────────────────────────────────────────────────────
@pytest.mark.anyio
async def test_register_creates_user(async_client: AsyncClient, db_session):
    resp = await async_client.post(
        "/api/v1/auth/register",
        json={"name": "Grace", "email": "Grace@Example.com", "password": "hopper42"},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["name"] == "Grace"
    assert body["email"] == "grace@example.com"
    assert "password" not in body and "hashed_password" not in body
    assert resp.headers["cache-control"] == "no-store"

    stored = (await db_session.execute(select(User).where(User.email == "grace@example.com"))).scalar_one()
    assert str(stored.id) == body["id"]
    assert stored.hashed_password != "hopper42"
    assert verify_password("hopper42", stored.hashed_password)


@pytest.mark.anyio
async def test_register_duplicate_email_conflicts(async_client: AsyncClient, db_session, make_user):
    await make_user(email="taken@example.com")

    resp = await async_client.post(
        "/api/v1/auth/register",
        json={"name": "Other", "email": "TAKEN@example.com", "password": "secret123"},
    )
    assert resp.status_code == 409
    assert resp.headers["content-type"].startswith("application/problem+json")
    assert resp.json()["code"] == "CONFLICT"
    assert resp.json()["detail"] == "User with this email already exists"

    count = (await db_session.execute(select(func.count()).select_from(User))).scalar_one()
    assert count == 1


@pytest.mark.anyio
@pytest.mark.parametrize(
    "payload",
    [
        {"name": "A", "email": "not-an-email", "password": "secret123"},
        {"name": "A", "email": "a@example.com", "password": "123"},
        {"name": "   ", "email": "a@example.com", "password": "secret123"},
        {"email": "a@example.com", "password": "secret123"},
    ],
)
async def test_register_rejects_invalid_input(async_client: AsyncClient, payload):
    resp = await async_client.post("/api/v1/auth/register", json=payload)
    assert resp.status_code == 422
    assert resp.json()["code"] == "VALIDATION_ERROR"
