"""End-to-end tests for signup, login and the bearer-token gate."""

from datetime import datetime, timedelta, timezone
from typing import Any, cast
from uuid import uuid4

import jwt
import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core.config import settings
from models import User
from services.auth import issue_token


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def build_payload() -> dict[str, str]:
    suffix = uuid4().hex[:8]
    return {
        "username": f"alice_{suffix}",
        "email": f"alice_{suffix}@example.com",
        "password": "Sup3rSecret!",
    }


@pytest.mark.asyncio
async def test_signup_creates_user_and_returns_token(async_client: AsyncClient, db_session: AsyncSession):
    payload = build_payload()
    response = await async_client.post("/api/auth/signup", json=payload)
    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"]["username"] == payload["username"]
    assert data["user"]["email"] == payload["email"]
    assert "password" not in data["user"]
    assert "passwordHash" not in data["user"]

    result = await db_session.execute(
        select(User).where(_eq(User.username, payload["username"]))
    )
    user = result.scalar_one()
    assert user.password_hash != payload["password"]
    assert user.followers == []
    assert user.following == []


@pytest.mark.asyncio
async def test_signup_token_is_accepted_on_protected_routes(async_client: AsyncClient):
    response = await async_client.post("/api/auth/signup", json=build_payload())
    token = response.json()["token"]

    feed = await async_client.get(
        "/api/posts/feed",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert feed.status_code == 200
    assert feed.json() == []


@pytest.mark.asyncio
async def test_signup_normalizes_email(async_client: AsyncClient):
    payload = build_payload()
    payload["email"] = "  Mixed.Case@Example.COM "
    response = await async_client.post("/api/auth/signup", json=payload)

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "mixed.case@example.com"


@pytest.mark.asyncio
async def test_signup_rejects_duplicate_email(async_client: AsyncClient):
    payload = build_payload()
    await async_client.post("/api/auth/signup", json=payload)

    second = build_payload()
    second["email"] = payload["email"].upper()
    response = await async_client.post("/api/auth/signup", json=second)
    assert response.status_code == 400
    assert response.json() == {"msg": "Email already registered"}


@pytest.mark.asyncio
async def test_signup_rejects_duplicate_username(async_client: AsyncClient):
    payload = build_payload()
    await async_client.post("/api/auth/signup", json=payload)

    second = build_payload()
    second["username"] = payload["username"]
    response = await async_client.post("/api/auth/signup", json=second)
    assert response.status_code == 400
    assert response.json() == {"msg": "Username already taken"}


@pytest.mark.asyncio
async def test_signup_requires_all_fields(async_client: AsyncClient):
    payload = build_payload()
    del payload["password"]
    response = await async_client.post("/api/auth/signup", json=payload)
    assert response.status_code == 400
    assert "password" in response.json()["msg"]


@pytest.mark.asyncio
async def test_signup_rejects_blank_fields(async_client: AsyncClient):
    payload = build_payload()
    payload["username"] = "   "
    response = await async_client.post("/api/auth/signup", json=payload)
    assert response.status_code == 400
    assert response.json()["msg"]


@pytest.mark.asyncio
async def test_login_returns_token(async_client: AsyncClient):
    payload = build_payload()
    signup = await async_client.post("/api/auth/signup", json=payload)
    user_id = signup.json()["user"]["id"]

    response = await async_client.post(
        "/api/auth/login",
        json={"email": payload["email"], "password": payload["password"]},
    )
    assert response.status_code == 200
    token = response.json()["token"]
    decoded = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    assert decoded["sub"] == user_id


@pytest.mark.asyncio
async def test_login_with_wrong_password_issues_no_token(async_client: AsyncClient):
    payload = build_payload()
    await async_client.post("/api/auth/signup", json=payload)

    response = await async_client.post(
        "/api/auth/login",
        json={"email": payload["email"], "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json() == {"msg": "Invalid credentials"}
    assert "token" not in response.json()


@pytest.mark.asyncio
async def test_login_with_unknown_email(async_client: AsyncClient):
    response = await async_client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "whatever"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_requires_fields(async_client: AsyncClient):
    response = await async_client.post("/api/auth/login", json={"email": "a@example.com"})
    assert response.status_code == 400


_SOME_ID = str(uuid4())

PROTECTED_ROUTES = [
    ("POST", "/api/posts", {"imageUrl": "https://picsum.photos/600/400", "caption": "anon"}),
    ("GET", "/api/posts/feed", None),
    ("PUT", f"/api/posts/like/{_SOME_ID}", None),
    ("PUT", f"/api/posts/unlike/{_SOME_ID}", None),
    ("POST", f"/api/posts/comment/{_SOME_ID}", {"text": "hi"}),
    ("POST", f"/api/users/follow/{_SOME_ID}", None),
    ("POST", f"/api/users/unfollow/{_SOME_ID}", None),
    ("GET", f"/api/users/profile/{_SOME_ID}", None),
]

INVALID_HEADERS = [
    "Bearer not-a-jwt",
    "Bearer " + jwt.encode({"sub": "someone", "iat": 0, "exp": 9999999999}, "other-secret", algorithm="HS256"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
async def test_protected_route_without_token(
    async_client: AsyncClient, method: str, path: str, body: dict[str, str] | None
):
    response = await async_client.request(method, path, json=body)
    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


@pytest.mark.asyncio
@pytest.mark.parametrize("header", INVALID_HEADERS)
@pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
async def test_protected_route_with_invalid_token(
    async_client: AsyncClient, method: str, path: str, body: dict[str, str] | None, header: str
):
    response = await async_client.request(method, path, json=body, headers={"Authorization": header})
    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
@pytest.mark.parametrize(("method", "path", "body"), PROTECTED_ROUTES)
async def test_protected_route_with_expired_token(
    async_client: AsyncClient, method: str, path: str, body: dict[str, str] | None
):
    expired = issue_token(str(uuid4()), expires_delta=timedelta(seconds=-5))

    response = await async_client.request(
        method,
        path,
        json=body,
        headers={"Authorization": f"Bearer {expired}"},
    )
    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
async def test_token_with_wrong_type_is_rejected(async_client: AsyncClient):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "abc", "type": "refresh", "iat": now, "exp": now + timedelta(minutes=5)},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    response = await async_client.get(
        "/api/posts/feed",
        headers={"Authorization": f"Bearer {token}"},
    )
    assert response.status_code == 401
