"""Identity normalization and account lookup helpers."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core import verify_password
from core.exceptions import DuplicateEmailError, DuplicateUsernameError
from models import User


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_username(value: str) -> str:
    return value.strip()


async def find_user_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(
        select(User).where(_eq(User.email, normalize_email(email))).limit(1)
    )
    return result.scalar_one_or_none()


async def find_user_by_username(session: AsyncSession, username: str) -> User | None:
    result = await session.execute(
        select(User).where(_eq(User.username, username)).limit(1)
    )
    return result.scalar_one_or_none()


async def ensure_registration_available(
    session: AsyncSession,
    *,
    username: str,
    normalized_email: str,
) -> None:
    """Raise when the email or username already belongs to an account."""
    if await find_user_by_email(session, normalized_email) is not None:
        raise DuplicateEmailError()
    if await find_user_by_username(session, username) is not None:
        raise DuplicateUsernameError()


async def resolve_login_user(
    session: AsyncSession,
    *,
    email: str,
    password: str,
) -> User | None:
    user = await find_user_by_email(session, email)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user
