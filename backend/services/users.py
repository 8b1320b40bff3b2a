"""Account operations: signup, login, profiles and the follow graph."""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core import hash_password, needs_rehash, settings
from core.exceptions import (
    AlreadyFollowingError,
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    NotFollowingError,
    UserNotFoundError,
    ValidationFailedError,
)
from db.errors import is_unique_violation, violated_column
from models import User
from services.auth import (
    ensure_registration_available,
    issue_token,
    normalize_email,
    normalize_username,
    resolve_login_user,
)

logger = logging.getLogger(__name__)


def _in(column: Any, values: list[str]) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], cast(Any, column).in_(values))


async def _get_user(session: AsyncSession, user_id: str) -> User:
    result = await session.execute(
        select(User).where(cast(ColumnElement[bool], User.id == user_id))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise UserNotFoundError()
    return user


async def signup(
    session: AsyncSession,
    *,
    username: str,
    email: str,
    password: str,
) -> tuple[User, str]:
    normalized_username = normalize_username(username)
    normalized_email = normalize_email(email)
    if not normalized_username or not normalized_email or not password:
        raise ValidationFailedError("Please provide username, email and password")

    await ensure_registration_available(
        session,
        username=normalized_username,
        normalized_email=normalized_email,
    )

    user = User(
        username=normalized_username,
        email=normalized_email,
        password_hash=hash_password(password),
    )
    session.add(user)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        if not is_unique_violation(exc):
            raise
        if violated_column(exc, "users", ("username", "email")) == "username":
            raise DuplicateUsernameError() from exc
        raise DuplicateEmailError() from exc

    logger.info("Registered user %s", user.id)
    return user, issue_token(user.id)


async def login(session: AsyncSession, *, email: str, password: str) -> str:
    if not email.strip() or not password:
        raise ValidationFailedError("Please provide email and password")

    user = await resolve_login_user(session, email=email, password=password)
    if user is None:
        raise InvalidCredentialsError()

    if needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        await session.commit()

    return issue_token(user.id)


async def resolve_usernames(
    session: AsyncSession,
    user_ids: list[str],
) -> list[tuple[str, str]]:
    """Return ``(id, username)`` pairs for ``user_ids``, keeping their order.

    Ids that no longer resolve to a user are skipped.
    """
    if not user_ids:
        return []
    result = await session.execute(
        select(User.id, User.username).where(_in(User.id, user_ids))
    )
    usernames = {user_id: username for user_id, username in result.all()}
    return [(user_id, usernames[user_id]) for user_id in user_ids if user_id in usernames]


async def get_profile(session: AsyncSession, user_id: str) -> User:
    return await _get_user(session, user_id)


def lock_users_statement(user_ids: list[str]) -> Select[tuple[User]]:
    # Always lock in id order: concurrent A->B and B->A take rows in the same sequence.
    return (
        select(User)
        .where(_in(User.id, sorted(set(user_ids))))
        .order_by(cast(Any, User.id))
        .with_for_update()
    )


async def _lock_follow_pair(
    session: AsyncSession,
    acting_user_id: str,
    target_user_id: str,
) -> tuple[User, User]:
    """Load and lock ``(current, target)``; both are the same row on self-follow."""
    result = await session.execute(lock_users_statement([acting_user_id, target_user_id]))
    users = {user.id: user for user in result.scalars().all()}
    if target_user_id not in users or acting_user_id not in users:
        raise UserNotFoundError()
    return users[acting_user_id], users[target_user_id]


async def follow(session: AsyncSession, *, acting_user_id: str, target_user_id: str) -> list[str]:
    if acting_user_id == target_user_id and not settings.allow_self_follow:
        raise ValidationFailedError("Cannot follow yourself")

    current, target = await _lock_follow_pair(session, acting_user_id, target_user_id)

    if target.id in current.following:
        raise AlreadyFollowingError()

    current.following = [target.id, *current.following]
    target.followers = [current.id, *target.followers]
    # Both user rows change in one commit.
    await session.commit()
    return list(current.following)


async def unfollow(session: AsyncSession, *, acting_user_id: str, target_user_id: str) -> list[str]:
    current, target = await _lock_follow_pair(session, acting_user_id, target_user_id)

    if target.id not in current.following:
        raise NotFollowingError()

    current.following = [user_id for user_id in current.following if user_id != target.id]
    target.followers = [user_id for user_id in target.followers if user_id != current.id]
    await session.commit()
    return list(current.following)
