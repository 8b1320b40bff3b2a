"""Post operations: creation, the home feed, likes and comments."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, cast
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from core.exceptions import (
    AlreadyLikedError,
    NotLikedError,
    PostNotFoundError,
    UserNotFoundError,
    ValidationFailedError,
)
from models import Post, User

logger = logging.getLogger(__name__)

FeedRow = tuple[Post, str]


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _desc(column: Any) -> Any:
    return cast(Any, column).desc()


async def _get_post_for_update(session: AsyncSession, post_id: str) -> Post:
    result = await session.execute(
        select(Post).where(_eq(Post.id, post_id)).with_for_update()
    )
    post = result.scalar_one_or_none()
    if post is None:
        raise PostNotFoundError()
    return post


async def create_post(
    session: AsyncSession,
    *,
    owner_id: str,
    image_url: str,
    caption: str,
) -> Post:
    if not image_url.strip():
        raise ValidationFailedError("Image URL is required")

    post = Post(user_id=owner_id, image_url=image_url, caption=caption)
    session.add(post)
    await session.commit()
    logger.info("User %s created post %s", owner_id, post.id)
    return post


async def get_feed(session: AsyncSession, user_id: str) -> list[FeedRow]:
    """Posts by followed accounts, newest first, with the owner's username."""
    result = await session.execute(select(User.following).where(_eq(User.id, user_id)))
    following = result.scalar_one_or_none()
    if following is None:
        raise UserNotFoundError()
    if not following:
        return []

    query = (
        select(Post, User.username)
        .join(User, _eq(User.id, Post.user_id))
        .where(cast(ColumnElement[bool], cast(Any, Post.user_id).in_(following)))
        .order_by(_desc(Post.created_at), _desc(Post.id))
    )
    rows = await session.execute(query)
    return [(post, username) for post, username in rows.all()]


async def like_post(session: AsyncSession, *, post_id: str, user_id: str) -> list[str]:
    post = await _get_post_for_update(session, post_id)
    if user_id in post.likes:
        raise AlreadyLikedError()

    post.likes = [user_id, *post.likes]
    await session.commit()
    return list(post.likes)


async def unlike_post(session: AsyncSession, *, post_id: str, user_id: str) -> list[str]:
    post = await _get_post_for_update(session, post_id)
    if user_id not in post.likes:
        raise NotLikedError()

    post.likes = [liker_id for liker_id in post.likes if liker_id != user_id]
    await session.commit()
    return list(post.likes)


async def add_comment(
    session: AsyncSession,
    *,
    post_id: str,
    user_id: str,
    text: str,
) -> list[dict[str, Any]]:
    post = await _get_post_for_update(session, post_id)
    comment = {
        "id": str(uuid4()),
        "user": user_id,
        "text": text,
        "date": datetime.now(timezone.utc).isoformat(),
    }
    post.comments = [comment, *post.comments]
    await session.commit()
    return list(post.comments)
