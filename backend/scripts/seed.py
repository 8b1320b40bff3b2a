"""Database seed script for local development.

Usage:
    python scripts/seed.py

Creates the test account used by the client (``test@example.com`` /
``password123``), a handful of demo users, follow edges between them and a
few image-URL posts. Re-running is safe: existing users, follows and posts
are left alone.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from core.exceptions import AlreadyFollowingError  # noqa: E402
from db.session import AsyncSessionMaker  # noqa: E402
from models import Post, User  # noqa: E402
from services import posts as post_service  # noqa: E402
from services import users as user_service  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "password123"


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


@dataclass(frozen=True)
class SeedUser:
    username: str
    email: str


@dataclass(frozen=True)
class SeedPost:
    username: str
    image_url: str
    caption: str


@dataclass(frozen=True)
class SeedPlan:
    users: list[SeedUser]
    posts: list[SeedPost]
    follows: list[tuple[str, str]]


BASE_USERS: Sequence[SeedUser] = [
    SeedUser(username="testuser", email="test@example.com"),
    SeedUser(username="demo_alex", email="alex@example.com"),
    SeedUser(username="demo_bella", email="bella@example.com"),
    SeedUser(username="demo_cara", email="cara@example.com"),
    SeedUser(username="demo_dan", email="dan@example.com"),
]

BASE_POSTS: Sequence[SeedPost] = [
    SeedPost("demo_alex", "https://picsum.photos/600/400", "Morning light."),
    SeedPost("demo_bella", "https://picsum.photos/500/500", "Coffee and city walks."),
    SeedPost(
        "demo_cara",
        "https://images.unsplash.com/photo-1618005182384-a83a8bd57fbe",
        "Colors everywhere.",
    ),
    SeedPost(
        "demo_dan",
        "https://images.unsplash.com/photo-1579546929662-711aa81148cf",
        "Weekend gradient.",
    ),
    SeedPost("testuser", "https://picsum.photos/640/480", "Hello from the test account."),
]


def _build_seed_follows(usernames: Sequence[str]) -> list[tuple[str, str]]:
    if len(usernames) < 2:
        return []

    relationships: set[tuple[str, str]] = set()
    total_users = len(usernames)
    for index, follower in enumerate(usernames):
        first = usernames[(index + 1) % total_users]
        if first != follower:
            relationships.add((follower, first))

        if total_users > 3:
            second = usernames[(index + 2) % total_users]
            if second != follower:
                relationships.add((follower, second))

    return sorted(relationships)


def build_seed_plan() -> SeedPlan:
    users = list(BASE_USERS)
    return SeedPlan(
        users=users,
        posts=list(BASE_POSTS),
        follows=_build_seed_follows([user.username for user in users]),
    )


async def get_or_create_user(session: AsyncSession, payload: SeedUser) -> User:
    result = await session.execute(select(User).where(_eq(User.username, payload.username)))
    user = result.scalar_one_or_none()
    if user:
        return user

    user, _token = await user_service.signup(
        session,
        username=payload.username,
        email=payload.email,
        password=DEFAULT_PASSWORD,
    )
    return user


async def ensure_posts(
    session: AsyncSession,
    users: dict[str, User],
    posts: Sequence[SeedPost],
) -> int:
    created = 0
    for post in posts:
        author = users[post.username]
        result = await session.execute(
            select(Post).where(
                _eq(Post.user_id, author.id),
                _eq(Post.image_url, post.image_url),
            )
        )
        if result.scalar_one_or_none():
            continue

        await post_service.create_post(
            session,
            owner_id=author.id,
            image_url=post.image_url,
            caption=post.caption,
        )
        created += 1
    return created


async def ensure_follows(
    session: AsyncSession,
    users: dict[str, User],
    follows: Sequence[tuple[str, str]],
) -> int:
    created = 0
    for follower_username, followee_username in follows:
        try:
            await user_service.follow(
                session,
                acting_user_id=users[follower_username].id,
                target_user_id=users[followee_username].id,
            )
        except AlreadyFollowingError:
            continue
        created += 1
    return created


async def seed_database(session: AsyncSession, plan: SeedPlan | None = None) -> SeedPlan:
    plan = plan or build_seed_plan()

    users: dict[str, User] = {}
    for payload in plan.users:
        user = await get_or_create_user(session, payload)
        users[user.username] = user

    posts_created = await ensure_posts(session, users, plan.posts)
    follows_created = await ensure_follows(session, users, plan.follows)
    logger.info(
        "Seeded %d users, %d new posts, %d new follows",
        len(users),
        posts_created,
        follows_created,
    )
    return plan


async def seed() -> None:
    async with AsyncSessionMaker() as session:
        plan = await seed_database(session)

    print("Seed data inserted.")
    print("   Users:", ", ".join(user.username for user in plan.users))
    print("   Default password:", DEFAULT_PASSWORD)
    print("   Posts:", len(plan.posts))
    print("   Follows:", len(plan.follows))


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
