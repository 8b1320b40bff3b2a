"""Tests for the development seed script."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core import verify_password
from models import Post, User
from scripts import seed as seed_script


def test_build_seed_follows_links_each_user_to_next_two() -> None:
    follows = seed_script._build_seed_follows(["a", "b", "c", "d"])
    assert ("a", "b") in follows
    assert ("a", "c") in follows
    assert ("d", "a") in follows
    assert all(follower != followee for follower, followee in follows)


def test_build_seed_follows_needs_two_users() -> None:
    assert seed_script._build_seed_follows(["solo"]) == []


@pytest.mark.asyncio
async def test_seed_database_is_idempotent(db_session: AsyncSession):
    plan = await seed_script.seed_database(db_session)
    await seed_script.seed_database(db_session)

    users = (await db_session.execute(select(User))).scalars().all()
    posts = (await db_session.execute(select(Post))).scalars().all()
    assert len(users) == len(plan.users)
    assert len(posts) == len(plan.posts)

    test_user = next(user for user in users if user.email == "test@example.com")
    assert verify_password(seed_script.DEFAULT_PASSWORD, test_user.password_hash)

    by_id = {user.id: user for user in users}
    for user in users:
        for followee_id in user.following:
            assert user.id in by_id[followee_id].followers
    assert sum(len(user.following) for user in users) == len(plan.follows)
