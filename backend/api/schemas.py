"""Response and request models shared by the routers."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models import Post, User


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserSummary(CamelModel):
    id: str
    username: str


class UserResponse(CamelModel):
    id: str
    username: str
    email: str


class ProfileResponse(UserResponse):
    followers: list[UserSummary] = []
    following: list[UserSummary] = []
    created_at: datetime

    @classmethod
    def from_user(
        cls,
        user: User,
        *,
        followers: list[tuple[str, str]],
        following: list[tuple[str, str]],
    ) -> "ProfileResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            followers=[UserSummary(id=user_id, username=name) for user_id, name in followers],
            following=[UserSummary(id=user_id, username=name) for user_id, name in following],
            created_at=user.created_at,
        )


class CommentResponse(CamelModel):
    id: str
    user: str
    text: str
    date: datetime


class PostResponse(CamelModel):
    id: str
    user: str
    image_url: str
    caption: str
    likes: list[str] = []
    comments: list[CommentResponse] = []
    created_at: datetime

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(
            id=post.id,
            user=post.user_id,
            image_url=post.image_url,
            caption=post.caption,
            likes=list(post.likes),
            comments=[CommentResponse.model_validate(comment) for comment in post.comments],
            created_at=post.created_at,
        )


class FeedPostResponse(PostResponse):
    user: UserSummary  # type: ignore[assignment]

    @classmethod
    def from_feed_row(cls, post: Post, username: str) -> "FeedPostResponse":
        base: dict[str, Any] = PostResponse.from_post(post).model_dump()
        base["user"] = UserSummary(id=post.user_id, username=username)
        return cls.model_validate(base)
