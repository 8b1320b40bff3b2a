"""Post creation, feed and interaction endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db
from api.schemas import CamelModel, CommentResponse, FeedPostResponse, PostResponse
from services import posts as post_service

router = APIRouter(prefix="/posts", tags=["posts"])


class PostCreateRequest(CamelModel):
    image_url: str
    caption: str


class CommentCreateRequest(CamelModel):
    text: str


@router.post("", response_model=PostResponse)
async def create_post(
    payload: PostCreateRequest,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    post = await post_service.create_post(
        session,
        owner_id=current_user_id,
        image_url=payload.image_url,
        caption=payload.caption,
    )
    return PostResponse.from_post(post)


@router.get("/feed", response_model=list[FeedPostResponse])
async def get_feed(
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[FeedPostResponse]:
    rows = await post_service.get_feed(session, current_user_id)
    return [FeedPostResponse.from_feed_row(post, username) for post, username in rows]


@router.put("/like/{post_id}", response_model=list[str])
async def like_post(
    post_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[str]:
    return await post_service.like_post(session, post_id=post_id, user_id=current_user_id)


@router.put("/unlike/{post_id}", response_model=list[str])
async def unlike_post(
    post_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[str]:
    return await post_service.unlike_post(session, post_id=post_id, user_id=current_user_id)


@router.post("/comment/{post_id}", response_model=list[CommentResponse])
async def add_comment(
    post_id: str,
    payload: CommentCreateRequest,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> list[CommentResponse]:
    comments = await post_service.add_comment(
        session,
        post_id=post_id,
        user_id=current_user_id,
        text=payload.text,
    )
    return [CommentResponse.model_validate(comment) for comment in comments]
