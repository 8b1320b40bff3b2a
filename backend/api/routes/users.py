"""Follow graph and profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_current_user_id, get_db
from api.schemas import ProfileResponse
from services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


class FollowingResponse(BaseModel):
    following: list[str]


@router.post("/follow/{user_id}", response_model=FollowingResponse)
async def follow_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> FollowingResponse:
    following = await user_service.follow(
        session,
        acting_user_id=current_user_id,
        target_user_id=user_id,
    )
    return FollowingResponse(following=following)


@router.post("/unfollow/{user_id}", response_model=FollowingResponse)
async def unfollow_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> FollowingResponse:
    following = await user_service.unfollow(
        session,
        acting_user_id=current_user_id,
        target_user_id=user_id,
    )
    return FollowingResponse(following=following)


@router.get("/profile/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    _current_user_id: str = Depends(get_current_user_id),
    session: AsyncSession = Depends(get_db),
) -> ProfileResponse:
    """Fetch a user's profile with followers and following resolved to usernames."""
    user = await user_service.get_profile(session, user_id)
    followers = await user_service.resolve_usernames(session, list(user.followers))
    following = await user_service.resolve_usernames(session, list(user.following))
    return ProfileResponse.from_user(user, followers=followers, following=following)
