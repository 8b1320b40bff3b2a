"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.deps import get_db
from api.schemas import UserResponse
from services import users as user_service

router = APIRouter(prefix="/auth", tags=["auth"])


class SignupRequest(BaseModel):
    username: str
    email: str
    password: str


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    token: str


class SignupResponse(TokenResponse):
    user: UserResponse


@router.post("/signup", response_model=SignupResponse)
async def signup(
    payload: SignupRequest,
    session: AsyncSession = Depends(get_db),
) -> SignupResponse:
    user, token = await user_service.signup(
        session,
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )
    return SignupResponse(token=token, user=UserResponse.model_validate(user))


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    session: AsyncSession = Depends(get_db),
) -> TokenResponse:
    token = await user_service.login(
        session,
        email=payload.email,
        password=payload.password,
    )
    return TokenResponse(token=token)
