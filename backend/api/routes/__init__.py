"""Versionless API routers mounted under the configured prefix."""

from fastapi import APIRouter

from . import auth, posts, users

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(posts.router)
api_router.include_router(users.router)

__all__ = ["api_router"]
