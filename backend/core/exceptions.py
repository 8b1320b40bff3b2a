"""
Application error taxonomy.

Services raise these; ``app.create_app`` registers a handler that renders
them as ``{"msg": ...}`` with the class ``status_code``.

Usage::

    from core.exceptions import PostNotFoundError

    raise PostNotFoundError()
"""

from __future__ import annotations

from fastapi import status


class AppError(Exception):
    """Base exception for all miniig business-rule failures."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, str]:
        return {"msg": self.message}


# Client input

class ValidationFailedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class DuplicateEmailError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Email already registered"


class DuplicateUsernameError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username already taken"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


# Auth gate

class AuthError(AppError):
    """Bearer token missing or rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Token is not valid"


class MissingTokenError(AuthError):
    default_message = "No token, authorization denied"


class InvalidTokenError(AuthError):
    default_message = "Token is not valid"


# Lookups

class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class PostNotFoundError(NotFoundError):
    default_message = "Post not found"


# Toggle mutations

class AlreadyLikedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Post already liked"


class NotLikedError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Post not liked yet"


class AlreadyFollowingError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Already following"


class NotFollowingError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Not following"


__all__ = [
    "AppError",
    "ValidationFailedError",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "AuthError",
    "MissingTokenError",
    "InvalidTokenError",
    "NotFoundError",
    "UserNotFoundError",
    "PostNotFoundError",
    "AlreadyLikedError",
    "NotLikedError",
    "AlreadyFollowingError",
    "NotFollowingError",
]
