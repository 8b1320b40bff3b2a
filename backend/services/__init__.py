"""Business logic services."""

from . import posts, users

__all__ = ["posts", "users"]
