"""Authentication domain services."""

from .gate import issue_token, verify_token
from .identity_resolution import (
    ensure_registration_available,
    find_user_by_email,
    find_user_by_username,
    normalize_email,
    normalize_username,
    resolve_login_user,
)

__all__ = [
    "issue_token",
    "verify_token",
    "normalize_email",
    "normalize_username",
    "find_user_by_email",
    "find_user_by_username",
    "ensure_registration_available",
    "resolve_login_user",
]
