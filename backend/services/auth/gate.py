"""Bearer-token issuing and verification."""

from __future__ import annotations

from datetime import timedelta

from core import ACCESS_TOKEN_TYPE, create_access_token, decode_token
from core.exceptions import InvalidTokenError, MissingTokenError


def issue_token(user_id: str, *, expires_delta: timedelta | None = None) -> str:
    return create_access_token(user_id, expires_delta=expires_delta)


def verify_token(token: str | None) -> str:
    """Return the user id embedded in ``token``.

    The id is not checked against the users table.
    """
    if token is None or not token.strip():
        raise MissingTokenError()

    try:
        payload = decode_token(token.strip())
    except ValueError as exc:
        raise InvalidTokenError() from exc

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise InvalidTokenError()

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise InvalidTokenError()
    return subject.strip()
