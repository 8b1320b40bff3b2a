"""Unit tests for password hashing and the token gate."""

from datetime import timedelta

import jwt
import pytest

from core import hash_password, needs_rehash, verify_password
from core.config import settings
from core.exceptions import InvalidTokenError, MissingTokenError
from services.auth import issue_token, verify_token


def test_hash_password_is_salted_and_verifiable() -> None:
    first = hash_password("password123")
    second = hash_password("password123")

    assert first != "password123"
    assert first != second
    assert verify_password("password123", first)
    assert not verify_password("password124", first)
    assert not needs_rehash(first)


def test_verify_password_rejects_garbage_hash() -> None:
    assert not verify_password("password123", "not-a-hash")
    assert needs_rehash("not-a-hash")


def test_issue_and_verify_round_trip() -> None:
    token = issue_token("user-123")
    assert verify_token(token) == "user-123"
    assert verify_token(f"  {token} ") == "user-123"


@pytest.mark.parametrize("token", [None, "", "   "])
def test_verify_missing_token(token) -> None:
    with pytest.raises(MissingTokenError):
        verify_token(token)


def test_verify_expired_token() -> None:
    token = issue_token("user-123", expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        verify_token(token)


def test_verify_token_signed_with_other_secret() -> None:
    payload = jwt.decode(
        issue_token("user-123"),
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
    )
    forged = jwt.encode(payload, "someone-elses-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        verify_token(forged)


def test_verify_malformed_token() -> None:
    with pytest.raises(InvalidTokenError):
        verify_token("abc.def.ghi")
