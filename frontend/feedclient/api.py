"""Async HTTP client for the miniig API."""

from __future__ import annotations

import logging
from collections.abc import Generator
from typing import Any

import httpx

from .credentials import Session

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class SessionExpiredError(ApiError):
    """The server rejected the stored token; it has been discarded."""


class BearerAuth(httpx.Auth):
    """Attaches the session's token to every outgoing request."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        token = self.session.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("msg"), str):
        return body["msg"]
    return response.reason_phrase


class ApiClient:
    def __init__(
        self,
        base_url: str,
        session: Session,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.session = session
        self._http = httpx.AsyncClient(
            base_url=base_url,
            auth=BearerAuth(session),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        anonymous: bool = False,
        **kwargs: Any,
    ) -> Any:
        """Send a request; ``anonymous`` requests carry no token and never expire the session."""
        if anonymous:
            kwargs["auth"] = None
        response = await self._http.request(method, url, **kwargs)
        if response.is_success:
            return response.json()

        message = _error_message(response)
        sent_token = "Authorization" in response.request.headers
        if response.status_code == httpx.codes.UNAUTHORIZED and sent_token and not anonymous:
            logger.info("Stored token rejected (%s); clearing session", message)
            self.session.clear()
            raise SessionExpiredError(response.status_code, message)
        raise ApiError(response.status_code, message)

    # Auth

    async def signup(self, username: str, email: str, password: str) -> dict[str, Any]:
        data = await self._request(
            "POST",
            "/auth/signup",
            json={"username": username, "email": email, "password": password},
            anonymous=True,
        )
        self.session.set_token(data["token"])
        return data

    async def login(self, email: str, password: str) -> str:
        data = await self._request(
            "POST",
            "/auth/login",
            json={"email": email, "password": password},
            anonymous=True,
        )
        self.session.set_token(data["token"])
        return data["token"]

    # Posts

    async def create_post(self, image_url: str, caption: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/posts",
            json={"imageUrl": image_url, "caption": caption},
        )

    async def get_feed(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/posts/feed")

    async def like(self, post_id: str) -> list[str]:
        return await self._request("PUT", f"/posts/like/{post_id}")

    async def unlike(self, post_id: str) -> list[str]:
        return await self._request("PUT", f"/posts/unlike/{post_id}")

    async def comment(self, post_id: str, text: str) -> list[dict[str, Any]]:
        return await self._request("POST", f"/posts/comment/{post_id}", json={"text": text})

    # Users

    async def follow(self, user_id: str) -> list[str]:
        data = await self._request("POST", f"/users/follow/{user_id}")
        return data["following"]

    async def unfollow(self, user_id: str) -> list[str]:
        data = await self._request("POST", f"/users/unfollow/{user_id}")
        return data["following"]

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/users/profile/{user_id}")
