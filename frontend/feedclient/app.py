"""Client-side application state: anonymous or authenticated with a feed."""

from __future__ import annotations

import logging
from typing import Any, Literal

from .api import ApiClient, ApiError, SessionExpiredError
from .config import ClientSettings

logger = logging.getLogger(__name__)

AppState = Literal["anonymous", "authenticated"]

SESSION_EXPIRED_MESSAGE = "Session expired. Please login again."


class FeedApp:
    """Drives the login / feed / post-creation flow on top of ``ApiClient``.

    The feed is refetched after every successful mutation instead of being
    patched locally.
    """

    def __init__(self, api: ApiClient, settings: ClientSettings | None = None) -> None:
        self.api = api
        self.settings = settings or ClientSettings()
        self.posts: list[dict[str, Any]] = []
        self.error: str | None = None

    @property
    def state(self) -> AppState:
        return "authenticated" if self.api.session.is_authenticated else "anonymous"

    async def start(self) -> AppState:
        if self.state == "authenticated":
            await self.refresh_feed()
        return self.state

    def _expire(self) -> None:
        self.posts = []
        self.error = SESSION_EXPIRED_MESSAGE

    async def refresh_feed(self) -> list[dict[str, Any]]:
        try:
            self.posts = await self.api.get_feed()
        except SessionExpiredError:
            self._expire()
        except ApiError as exc:
            logger.warning("Could not fetch feed: %s", exc.message)
            self.posts = []
        return self.posts

    async def login(self, email: str, password: str) -> None:
        self.error = None
        await self.api.login(email, password)
        await self.refresh_feed()

    async def signup(self, username: str, email: str, password: str) -> None:
        self.error = None
        await self.api.signup(username, email, password)
        await self.refresh_feed()

    async def login_with_test_account(self) -> None:
        """Create the configured test account if needed, then log into it."""
        try:
            await self.api.signup(
                self.settings.test_username,
                self.settings.test_email,
                self.settings.test_password,
            )
        except ApiError as exc:
            logger.info("Test account signup skipped: %s", exc.message)
        await self.login(self.settings.test_email, self.settings.test_password)

    def logout(self) -> None:
        self.api.session.clear()
        self.posts = []
        self.error = None

    async def _mutate(self, operation: Any, *args: Any) -> Any:
        try:
            result = await operation(*args)
        except SessionExpiredError:
            self._expire()
            raise
        await self.refresh_feed()
        return result

    async def create_post(self, image_url: str, caption: str) -> dict[str, Any]:
        if not image_url.strip() or not caption.strip():
            raise ValueError("Please fill in both image URL and caption")
        return await self._mutate(self.api.create_post, image_url, caption)

    async def like(self, post_id: str) -> list[str]:
        return await self._mutate(self.api.like, post_id)

    async def unlike(self, post_id: str) -> list[str]:
        return await self._mutate(self.api.unlike, post_id)

    async def comment(self, post_id: str, text: str) -> list[dict[str, Any]]:
        return await self._mutate(self.api.comment, post_id, text)

    async def follow(self, user_id: str) -> list[str]:
        return await self._mutate(self.api.follow, user_id)

    async def unfollow(self, user_id: str) -> list[str]:
        return await self._mutate(self.api.unfollow, user_id)

    async def profile(self, user_id: str) -> dict[str, Any]:
        try:
            return await self.api.get_profile(user_id)
        except SessionExpiredError:
            self._expire()
            raise
