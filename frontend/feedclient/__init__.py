"""Command-line client for the miniig API."""

from .api import ApiClient, ApiError, SessionExpiredError
from .app import FeedApp
from .config import ClientSettings
from .credentials import FileTokenStore, MemoryTokenStore, Session, TokenStore

__all__ = [
    "ApiClient",
    "ApiError",
    "SessionExpiredError",
    "FeedApp",
    "ClientSettings",
    "FileTokenStore",
    "MemoryTokenStore",
    "Session",
    "TokenStore",
]
