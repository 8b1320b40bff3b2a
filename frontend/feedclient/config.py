"""Client settings loaded from ``MINIIG_*`` environment variables."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MINIIG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str = "http://localhost:5000/api"
    token_path: Path = Path.home() / ".miniig" / "token.json"

    test_username: str = "testuser"
    test_email: str = "test@example.com"
    test_password: str = "password123"
