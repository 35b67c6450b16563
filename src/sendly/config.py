"""Configuration surface for the Sendly client."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://sendly.live/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
CONNECT_TIMEOUT = 10.0


class SendlySettings(BaseSettings):
    """Client defaults read from ``SENDLY_*`` environment variables or ``.env``.

    Explicit arguments to :class:`sendly.SendlyClient` always win over these.
    """

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    max_retries: int = Field(default=DEFAULT_MAX_RETRIES, ge=0)

    model_config = SettingsConfigDict(
        env_prefix="SENDLY_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


def load_settings(env_file: Optional[str] = None) -> SendlySettings:
    """Load settings, optionally from a specific env file."""
    if env_file:
        return SendlySettings(_env_file=Path(env_file))
    return SendlySettings()
