"""Tracker settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrackerSettings(BaseSettings):
    """Settings for the Matomo tracker.

    Environment variables are prefixed with MATOMO_.
    Example: MATOMO_SITE_ID=1 MATOMO_TRACKER_URL=https://example.com/matomo.php
    """

    model_config = SettingsConfigDict(
        env_prefix="MATOMO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    site_id: int | str | None = Field(default=None)
    tracker_url: str | None = Field(default=None)
    no_url_validation: bool = Field(default=False)
    timeout: float = Field(default=10.0, gt=0)
    user_agent: str | None = Field(default=None)
