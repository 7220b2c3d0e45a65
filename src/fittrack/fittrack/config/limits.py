# ABOUTME: Rate limiting and storage limit configuration
# ABOUTME: Provides default sliding-window parameters and repository capacity settings

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RateLimitSettings(BaseSettings):
    """Default sliding-window parameters for the request rate limiter.

    Limits are enforced per process. In a horizontally scaled deployment each
    instance counts independently, so the effective global limit is a loose
    bound of ``instances * RATE_LIMIT_MAX_REQUESTS``.
    """

    RATE_LIMIT_WINDOW_MS: int = Field(
        default=60_000,
        gt=0,
        description="Length of the sliding window in milliseconds.",
    )
    RATE_LIMIT_MAX_REQUESTS: int = Field(
        default=60,
        gt=0,
        description="Requests admitted per identifier within one window.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


class StorageSettings(BaseSettings):
    """Capacity settings for the in-memory document repository."""

    STORAGE_MAX_KEYS: int = Field(
        default=10_000,
        gt=0,
        description="Maximum number of documents held by the in-memory repository.",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
