# ABOUTME: Security configuration for token signing and legacy identity fallback
# ABOUTME: Loads the HMAC signing secret and authentication switches from the environment

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

# Value shipped in example environment files; never acceptable as a real secret.
PLACEHOLDER_TOKEN_SECRET = "default-secret-change-in-production"

DEFAULT_TOKEN_TTL_SECONDS = 30 * 24 * 60 * 60


class SecuritySettings(BaseSettings):
    """Settings consumed by the token authenticator.

    The secret may be absent while settings load. A token manager built from
    these settings refuses to start without a usable secret.

    Attributes:
        USER_TOKEN_SECRET: HMAC-SHA256 key used to sign user tokens.
        ALLOW_LEGACY_AUTH: Enables the deprecated unsigned ``x-user-id`` / body
            ``userId`` identity fallback. Migration shim only; off by default.
        TOKEN_TTL_SECONDS: Lifetime of newly issued tokens.
    """

    USER_TOKEN_SECRET: SecretStr | None = Field(
        default=None,
        description="HMAC secret for signing user tokens. Required before any token can be issued or verified.",
    )
    ALLOW_LEGACY_AUTH: bool = Field(
        default=False,
        description="Accept unsigned user identifiers from legacy clients. Deprecated migration shim.",
    )
    TOKEN_TTL_SECONDS: int = Field(
        default=DEFAULT_TOKEN_TTL_SECONDS,
        gt=0,
        description="Default token lifetime in seconds (30 days).",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )
