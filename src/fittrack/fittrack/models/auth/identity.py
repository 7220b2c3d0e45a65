# ABOUTME: Token payload, verification result and authenticated identity models
# ABOUTME: Immutable pydantic models passed between the token manager, authenticator and handlers

import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from .enum import AuthFailureReason, CredentialSource


class TokenPayload(BaseModel):
    """
    Claims carried by a signed user token.

    On the wire the payload is compact JSON ``{"userId": ..., "exp": ...}``
    with ``exp`` in epoch milliseconds.
    """

    user_id: StrictStr = Field(alias="userId", min_length=1, description="Identity the token was issued for")
    expires_at_ms: StrictInt = Field(alias="exp", description="Expiry instant in epoch milliseconds")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def is_expired(self, now_ms: Optional[float] = None) -> bool:
        """Check if the token has expired. A token is still valid at exactly ``exp``."""
        if now_ms is None:
            now_ms = time.time() * 1000
        return now_ms > self.expires_at_ms

    def time_until_expiry(self) -> float:
        """Get the time in seconds until the token expires."""
        return max(0.0, self.expires_at_ms / 1000 - time.time())


class TokenVerification(BaseModel):
    """
    Result of verifying a token string.

    Exactly one of two shapes: ``valid=True`` with ``user_id`` set, or
    ``valid=False`` with ``error`` and ``reason`` set. ``expired`` is only ever
    True for tokens whose signature checked out.
    """

    valid: bool
    user_id: Optional[str] = None
    expired: bool = False
    error: Optional[str] = None
    reason: Optional[AuthFailureReason] = None
    payload: Optional[TokenPayload] = Field(default=None, exclude=True)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def success(cls, payload: TokenPayload) -> "TokenVerification":
        return cls(valid=True, user_id=payload.user_id, payload=payload)

    @classmethod
    def failure(cls, reason: AuthFailureReason, error: str) -> "TokenVerification":
        return cls(valid=False, error=error, reason=reason, expired=reason is AuthFailureReason.EXPIRED)


class AuthenticatedIdentity(BaseModel):
    """
    The caller identity resolved for a request.
    """

    user_id: str = Field(min_length=1)
    source: CredentialSource
    expires_at_ms: Optional[int] = Field(default=None, description="Token expiry, None for legacy identities")

    model_config = ConfigDict(frozen=True)

    @property
    def is_legacy(self) -> bool:
        """True when the identity came from the deprecated unsigned fallback."""
        return self.source.is_legacy
