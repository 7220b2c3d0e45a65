# ABOUTME: Rate limit decision and policy models
# ABOUTME: Describes the outcome of a sliding-window check and named window presets

import math
import time
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RateLimitDecision(BaseModel):
    """
    Outcome of a single rate limiter check.

    Allowed decisions carry ``remaining`` quota; rejected ones carry
    ``reset_time``, the epoch-millisecond instant at which the window will
    admit a new request.
    """

    allowed: bool
    remaining: Optional[int] = Field(default=None, ge=0)
    reset_time: Optional[float] = Field(default=None, description="Epoch milliseconds")

    model_config = ConfigDict(frozen=True)

    def retry_after_seconds(self, now_ms: Optional[float] = None) -> int | None:
        """
        Whole seconds a rejected caller should wait, suitable for a ``Retry-After`` header.

        Returns None for allowed decisions and never less than 1 for rejected ones.
        """
        if self.allowed or self.reset_time is None:
            return None
        if now_ms is None:
            now_ms = time.time() * 1000
        return max(1, math.ceil((self.reset_time - now_ms) / 1000))


class RateLimitPolicy(BaseModel):
    """A sliding window: at most ``max_requests`` per ``window_ms``."""

    window_ms: int = Field(gt=0)
    max_requests: int = Field(gt=0)

    model_config = ConfigDict(frozen=True)


DEFAULT_POLICY = RateLimitPolicy(window_ms=60_000, max_requests=60)
# Token issuance: 10 per minute per address
AUTH_POLICY = RateLimitPolicy(window_ms=60_000, max_requests=10)
# Bulk data migration: 3 per hour per address
MIGRATION_POLICY = RateLimitPolicy(window_ms=3_600_000, max_requests=3)
