# ABOUTME: NoOp implementation of AbstractRateLimiter that always allows requests
# ABOUTME: Stands in where rate limiting is handled upstream or deliberately disabled

from fittrack.interfaces.common.rate_limiter import AbstractRateLimiter
from fittrack.models.common.rate_limit import RateLimitDecision


class NoOpRateLimiter(AbstractRateLimiter):
    """
    No-operation implementation of AbstractRateLimiter.

    Every check is admitted and nothing is recorded. Useful in tests, local
    development, and deployments where an edge proxy already enforces limits.
    ``remaining`` reports the requested ``max_requests`` when one is given.
    """

    async def check(
        self, identifier: str, window_ms: int | None = None, max_requests: int | None = None
    ) -> RateLimitDecision:
        return RateLimitDecision(allowed=True, remaining=max_requests)

    async def reset(self, identifier: str | None = None) -> None:
        return None
