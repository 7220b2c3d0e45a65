# ABOUTME: Common interfaces for cross-cutting concerns
# ABOUTME: Includes the rate limiting contract

from .rate_limiter import AbstractRateLimiter

__all__ = [
    "AbstractRateLimiter",
]
