# ABOUTME: In-memory common implementations
# ABOUTME: Exports the sliding-window rate limiter

from .rate_limiter import InMemoryRateLimiter, SlidingWindow

__all__ = ["InMemoryRateLimiter", "SlidingWindow"]
