# ABOUTME: In-memory implementations package
# ABOUTME: Process-local implementations using Python standard library only

from .common.rate_limiter import InMemoryRateLimiter
from .storage.versioned_repository import InMemoryVersionedRepository

__all__ = [
    "InMemoryRateLimiter",
    "InMemoryVersionedRepository",
]
