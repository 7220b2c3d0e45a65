# ABOUTME: FitTrack implementations package exports
# ABOUTME: Contains concrete implementations of the core interfaces

"""
FitTrack Implementations

HMAC token authentication plus in-memory and no-op backends.
"""

from .hmac import HmacRequestAuthenticator, HmacTokenManager
from .memory import InMemoryRateLimiter, InMemoryVersionedRepository
from .noop import NoOpRateLimiter

__all__ = [
    "HmacRequestAuthenticator",
    "HmacTokenManager",
    "InMemoryRateLimiter",
    "InMemoryVersionedRepository",
    "NoOpRateLimiter",
]
