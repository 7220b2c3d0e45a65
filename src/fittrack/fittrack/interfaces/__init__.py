# ABOUTME: Core interfaces package exports
# ABOUTME: Exports abstract interfaces for authentication, rate limiting and storage

# Authentication interfaces
from .auth import AbstractAuthenticator, AbstractTokenManager

# Common interfaces
from .common import AbstractRateLimiter

# Storage interfaces
from .storage import AbstractVersionedRepository

__all__ = [
    # Authentication
    "AbstractAuthenticator",
    "AbstractTokenManager",
    # Common
    "AbstractRateLimiter",
    # Storage
    "AbstractVersionedRepository",
]
