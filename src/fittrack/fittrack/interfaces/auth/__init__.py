# ABOUTME: Authentication interfaces package exports
# ABOUTME: Exports abstract token manager and authenticator contracts

from .authenticator import AbstractAuthenticator
from .token_manager import AbstractTokenManager

__all__ = [
    "AbstractAuthenticator",
    "AbstractTokenManager",
]
