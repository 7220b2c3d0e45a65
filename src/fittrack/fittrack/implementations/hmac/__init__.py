# ABOUTME: HMAC-signed token implementations package
# ABOUTME: Stateless authentication built on the standard library hmac module

from .auth import HmacRequestAuthenticator, HmacTokenManager

__all__ = [
    "HmacRequestAuthenticator",
    "HmacTokenManager",
]
