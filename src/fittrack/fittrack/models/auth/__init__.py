# ABOUTME: Authentication models package exports
# ABOUTME: Exports request protocol, token payload, verification and identity models

from .auth_request import AuthRequest, HttpRequest
from .enum import AuthFailureReason, CredentialSource
from .identity import TokenPayload, TokenVerification, AuthenticatedIdentity

__all__ = [
    "AuthRequest",
    "HttpRequest",
    "AuthFailureReason",
    "CredentialSource",
    "TokenPayload",
    "TokenVerification",
    "AuthenticatedIdentity",
]
