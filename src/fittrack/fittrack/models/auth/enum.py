from enum import Enum


class AuthFailureReason(str, Enum):
    """
    Why a credential was rejected.

    Values double as ``AuthenticationException.code``.
    """

    MISSING = "missing"
    MALFORMED = "malformed"
    BAD_SIGNATURE = "bad_signature"
    EXPIRED = "expired"


class CredentialSource(str, Enum):
    """
    Where an authenticated identity was taken from, in precedence order.
    """

    BEARER = "bearer"
    TOKEN_HEADER = "token_header"
    LEGACY_HEADER = "legacy_header"
    LEGACY_BODY = "legacy_body"

    @property
    def is_legacy(self) -> bool:
        """Unsigned sources accepted only while the legacy fallback is enabled."""
        return self in (CredentialSource.LEGACY_HEADER, CredentialSource.LEGACY_BODY)
