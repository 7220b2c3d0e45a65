# ABOUTME: Request authenticator resolving caller identity from signed HMAC tokens
# ABOUTME: Applies credential precedence and the opt-in deprecated unsigned identity fallback

import json
from typing import Optional, Tuple

from loguru import logger

from fittrack.exceptions.base import AuthenticationException
from fittrack.interfaces.auth.authenticator import AbstractAuthenticator
from fittrack.interfaces.auth.token_manager import AbstractTokenManager
from fittrack.models.auth.auth_request import AuthRequest
from fittrack.models.auth.enum import AuthFailureReason, CredentialSource
from fittrack.models.auth.identity import AuthenticatedIdentity

from .utils import extract_bearer_token

TOKEN_HEADER = "x-user-token"
LEGACY_USER_HEADER = "x-user-id"
LEGACY_BODY_FIELD = "userId"


class HmacRequestAuthenticator(AbstractAuthenticator):
    """
    Resolves the caller identity of a request.

    Credential precedence, first match wins:

    1. ``Authorization: Bearer <token>``
    2. ``x-user-token: <token>``
    3. ``x-user-id`` header (legacy, unsigned)
    4. ``userId`` field of a JSON body (legacy, unsigned)

    Carriers 3 and 4 are consulted only when ``allow_legacy`` is set. They
    trust client-controlled input and exist solely as a migration shim for
    clients that predate signed tokens; every use is logged as deprecated.

    A token that is presented but fails verification ends authentication
    immediately. It never falls through to a lower-precedence carrier.
    """

    def __init__(self, token_manager: AbstractTokenManager, allow_legacy: bool = False):
        """
        Initialize the authenticator.

        Args:
            token_manager: Verifies presented tokens.
            allow_legacy: Accept unsigned identities from legacy carriers.
        """
        self.token_manager = token_manager
        self.allow_legacy = allow_legacy
        self._logger = logger.bind(name=__name__)

        if allow_legacy:
            self._logger.warning("DEPRECATED: legacy unsigned user identity fallback is enabled")

    @classmethod
    def from_settings(cls, token_manager: AbstractTokenManager, settings=None) -> "HmacRequestAuthenticator":
        """Build an authenticator honouring ``ALLOW_LEGACY_AUTH``."""
        if settings is None:
            from fittrack.config.settings import get_settings

            settings = get_settings()
        return cls(token_manager, allow_legacy=settings.ALLOW_LEGACY_AUTH)

    async def authenticate(self, request: AuthRequest) -> AuthenticatedIdentity:
        token, source = self._find_token(request)
        if token is not None:
            return self._authenticate_token(token, source)

        if self.allow_legacy:
            identity = self._legacy_identity(request)
            if identity is not None:
                return identity

        self._logger.warning("Authentication failed: no credentials presented")
        raise AuthenticationException("Authentication required", code=AuthFailureReason.MISSING.value)

    def _find_token(self, request: AuthRequest) -> Tuple[Optional[str], Optional[CredentialSource]]:
        bearer = extract_bearer_token(request.get_header("Authorization"))
        if bearer is not None:
            return bearer, CredentialSource.BEARER

        header_token = request.get_header(TOKEN_HEADER)
        if header_token:
            return header_token, CredentialSource.TOKEN_HEADER

        return None, None

    def _authenticate_token(self, token: str, source: CredentialSource) -> AuthenticatedIdentity:
        verification = self.token_manager.verify_token(token)
        if not verification.valid:
            reason = verification.reason or AuthFailureReason.MALFORMED
            self._logger.bind(source=source.value, reason=reason.value).warning(
                f"Authentication failed: {verification.error}"
            )
            raise AuthenticationException(
                verification.error or "Invalid token",
                code=reason.value,
                details={"source": source.value, "expired": verification.expired},
            )

        self._logger.bind(user_id=verification.user_id, source=source.value).info("Authenticated user via token")
        return AuthenticatedIdentity(
            user_id=verification.user_id,
            source=source,
            expires_at_ms=verification.payload.expires_at_ms if verification.payload else None,
        )

    def _legacy_identity(self, request: AuthRequest) -> Optional[AuthenticatedIdentity]:
        user_id = request.get_header(LEGACY_USER_HEADER)
        source = CredentialSource.LEGACY_HEADER

        if not user_id:
            user_id = self._legacy_body_user_id(request.body)
            source = CredentialSource.LEGACY_BODY

        if not user_id:
            return None

        self._logger.bind(user_id=user_id, source=source.value).warning(
            "DEPRECATED: request authenticated with an unsigned user identifier"
        )
        return AuthenticatedIdentity(user_id=user_id, source=source)

    @staticmethod
    def _legacy_body_user_id(body: Optional[str]) -> Optional[str]:
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except (ValueError, RecursionError):
            # Unparseable bodies simply carry no legacy identity.
            return None
        if not isinstance(parsed, dict):
            return None
        user_id = parsed.get(LEGACY_BODY_FIELD)
        return user_id if isinstance(user_id, str) and user_id else None
