# ABOUTME: HMAC-SHA256 implementation of AbstractTokenManager for stateless user tokens
# ABOUTME: Issues base64(JSON claims).hex(signature) tokens and verifies them without server state

import base64
import binascii
import hmac
import json
import time
from typing import Tuple

from loguru import logger
from pydantic import SecretStr, ValidationError

from fittrack.config.security import DEFAULT_TOKEN_TTL_SECONDS, PLACEHOLDER_TOKEN_SECRET
from fittrack.exceptions.base import AuthenticationException, ConfigurationException, ValidationException
from fittrack.interfaces.auth.token_manager import AbstractTokenManager
from fittrack.models.auth.enum import AuthFailureReason
from fittrack.models.auth.identity import TokenPayload, TokenVerification

from .utils import (
    SIGNATURE_PATTERN,
    decode_payload_segment,
    encode_payload,
    generate_user_id,
    sign_payload,
)


class HmacTokenManager(AbstractTokenManager):
    """
    Stateless token manager signing user tokens with HMAC-SHA256.

    Token format: ``<base64(payload JSON)>.<hex(HMAC-SHA256(secret, payload JSON))>``
    where the payload is ``{"userId": <str>, "exp": <epoch ms>}``. The
    signature covers the exact decoded payload bytes.

    Verification order is fixed: structure, payload decoding, signature, then
    claims and expiry. A token with a bad signature is therefore never reported
    as expired, and nothing from an unauthenticated payload is trusted.

    Thread-safe: instances hold only the immutable signing key.
    """

    def __init__(self, secret: str | SecretStr | None, default_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS):
        """
        Initialize the token manager.

        Args:
            secret: HMAC signing key.
            default_ttl_seconds: Lifetime used when `generate_token` gets no TTL.

        Raises:
            ConfigurationException: If the secret is missing, left at its
                placeholder value, or the default TTL is not positive.
        """
        raw_secret = secret.get_secret_value() if isinstance(secret, SecretStr) else secret
        if not raw_secret:
            raise ConfigurationException(
                "USER_TOKEN_SECRET is required for token authentication",
                code="MISSING_SECRET",
            )
        if raw_secret == PLACEHOLDER_TOKEN_SECRET:
            raise ConfigurationException(
                "USER_TOKEN_SECRET is still set to the placeholder value",
                code="PLACEHOLDER_SECRET",
            )
        if default_ttl_seconds <= 0:
            raise ConfigurationException(
                "Token TTL must be positive",
                code="INVALID_TTL",
                details={"default_ttl_seconds": default_ttl_seconds},
            )

        self._key = raw_secret.encode("utf-8")
        self.default_ttl_seconds = default_ttl_seconds
        self._logger = logger.bind(name=__name__)

    @classmethod
    def from_settings(cls, settings=None) -> "HmacTokenManager":
        """Build a token manager from `FitTrackSettings` (the cached instance by default)."""
        if settings is None:
            from fittrack.config.settings import get_settings

            settings = get_settings()
        return cls(settings.USER_TOKEN_SECRET, default_ttl_seconds=settings.TOKEN_TTL_SECONDS)

    def generate_token(self, user_id: str, ttl_seconds: int | None = None) -> str:
        if not isinstance(user_id, str) or not user_id:
            raise ValidationException("User ID must be a non-empty string", code="INVALID_USER_ID")

        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            raise ValidationException("Token TTL must be positive", code="INVALID_TTL", details={"ttl_seconds": ttl})

        expires_at_ms = int(time.time() * 1000) + int(ttl * 1000)
        payload_bytes = encode_payload({"userId": user_id, "exp": expires_at_ms})
        signature = sign_payload(self._key, payload_bytes)

        self._logger.bind(user_id=user_id, expires_at_ms=expires_at_ms).debug("Issued user token")
        return base64.b64encode(payload_bytes).decode("ascii") + "." + signature.hex()

    def verify_token(self, token: str) -> TokenVerification:
        if not isinstance(token, str) or not token:
            return TokenVerification.failure(AuthFailureReason.MALFORMED, "Invalid token format")

        segments = token.split(".")
        if len(segments) != 2:
            return TokenVerification.failure(AuthFailureReason.MALFORMED, "Invalid token format")
        payload_segment, signature_segment = segments

        try:
            payload_bytes = decode_payload_segment(payload_segment)
            claims = json.loads(payload_bytes)
        except (binascii.Error, ValueError, RecursionError):
            return TokenVerification.failure(AuthFailureReason.MALFORMED, "Invalid token payload")

        expected = sign_payload(self._key, payload_bytes)
        supplied = bytes.fromhex(signature_segment) if SIGNATURE_PATTERN.fullmatch(signature_segment) else b""
        if not hmac.compare_digest(supplied, expected):
            return TokenVerification.failure(AuthFailureReason.BAD_SIGNATURE, "Invalid token signature")

        # Signed by us but possibly issued by an older build with different claims.
        try:
            payload = TokenPayload.model_validate(claims)
        except ValidationError:
            return TokenVerification.failure(AuthFailureReason.MALFORMED, "Invalid token payload")

        if payload.is_expired():
            return TokenVerification.failure(AuthFailureReason.EXPIRED, "Token expired")

        return TokenVerification.success(payload)

    def validate_token(self, token: str) -> TokenPayload:
        verification = self.verify_token(token)
        if not verification.valid:
            raise AuthenticationException(
                verification.error or "Invalid token",
                code=verification.reason.value if verification.reason else None,
                details={"expired": verification.expired},
            )
        return verification.payload

    def refresh_token(self, token: str) -> str:
        payload = self.validate_token(token)
        return self.generate_token(payload.user_id)

    def create_new_user(self) -> Tuple[str, str]:
        """
        Mint a fresh identity and its first token.

        Returns:
            Tuple of ``(user_id, token)``.
        """
        user_id = generate_user_id()
        token = self.generate_token(user_id)
        self._logger.bind(user_id=user_id).info("Created new user identity")
        return user_id, token
