# ABOUTME: Abstract token manager interface for stateless user token lifecycle
# ABOUTME: Defines the contract for components that issue, verify and refresh signed tokens

from abc import ABC, abstractmethod

from fittrack.models.auth.identity import TokenPayload, TokenVerification


class AbstractTokenManager(ABC):
    """
    Abstract token manager for signed, stateless user tokens.

    Implementations decide validity from the token alone (signature and
    expiry); there is no server-side session table, so tokens cannot be
    revoked individually. A refresh is a brand-new token, never an edit of an
    existing one.

    Note: Methods are synchronous. Signing and verification are pure CPU work
    with no I/O.
    """

    @abstractmethod
    def generate_token(self, user_id: str, ttl_seconds: int | None = None) -> str:
        """
        Issues a new signed token for ``user_id``.

        Args:
            user_id: The identity the token grants.
            ttl_seconds: Lifetime of the token. Implementations fall back to
                their configured default when omitted.

        Returns:
            str: The opaque token string handed to the client.

        Raises:
            ValidationException: If ``user_id`` is empty or not a string.
        """
        pass

    @abstractmethod
    def verify_token(self, token: str) -> TokenVerification:
        """
        Verifies a token without raising.

        Malformed input, bad signatures and expired tokens are all reported in
        the returned `TokenVerification`; expiry is only reported for tokens
        whose signature is valid.

        Args:
            token: The token string presented by the client.

        Returns:
            TokenVerification: ``valid=True`` with ``user_id`` on success.
        """
        pass

    @abstractmethod
    def validate_token(self, token: str) -> TokenPayload:
        """
        Verifies a token and returns its claims, raising on any failure.

        Args:
            token: The token string presented by the client.

        Returns:
            TokenPayload: The verified claims.

        Raises:
            AuthenticationException: With ``code`` set to the failure reason.
        """
        pass

    @abstractmethod
    def refresh_token(self, token: str) -> str:
        """
        Issues a fresh token for the identity carried by a still-valid token.

        Args:
            token: A currently valid token.

        Returns:
            str: A new token with a new expiry.

        Raises:
            AuthenticationException: If ``token`` is invalid or expired.
        """
        pass
