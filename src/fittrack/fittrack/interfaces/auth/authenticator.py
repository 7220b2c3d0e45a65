# ABOUTME: Abstract authenticator interface for resolving request identities
# ABOUTME: Defines the contract for components that extract and validate request credentials

from abc import ABC, abstractmethod

from fittrack.models.auth.auth_request import AuthRequest
from fittrack.models.auth.identity import AuthenticatedIdentity


class AbstractAuthenticator(ABC):
    """
    Abstract authenticator for validating incoming requests.

    This abstract class defines the contract for components responsible for
    determining the identity of the user making a request. It extracts
    credentials from the request (e.g., HTTP headers) and typically uses an
    `AbstractTokenManager` to verify them.
    """

    @abstractmethod
    async def authenticate(self, request: AuthRequest) -> AuthenticatedIdentity:
        """
        Authenticates an incoming request and returns the caller's identity.

        Args:
            request (AuthRequest): The incoming request to be authenticated.

        Returns:
            AuthenticatedIdentity: The resolved user identity and where it came from.

        Raises:
            AuthenticationException: If authentication fails due to missing
                                     credentials, a malformed or forged token,
                                     or an expired token.
        """
        pass
