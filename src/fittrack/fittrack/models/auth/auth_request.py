from dataclasses import dataclass, field
from typing import Protocol


class AuthRequest(Protocol):
    """
    Protocol for framework-agnostic authentication requests.

    This protocol defines the minimal interface required for an incoming request
    object to be processed by an `AbstractAuthenticator` or the request guard.
    It abstracts away the hosting platform's event shape so the same security
    logic serves every handler.
    """

    def get_header(self, name: str) -> str | None:
        """
        Retrieves the value of a specific HTTP header from the request.

        Args:
            name: The name of the HTTP header to retrieve (case-insensitive).

        Returns:
            The string value of the header if found, otherwise `None`.
        """
        ...

    @property
    def body(self) -> str | None:
        """
        The raw request body, if any. Only read by the legacy identity fallback.
        """
        ...


@dataclass
class HttpRequest:
    """
    Plain implementation of `AuthRequest` built from a header mapping.

    Header names are matched case-insensitively, so platforms that lower-case
    headers and clients that send ``Authorization`` behave the same.
    """

    headers: dict[str, str] = field(default_factory=dict)
    body: str | None = None
    method: str = "GET"
    path: str = "/"

    def __post_init__(self) -> None:
        self._normalized = {name.lower(): value for name, value in self.headers.items()}

    def get_header(self, name: str) -> str | None:
        return self._normalized.get(name.lower())
