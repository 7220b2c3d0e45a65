# ABOUTME: Abstract rate limiter interface for per-identifier request throttling
# ABOUTME: Defines the contract for sliding-window limiters keyed by arbitrary identifiers

from abc import abstractmethod, ABC

from fittrack.models.common.rate_limit import RateLimitDecision


class AbstractRateLimiter(ABC):
    """
    Abstract base class for request rate limiting.

    Concrete implementations count requests per identifier (a network address,
    a scope-prefixed address, a user id) over a trailing window. The in-process
    implementation keeps its state locally; a distributed backend can be
    swapped in behind this interface without touching call sites.
    """

    @abstractmethod
    async def check(
        self, identifier: str, window_ms: int | None = None, max_requests: int | None = None
    ) -> RateLimitDecision:
        """
        Record a request for ``identifier`` if the window has room.

        Args:
            identifier: Key the window is tracked under.
            window_ms: Window length in milliseconds; implementation default when omitted.
            max_requests: Requests admitted per window; implementation default when omitted.

        Returns:
            RateLimitDecision: ``allowed`` with ``remaining`` quota, or rejected
            with ``reset_time``. Rejected attempts are not recorded.

        Raises:
            ValueError: If ``window_ms`` or ``max_requests`` is not positive.
        """
        pass

    @abstractmethod
    async def reset(self, identifier: str | None = None) -> None:
        """
        Forget recorded requests for one identifier, or for all when omitted.
        """
        pass

    async def close(self) -> None:
        """Release resources held by the limiter."""
        return None
