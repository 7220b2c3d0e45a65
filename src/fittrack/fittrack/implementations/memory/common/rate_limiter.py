# ABOUTME: In-memory implementation of AbstractRateLimiter using a sliding window log
# ABOUTME: Provides thread-safe per-identifier request counting over a trailing time window

import threading
import time
from collections import deque
from typing import Deque, Dict, List, Optional

from loguru import logger

from fittrack.interfaces.common import AbstractRateLimiter
from fittrack.models.common.rate_limit import RateLimitDecision


def _now_ms() -> float:
    return time.time() * 1000


class SlidingWindow:
    """
    Ordered log of request timestamps for one identifier.

    Not thread-safe on its own; `InMemoryRateLimiter` serializes access.
    """

    def __init__(self, window_ms: int):
        self.window_ms = window_ms
        self.timestamps: Deque[float] = deque()

    def prune(self, now_ms: float) -> None:
        """Drop timestamps that fell out of the trailing window."""
        cutoff = now_ms - self.window_ms
        while self.timestamps and self.timestamps[0] <= cutoff:
            self.timestamps.popleft()

    def is_empty(self) -> bool:
        return not self.timestamps


class InMemoryRateLimiter(AbstractRateLimiter):
    """
    In-memory implementation of AbstractRateLimiter using a sliding window log.

    Each identifier keeps the timestamps of its admitted requests. On every
    check the log is pruned to the trailing window; a request is admitted while
    fewer than ``max_requests`` remain and is then recorded. Rejected attempts
    are never recorded, so a caller hammering a full window does not extend its
    own lockout.

    Scaling limit: state is process-local and lost on restart. When several
    processes serve the same traffic each enforces its own window, so the
    effective global limit is a loose bound, not an exact cap. A shared
    backend belongs behind `AbstractRateLimiter`, not inside this class.

    Memory grows with the number of distinct identifiers seen; `purge_idle`
    drops identifiers whose window has emptied.

    The limiter is meant to be created once per process and injected where
    requests are handled, then closed on shutdown.
    """

    def __init__(self, window_ms: int = 60_000, max_requests: int = 60):
        """
        Initialize the in-memory rate limiter.

        Args:
            window_ms: Default window length in milliseconds
            max_requests: Default number of requests admitted per window

        Raises:
            ValueError: If either default is not positive.
        """
        self._validate(window_ms, max_requests)
        self.window_ms = window_ms
        self.max_requests = max_requests

        self._windows: Dict[str, SlidingWindow] = {}
        self._lock = threading.Lock()
        self._logger = logger.bind(name=__name__)

    @classmethod
    def from_settings(cls, settings=None) -> "InMemoryRateLimiter":
        """Build a limiter from ``RATE_LIMIT_WINDOW_MS`` / ``RATE_LIMIT_MAX_REQUESTS``."""
        if settings is None:
            from fittrack.config.settings import get_settings

            settings = get_settings()
        return cls(window_ms=settings.RATE_LIMIT_WINDOW_MS, max_requests=settings.RATE_LIMIT_MAX_REQUESTS)

    @staticmethod
    def _validate(window_ms: int, max_requests: int) -> None:
        if window_ms <= 0:
            raise ValueError("Rate limit window must be positive")
        if max_requests <= 0:
            raise ValueError("Maximum requests per window must be positive")

    async def check(
        self, identifier: str, window_ms: int | None = None, max_requests: int | None = None
    ) -> RateLimitDecision:
        window_ms = self.window_ms if window_ms is None else window_ms
        max_requests = self.max_requests if max_requests is None else max_requests
        self._validate(window_ms, max_requests)

        now = _now_ms()
        with self._lock:
            window = self._windows.get(identifier)
            if window is None:
                window = SlidingWindow(window_ms)
                self._windows[identifier] = window
            window.window_ms = window_ms
            window.prune(now)

            count = len(window.timestamps)
            if count >= max_requests:
                reset_time = window.timestamps[0] + window_ms
                decision = RateLimitDecision(allowed=False, reset_time=reset_time)
            else:
                window.timestamps.append(now)
                decision = RateLimitDecision(allowed=True, remaining=max_requests - count - 1)

        if not decision.allowed:
            self._logger.bind(identifier=identifier, reset_time=decision.reset_time).warning("Rate limit exceeded")
        return decision

    async def reset(self, identifier: Optional[str] = None) -> None:
        with self._lock:
            if identifier is None:
                self._windows.clear()
            else:
                self._windows.pop(identifier, None)

    async def purge_idle(self) -> int:
        """
        Drop identifiers with no requests left in their window.

        Returns:
            Number of identifiers removed.
        """
        now = _now_ms()
        with self._lock:
            idle: List[str] = []
            for identifier, window in self._windows.items():
                window.prune(now)
                if window.is_empty():
                    idle.append(identifier)
            for identifier in idle:
                del self._windows[identifier]

        if idle:
            self._logger.debug(f"Purged {len(idle)} idle rate limit windows")
        return len(idle)

    @property
    def tracked_identifiers(self) -> int:
        """Number of identifiers currently holding a window."""
        with self._lock:
            return len(self._windows)

    async def close(self) -> None:
        """Drop all windows."""
        with self._lock:
            self._windows.clear()
