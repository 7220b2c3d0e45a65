# ABOUTME: Unit tests for NoOpRateLimiter
# ABOUTME: Verifies every request is admitted and nothing is tracked

import pytest

from fittrack.implementations.noop import NoOpRateLimiter


class TestNoOpRateLimiter:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_always_allows(self):
        limiter = NoOpRateLimiter()

        decisions = [await limiter.check("ip", 1000, 1) for _ in range(20)]

        assert all(d.allowed for d in decisions)
        assert all(d.reset_time is None for d in decisions)
        assert decisions[-1].retry_after_seconds() is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_reset_and_close_are_harmless(self):
        limiter = NoOpRateLimiter()

        await limiter.reset("ip")
        await limiter.reset()
        await limiter.close()

        assert (await limiter.check("ip")).allowed is True
