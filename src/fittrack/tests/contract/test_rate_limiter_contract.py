# ABOUTME: Contract tests for AbstractRateLimiter interface
# ABOUTME: Verifies all rate limiter implementations comply with the interface contract

from typing import List, Type

import pytest

from contract.base_contract_test import AsyncContractTestMixin, ContractTestBase
from fittrack.implementations.memory import InMemoryRateLimiter
from fittrack.implementations.noop import NoOpRateLimiter
from fittrack.interfaces.common.rate_limiter import AbstractRateLimiter
from fittrack.models.common.rate_limit import RateLimitDecision


class TestRateLimiterContract(ContractTestBase[AbstractRateLimiter], AsyncContractTestMixin):
    """Contract tests for AbstractRateLimiter interface."""

    @property
    def interface_class(self) -> Type[AbstractRateLimiter]:
        return AbstractRateLimiter

    @property
    def implementations(self) -> List[Type[AbstractRateLimiter]]:
        return [InMemoryRateLimiter, NoOpRateLimiter]

    @pytest.mark.contract
    @pytest.mark.asyncio
    async def test_check_returns_decision(self):
        for impl_class in self.implementations:
            limiter = impl_class()

            decision = await limiter.check("default:203.0.113.1", 60_000, 3)

            assert isinstance(decision, RateLimitDecision), f"{impl_class.__name__}.check should return a decision"
            assert decision.allowed, f"{impl_class.__name__} should admit the first request"
            assert decision.remaining is not None and 0 <= decision.remaining <= 3
            await limiter.close()

    @pytest.mark.contract
    @pytest.mark.asyncio
    async def test_check_uses_defaults_when_omitted(self):
        for impl_class in self.implementations:
            limiter = impl_class()

            decision = await limiter.check("default:203.0.113.1")

            assert isinstance(decision, RateLimitDecision)
            await limiter.close()

    @pytest.mark.contract
    @pytest.mark.asyncio
    async def test_rejections_carry_reset_time(self):
        for impl_class in self.implementations:
            limiter = impl_class()

            decisions = [await limiter.check("default:203.0.113.1", 60_000, 2) for _ in range(4)]

            for decision in decisions:
                if not decision.allowed:
                    assert decision.reset_time is not None, f"{impl_class.__name__} rejection without reset_time"
                    assert decision.retry_after_seconds() >= 1
            await limiter.close()

    @pytest.mark.contract
    @pytest.mark.asyncio
    async def test_reset_is_safe_for_unknown_identifiers(self):
        for impl_class in self.implementations:
            limiter = impl_class()

            await limiter.reset("never-seen")
            await limiter.reset()
            await limiter.close()
