# ABOUTME: pytest configuration and shared fixtures for FitTrack tests
# ABOUTME: Configures per-marker timeouts and provides token, storage and log-capture fixtures

from typing import List

import pytest
import pytest_asyncio
from loguru import logger

from fittrack.components.documents import USER_SETTINGS, WORKOUT_LOGS, VersionedStore
from fittrack.implementations.hmac import HmacRequestAuthenticator, HmacTokenManager
from fittrack.implementations.memory import InMemoryRateLimiter, InMemoryVersionedRepository

TEST_SECRET = "test-signing-secret-0123456789abcdef"


def pytest_configure(config):
    """Configure pytest for FitTrack tests."""
    config.addinivalue_line("markers", "unit: Unit tests with 20-second timeout")
    config.addinivalue_line("markers", "integration: Integration tests with 60-second timeout")
    config.addinivalue_line("markers", "contract: Contract tests with 60-second timeout")
    config.addinivalue_line("markers", "config: Configuration tests")


def pytest_collection_modifyitems(config, items):
    """Add timeouts based on test type unless a test sets its own."""
    for item in items:
        if item.get_closest_marker("timeout"):
            continue

        if item.get_closest_marker("unit"):
            item.add_marker(pytest.mark.timeout(20))
        elif any(item.get_closest_marker(mark) for mark in ["integration", "contract"]):
            item.add_marker(pytest.mark.timeout(60))


@pytest.fixture
def token_manager() -> HmacTokenManager:
    return HmacTokenManager(TEST_SECRET)


@pytest.fixture
def authenticator(token_manager) -> HmacRequestAuthenticator:
    return HmacRequestAuthenticator(token_manager)


@pytest.fixture
def legacy_authenticator(token_manager) -> HmacRequestAuthenticator:
    return HmacRequestAuthenticator(token_manager, allow_legacy=True)


@pytest_asyncio.fixture
async def rate_limiter():
    limiter = InMemoryRateLimiter(window_ms=60_000, max_requests=5)
    yield limiter
    await limiter.close()


@pytest_asyncio.fixture
async def repository():
    repo = InMemoryVersionedRepository()
    yield repo
    await repo.close()


@pytest.fixture
def logs_store(repository) -> VersionedStore:
    return VersionedStore(repository, WORKOUT_LOGS)


@pytest.fixture
def settings_store(repository) -> VersionedStore:
    return VersionedStore(repository, USER_SETTINGS)


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    records: List[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG", format="{message}")
    yield records
    logger.remove(handler_id)
