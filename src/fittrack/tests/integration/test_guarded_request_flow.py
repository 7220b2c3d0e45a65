# ABOUTME: Integration tests for a guarded request reaching the document store
# ABOUTME: Wires settings, token manager, authenticator, rate limiter, guard and store together

import json

import pytest
import pytest_asyncio
import time_machine

from fittrack.components.documents import USER_SETTINGS, WORKOUT_LOGS, VersionedStore, migrate_user_data, workout_logs
from fittrack.components.guard import RequestGuard, format_error_response, format_success_response
from fittrack.config import FitTrackSettings
from fittrack.exceptions import StorageError
from fittrack.implementations.hmac import HmacRequestAuthenticator, HmacTokenManager
from fittrack.implementations.memory import InMemoryRateLimiter, InMemoryVersionedRepository
from fittrack.models import CredentialSource, HttpRequest
from fittrack.models.common.outcome import RequestOutcome
from fittrack.models.common.rate_limit import AUTH_POLICY, MIGRATION_POLICY

NOW = 1_700_000_000
SECRET = "integration-signing-secret-0123456789"


@pytest.fixture
def settings() -> FitTrackSettings:
    return FitTrackSettings(
        USER_TOKEN_SECRET=SECRET,
        RATE_LIMIT_WINDOW_MS=60_000,
        RATE_LIMIT_MAX_REQUESTS=10,
        _env_file=None,
    )


@pytest_asyncio.fixture
async def app(settings):
    token_manager = HmacTokenManager.from_settings(settings)
    limiter = InMemoryRateLimiter.from_settings(settings)
    repository = InMemoryVersionedRepository.from_settings(settings)
    guard = RequestGuard(limiter, HmacRequestAuthenticator.from_settings(token_manager, settings))
    yield {
        "token_manager": token_manager,
        "guard": guard,
        "logs": VersionedStore(repository, WORKOUT_LOGS),
        "settings": VersionedStore(repository, USER_SETTINGS),
    }
    await limiter.close()
    await repository.close()


def client_request(token=None, ip="203.0.113.7", body=None, **headers):
    if token is not None:
        headers["authorization"] = f"Bearer {token}"
    return HttpRequest(headers={"x-forwarded-for": ip, **headers}, body=body, method="POST")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_new_user_logs_a_workout(app):
    issue = await app["guard"].check_rate_limit(client_request(), scope="auth", policy=AUTH_POLICY)
    assert issue.admitted
    user_id, token = app["token_manager"].create_new_user()

    decision = await app["guard"].admit(client_request(token))
    assert decision.admitted
    assert decision.identity.user_id == user_id

    store = app["logs"]
    result = await store.mutate(
        store.key_for(decision.identity.user_id),
        workout_logs.append_workout({"id": "w1", "date": "2024-01-01", "duration_minutes": 42}),
    )
    body = format_success_response(
        {"success": True, "etag": result.etag, "statistics": result.document.data["statistics"]},
        correlation_id=decision.correlation_id,
    )

    assert body["statistics"]["total_time"] == 42
    assert body["correlationId"] == decision.correlation_id


@pytest.mark.integration
@pytest.mark.asyncio
async def test_forged_token_never_reaches_store(app):
    _, token = app["token_manager"].create_new_user()
    payload, signature = token.split(".")
    forged = f"{payload}.{'0' * len(signature)}"

    decision = await app["guard"].admit(client_request(forged))

    assert decision.outcome is RequestOutcome.UNAUTHENTICATED
    assert decision.reason == "bad_signature"
    assert decision.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_legacy_identity_rejected_by_default(app):
    decision = await app["guard"].admit(client_request(body=json.dumps({"userId": "legacy-user"})))

    assert decision.outcome is RequestOutcome.UNAUTHENTICATED
    assert decision.reason == "missing"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_legacy_identity_when_enabled(settings):
    legacy_settings = settings.model_copy(update={"ALLOW_LEGACY_AUTH": True})
    token_manager = HmacTokenManager.from_settings(legacy_settings)
    guard = RequestGuard(
        InMemoryRateLimiter.from_settings(legacy_settings),
        HmacRequestAuthenticator.from_settings(token_manager, legacy_settings),
    )

    decision = await guard.admit(client_request(**{"x-user-id": "legacy-user"}))

    assert decision.admitted
    assert decision.identity.source is CredentialSource.LEGACY_HEADER
    assert decision.identity.is_legacy


@pytest.mark.integration
@pytest.mark.asyncio
async def test_migration_is_rate_limited_per_client(app):
    _, token = app["token_manager"].create_new_user()

    with time_machine.travel(NOW, tick=False):
        outcomes = [
            (await app["guard"].admit(client_request(token), scope="migration", policy=MIGRATION_POLICY)).outcome
            for _ in range(MIGRATION_POLICY.max_requests + 1)
        ]
        other_scope = await app["guard"].admit(client_request(token))

    assert outcomes[:-1] == [RequestOutcome.OK] * MIGRATION_POLICY.max_requests
    assert outcomes[-1] is RequestOutcome.RATE_LIMITED
    assert other_scope.admitted


@pytest.mark.integration
@pytest.mark.asyncio
async def test_migration_after_admission(app):
    user_id, token = app["token_manager"].create_new_user()
    decision = await app["guard"].admit(client_request(token), scope="migration", policy=MIGRATION_POLICY)

    report = await migrate_user_data(
        app["settings"],
        app["logs"],
        decision.identity.user_id,
        local_settings={"preferences": {"theme": "dark"}},
        local_logs={"workouts": [{"id": "w1", "date": "2024-01-01", "duration_minutes": 20}]},
    )

    assert report.user_id == user_id
    assert report.settings.migrated and report.workout_logs.migrated
    data, version = await app["logs"].read_or_default(app["logs"].key_for(user_id))
    assert version == report.workout_logs.etag
    assert data["statistics"]["total_workouts"] == 1


@pytest.mark.integration
@pytest.mark.asyncio
async def test_storage_failure_becomes_generic_response(app):
    repository = app["logs"].repository
    await repository.close()

    with pytest.raises(StorageError) as exc_info:
        await app["logs"].mutate("logs-u1", workout_logs.append_workout({"id": "w1"}))

    body = format_error_response(exc_info.value, "Failed to save workout", correlation_id="c-1")
    assert body["message"] == "A storage error occurred. Please try again later."
    assert "closed" not in body["message"]
