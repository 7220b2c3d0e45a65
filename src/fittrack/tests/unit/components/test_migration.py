# ABOUTME: Unit tests for device data migration
# ABOUTME: Tests merging local settings and workout logs into new and existing documents

import pytest

from fittrack.components.documents import migrate_user_data, workout_logs
from fittrack.models.storage.versioned_document import MutationOutcome


def make_workout(workout_id, day):
    return {"id": workout_id, "date": day, "duration_minutes": 30, "exercises": []}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_nothing_to_migrate(settings_store, logs_store):
    report = await migrate_user_data(settings_store, logs_store, "u1")

    assert report.settings.migrated is False
    assert report.workout_logs.migrated is False
    assert report.has_conflict is False
    assert await logs_store.read_with_version("logs-u1") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_migrate_into_new_user(settings_store, logs_store):
    local_settings = {"preferences": {"theme": "dark"}, "equipment_settings": {"EQ-A": {}, "EQ-B": {}}}
    local_logs = {"workouts": [make_workout("w1", "2024-01-01"), make_workout("w2", "2024-02-01")]}

    report = await migrate_user_data(settings_store, logs_store, "u1", local_settings, local_logs)

    assert report.settings.migrated is True
    assert report.settings.had_existing_data is False
    assert report.settings.item_count == 2
    assert report.workout_logs.migrated is True
    assert report.workout_logs.item_count == 2
    # Starter templates of the default document are kept.
    assert report.workout_logs.templates_count == len(workout_logs.DEFAULT_TEMPLATES)

    stored_logs = await logs_store.read_with_version("logs-u1")
    assert stored_logs.version == report.workout_logs.etag
    assert [w["id"] for w in stored_logs.data["workouts"]] == ["w2", "w1"]
    assert stored_logs.data["statistics"]["total_workouts"] == 2

    stored_settings = await settings_store.read_with_version("settings-u1")
    assert stored_settings.data["preferences"]["theme"] == "dark"
    assert stored_settings.data["preferences"]["auto_save"] is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_migrate_into_existing_user(settings_store, logs_store):
    await logs_store.mutate("logs-u1", workout_logs.append_workout(make_workout("w1", "2024-01-01")))
    local_logs = {"workouts": [make_workout("w1", "2024-01-01"), make_workout("w3", "2024-03-01")]}

    report = await migrate_user_data(settings_store, logs_store, "u1", local_logs=local_logs)

    assert report.workout_logs.had_existing_data is True
    assert report.workout_logs.item_count == 2
    assert report.workout_logs.outcome is MutationOutcome.OK
    assert report.settings.outcome is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_completion_is_logged(settings_store, logs_store, log_records):
    await migrate_user_data(settings_store, logs_store, "u1", local_logs={"workouts": [make_workout("w1", "2024-01-01")]})

    completed = [r for r in log_records if r["message"] == "Migration completed"]
    assert completed
    assert completed[0]["extra"]["total_workouts"] == 1
