# ABOUTME: Migration of device-local settings and workout logs into the stored documents
# ABOUTME: Merges local data through the versioned store and reports what changed

from typing import Any, Dict, Optional

from loguru import logger
from pydantic import BaseModel, Field

from fittrack.models.storage.versioned_document import MutationOutcome

from . import user_settings, workout_logs
from .versioned_store import VersionedStore


class DocumentMigration(BaseModel):
    """What happened to one document during a migration."""

    migrated: bool = False
    had_existing_data: bool = False
    outcome: Optional[MutationOutcome] = None
    etag: Optional[str] = None
    item_count: int = Field(default=0, description="Equipment entries for settings, workouts for logs")
    templates_count: int = 0


class MigrationReport(BaseModel):
    user_id: str
    settings: DocumentMigration = Field(default_factory=DocumentMigration)
    workout_logs: DocumentMigration = Field(default_factory=DocumentMigration)

    @property
    def has_conflict(self) -> bool:
        return MutationOutcome.CONFLICT in (self.settings.outcome, self.workout_logs.outcome)


async def migrate_user_data(
    settings_store: VersionedStore,
    logs_store: VersionedStore,
    user_id: str,
    local_settings: Optional[Dict[str, Any]] = None,
    local_logs: Optional[Dict[str, Any]] = None,
) -> MigrationReport:
    """
    Merge data kept on a device into the user's stored documents.

    Each document goes through `VersionedStore.mutate` with the version it was
    read at, so a concurrent edit surfaces as a conflict outcome in the report
    rather than being overwritten. Local settings win per key; local workouts
    are added when their id is new.
    """
    log = logger.bind(name=__name__, user_id=user_id)
    report = MigrationReport(user_id=user_id)

    if local_settings:
        result = await settings_store.mutate(settings_store.key_for(user_id), user_settings.merge_into(local_settings))
        report.settings = DocumentMigration(
            migrated=result.ok,
            had_existing_data=result.ok and not result.created,
            outcome=result.outcome,
            etag=result.etag,
            item_count=len(result.document.data.get("equipment_settings") or {}) if result.ok else 0,
        )

    if local_logs:
        result = await logs_store.mutate(logs_store.key_for(user_id), workout_logs.merge_into(local_logs))
        report.workout_logs = DocumentMigration(
            migrated=result.ok,
            had_existing_data=result.ok and not result.created,
            outcome=result.outcome,
            etag=result.etag,
            item_count=len(result.document.data.get("workouts") or []) if result.ok else 0,
            templates_count=len(result.document.data.get("templates") or []) if result.ok else 0,
        )

    if report.has_conflict:
        log.warning("Migration finished with a version conflict")
    else:
        log.bind(
            settings_migrated=report.settings.migrated,
            workout_logs_migrated=report.workout_logs.migrated,
            total_workouts=report.workout_logs.item_count,
        ).info("Migration completed")
    return report
