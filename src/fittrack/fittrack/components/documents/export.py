# ABOUTME: Full data export for one user
# ABOUTME: Reads the settings and workout log documents together and attaches summary metadata

from datetime import UTC, datetime
from typing import Any, Dict

from loguru import logger

from .versioned_store import VersionedStore
from .workout_logs import build_export_summary

EXPORT_FORMAT_VERSION = "2.0"


async def export_user_data(settings_store: VersionedStore, logs_store: VersionedStore, user_id: str) -> Dict[str, Any]:
    """
    Build the export document for ``user_id``.

    Documents that were never written are exported as their collection
    defaults. ``etags`` holds the version each document was read at, or None
    for defaults, so a client restoring the export can write back conditionally.

    Returns:
        Dict with ``version``, ``exported_at``, ``user_id``, ``settings``,
        ``workout_logs``, ``metadata`` (see `build_export_summary`) and ``etags``.

    Raises:
        StorageError: If either document cannot be read.
    """
    settings, settings_version = await settings_store.read_or_default(settings_store.key_for(user_id))
    logs, logs_version = await logs_store.read_or_default(logs_store.key_for(user_id))

    metadata = build_export_summary(logs)
    metadata["export_type"] = "complete"

    logger.bind(name=__name__, user_id=user_id, total_workouts=metadata["total_workouts"]).info("User data exported")
    return {
        "version": EXPORT_FORMAT_VERSION,
        "exported_at": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
        "user_id": user_id,
        "settings": settings,
        "workout_logs": logs,
        "metadata": metadata,
        "etags": {"settings": settings_version, "workout_logs": logs_version},
    }
