# ABOUTME: Per-user document components
# ABOUTME: Exports the versioned store, collections, document transforms, migration and export

from .collections import USER_SETTINGS, WORKOUT_LOGS, DocumentCollection
from .export import export_user_data
from .migration import DocumentMigration, MigrationReport, migrate_user_data
from .versioned_store import VersionedStore

__all__ = [
    "DocumentCollection",
    "DocumentMigration",
    "MigrationReport",
    "USER_SETTINGS",
    "VersionedStore",
    "WORKOUT_LOGS",
    "export_user_data",
    "migrate_user_data",
]
