# ABOUTME: Document collection descriptors for the per-user JSON documents
# ABOUTME: Binds a key prefix to the default document and aggregate recomputation of each collection

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from . import user_settings, workout_logs


@dataclass(frozen=True)
class DocumentCollection:
    """
    One kind of per-user document.

    Attributes:
        name: Collection name, used in logs.
        key_prefix: Keys are ``"<key_prefix>-<user_id>"``.
        default_factory: Builds the document a user has before the first write.
        recompute: Rebuilds derived aggregate fields from the whole document.
            None for collections without aggregates.
    """

    name: str
    key_prefix: str
    default_factory: Callable[[], Dict[str, Any]]
    recompute: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    def key_for(self, user_id: str) -> str:
        return f"{self.key_prefix}-{user_id}"


WORKOUT_LOGS = DocumentCollection(
    name="workout-logs",
    key_prefix="logs",
    default_factory=workout_logs.default_workout_logs,
    recompute=workout_logs.recompute_statistics,
)

USER_SETTINGS = DocumentCollection(
    name="user-settings",
    key_prefix="settings",
    default_factory=user_settings.default_settings,
)
