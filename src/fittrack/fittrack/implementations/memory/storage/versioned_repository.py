# ABOUTME: In-memory implementation of AbstractVersionedRepository
# ABOUTME: Provides lock-guarded key-value storage with per-write version tokens and compare-and-set

import copy
import threading
import uuid
from datetime import UTC, datetime
from typing import Any, Dict, Optional

from loguru import logger

from fittrack.exceptions import StorageError
from fittrack.interfaces.storage.versioned_repository import AbstractVersionedRepository
from fittrack.models.storage.versioned_document import VersionedDocument, WriteResult


class InMemoryVersionedRepository(AbstractVersionedRepository):
    """
    In-memory implementation of AbstractVersionedRepository.

    Every committed write stores a deep copy of the value under a fresh
    ``uuid4`` version, and reads hand out deep copies, so callers can never
    mutate stored state in place. The version check and the write in
    `set_if_version` run under one lock, which makes the compare-and-set
    atomic within this process.

    Features:
    - Compare-and-set writes on an opaque version token
    - Create-only writes (``only_if_new``)
    - Key count cap to bound memory
    - Thread-safe operations

    Note:
        All data is lost when the process exits. Use it for tests, local
        development and single-process deployments.
    """

    def __init__(self, max_keys: int = 10_000):
        """
        Initialize the repository.

        Args:
            max_keys: Maximum number of documents to hold.
        """
        self.max_keys = max_keys

        # key -> {"data", "version", "last_modified"}
        self._data: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()
        self._closed = False
        self._logger = logger.bind(name=__name__)

    @classmethod
    def from_settings(cls, settings=None) -> "InMemoryVersionedRepository":
        """Build a repository capped at ``STORAGE_MAX_KEYS``."""
        if settings is None:
            from fittrack.config.settings import get_settings

            settings = get_settings()
        return cls(max_keys=settings.STORAGE_MAX_KEYS)

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError("Repository is closed", code="REPOSITORY_CLOSED")

    @staticmethod
    def _check_key(key: str) -> None:
        if not isinstance(key, str) or not key:
            raise StorageError("Key must be a non-empty string", code="INVALID_KEY")

    async def get_with_version(self, key: str) -> VersionedDocument | None:
        self._check_open()
        self._check_key(key)

        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            return VersionedDocument(
                data=copy.deepcopy(entry["data"]),
                version=entry["version"],
                last_modified=entry["last_modified"],
            )

    async def set_if_version(
        self,
        key: str,
        data: Dict[str, Any],
        expected_version: str | None = None,
        *,
        only_if_new: bool = False,
    ) -> WriteResult:
        self._check_open()
        self._check_key(key)

        if not isinstance(data, dict):
            raise StorageError("Value must be a dictionary", code="INVALID_VALUE")

        with self._lock:
            current: Optional[Dict[str, Any]] = self._data.get(key)

            if only_if_new and current is not None:
                return WriteResult(committed=False)
            if expected_version is not None and (current is None or current["version"] != expected_version):
                return WriteResult(committed=False)

            if current is None and len(self._data) >= self.max_keys:
                raise StorageError(
                    f"Maximum keys limit ({self.max_keys}) exceeded",
                    code="STORAGE_LIMIT_EXCEEDED",
                    details={"key": key},
                )

            version = uuid.uuid4().hex
            last_modified = datetime.now(UTC)
            self._data[key] = {"data": copy.deepcopy(data), "version": version, "last_modified": last_modified}

        self._logger.bind(key=key, version=version).debug("Committed document write")
        return WriteResult(committed=True, version=version, last_modified=last_modified)

    async def delete(self, key: str) -> bool:
        self._check_open()
        self._check_key(key)

        with self._lock:
            return self._data.pop(key, None) is not None

    async def count(self) -> int:
        """Number of stored documents."""
        self._check_open()
        with self._lock:
            return len(self._data)

    async def close(self) -> None:
        """Close the repository and drop all stored documents."""
        with self._lock:
            self._closed = True
            self._data.clear()
