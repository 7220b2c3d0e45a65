# ABOUTME: Abstract key-value repository with version tokens and compare-and-set writes
# ABOUTME: Defines the backend contract the optimistic-concurrency document store relies on

from abc import ABC, abstractmethod
from typing import Any, Dict

from fittrack.models.storage.versioned_document import VersionedDocument, WriteResult


class AbstractVersionedRepository(ABC):
    """
    Abstract key-value repository that versions every stored value.

    The optimistic-concurrency protocol in `VersionedStore` is only as correct
    as the atomicity of `set_if_version`: the version check and the write must
    happen as one indivisible step in the backend. Implementations over a
    remote store must use that store's native conditional write (ETag
    preconditions, a version column in a transaction, etc.); no extra locking
    is layered on top by callers.
    """

    @abstractmethod
    async def get_with_version(self, key: str) -> VersionedDocument | None:
        """
        Read a value together with its current version.

        Args:
            key: The document key.

        Returns:
            The stored document, or None when nothing is stored under ``key``.

        Raises:
            StorageError: If the backend fails.
        """
        pass

    @abstractmethod
    async def set_if_version(
        self,
        key: str,
        data: Dict[str, Any],
        expected_version: str | None = None,
        *,
        only_if_new: bool = False,
    ) -> WriteResult:
        """
        Write ``data`` under ``key`` if the version predicate holds.

        - ``expected_version`` given: commit only if the current version equals it.
        - ``only_if_new``: commit only if nothing is stored under ``key``.
        - neither: unconditional write, always commits.

        Every committed write produces a new version. A failed predicate leaves
        the stored value untouched and returns ``committed=False``.

        Raises:
            StorageError: If the backend fails.
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """
        Remove the value stored under ``key``.

        Returns:
            True if a value was removed, False if none existed.
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources. Further operations raise `StorageError`."""
        pass
