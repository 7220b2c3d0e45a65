# ABOUTME: Optimistic-concurrency document store over a versioned key-value repository
# ABOUTME: Runs the read, transform, recompute and conditional-commit cycle for per-user documents

import copy
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, TypeVar

from loguru import logger

from fittrack.exceptions import DataNotFoundException, StorageError, ValidationException
from fittrack.interfaces.storage.versioned_repository import AbstractVersionedRepository
from fittrack.models.storage.versioned_document import (
    MutationOutcome,
    MutationResult,
    VersionedDocument,
    WriteResult,
)

from .collections import DocumentCollection

T = TypeVar("T")

Transform = Callable[[Dict[str, Any]], Dict[str, Any]]


class VersionedStore:
    """
    Read-modify-write access to one collection of per-user documents.

    `mutate` is the single write path used for appending, replacing and
    deleting records as well as replacing whole documents:

    1. Read the document and its version. A missing document is replaced by
       the collection default and has no version.
    2. Apply the transform to a private copy. A transform raising
       `DataNotFoundException` ends the cycle with ``NOT_FOUND``.
    3. Recompute every aggregate of the collection from the whole document.
    4. Commit with a version predicate: the caller's ``if_match`` when given,
       otherwise the version read in step 1. A document that did not exist is
       committed create-only, so the first writer wins.
    5. A failed predicate is reported as ``CONFLICT``.

    There is no retry. On conflict the caller re-reads and resubmits;
    retrying on its own behalf could discard a concurrent writer's edit.

    Atomicity of step 4 belongs entirely to the repository. This class takes
    no locks of its own.
    """

    def __init__(self, repository: AbstractVersionedRepository, collection: DocumentCollection):
        self.repository = repository
        self.collection = collection
        self._logger = logger.bind(name=__name__, collection=collection.name)

    def key_for(self, user_id: str) -> str:
        return self.collection.key_for(user_id)

    async def _backend(self, operation: str, key: str, call: Awaitable[T]) -> T:
        """Await a repository call, surfacing every failure as `StorageError`."""
        try:
            return await call
        except StorageError as e:
            self._logger.bind(key=key, operation=operation, code=e.code).error(f"Storage error: {e.message}")
            raise
        except Exception as e:
            self._logger.bind(key=key, operation=operation).error(f"Storage backend failure: {e!r}")
            raise StorageError(
                "Document storage unavailable",
                code="BACKEND_FAILURE",
                details={"key": key, "operation": operation, "error": str(e)},
            ) from e

    async def read_with_version(self, key: str) -> Optional[VersionedDocument]:
        """Stored document and version, or None when the document does not exist yet."""
        return await self._backend("read", key, self.repository.get_with_version(key))

    async def read_or_default(self, key: str) -> Tuple[Dict[str, Any], Optional[str]]:
        """
        Document data with aggregates recomputed, plus its version.

        Returns the collection default and a None version for documents that
        were never written.
        """
        current = await self.read_with_version(key)
        if current is None:
            return self.collection.default_factory(), None

        data = current.data
        if self.collection.recompute is not None:
            data = self.collection.recompute(data)
        return data, current.version

    async def write_if_version(
        self, key: str, data: Dict[str, Any], expected_version: Optional[str] = None
    ) -> WriteResult:
        """
        Raw conditional write. ``expected_version=None`` is an unconditional
        last-writer-wins write that always commits.
        """
        return await self._backend(
            "write", key, self.repository.set_if_version(key, data, expected_version)
        )

    async def delete(self, key: str) -> bool:
        return await self._backend("delete", key, self.repository.delete(key))

    async def mutate(
        self,
        key: str,
        transform: Transform,
        *,
        if_match: Optional[str] = None,
        unconditional: bool = False,
    ) -> MutationResult:
        """
        Apply ``transform`` to the document under ``key`` and commit it.

        Args:
            key: Document key.
            transform: Receives a private copy of the current (or default)
                document and returns the new document.
            if_match: Version the caller last saw, typically an etag sent back
                by a client. The commit only succeeds while the stored version
                still equals it.
            unconditional: Commit last-writer-wins when no ``if_match`` is
                given. Reserved for bulk replace and import flows.

        Returns:
            MutationResult: ``OK`` with the committed document, ``CONFLICT``,
            or ``NOT_FOUND``.

        Raises:
            StorageError: If the repository fails.
            ValidationException: If the transform does not return an object.
        """
        current = await self.read_with_version(key)

        if if_match is not None and (current is None or current.version != if_match):
            self._logger.bind(key=key, if_match=if_match).info("Version conflict: document changed before write")
            return MutationResult(
                outcome=MutationOutcome.CONFLICT,
                key=key,
                error="Document was modified by another request",
            )

        data = copy.deepcopy(current.data) if current is not None else self.collection.default_factory()
        try:
            mutated = transform(data)
        except DataNotFoundException as e:
            self._logger.bind(key=key).info(f"Mutation target not found: {e.message}")
            return MutationResult(outcome=MutationOutcome.NOT_FOUND, key=key, error=e.message)

        if not isinstance(mutated, dict):
            raise ValidationException("Document transform must return an object", code="INVALID_DOCUMENT")
        if self.collection.recompute is not None:
            mutated = self.collection.recompute(mutated)

        expected_version: Optional[str] = None
        only_if_new = False
        if if_match is not None:
            expected_version = if_match
        elif not unconditional:
            if current is None:
                only_if_new = True
            else:
                expected_version = current.version

        result = await self._backend(
            "write",
            key,
            self.repository.set_if_version(key, mutated, expected_version, only_if_new=only_if_new),
        )
        if not result.committed:
            self._logger.bind(key=key, expected_version=expected_version).info(
                "Version conflict: concurrent write committed first"
            )
            return MutationResult(
                outcome=MutationOutcome.CONFLICT,
                key=key,
                error="Document was modified by another request",
            )

        document = VersionedDocument(data=mutated, version=result.version, last_modified=result.last_modified)
        self._logger.bind(key=key, version=result.version).debug("Document committed")
        return MutationResult(outcome=MutationOutcome.OK, key=key, document=document, created=current is None)
