# ABOUTME: Versioned document, write result and mutation result models
# ABOUTME: Carries opaque version tokens (etags) between the repository, the store and callers

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from fittrack.exceptions import DataNotFoundException, VersionConflictException


class VersionedDocument(BaseModel):
    """
    A stored JSON document together with the version it was read at.

    ``version`` is assigned by the repository on every successful write and
    changes on every write, so it identifies the exact stored content.
    """

    data: Dict[str, Any]
    version: str = Field(min_length=1, description="Opaque version token, surfaced to clients as an etag")
    last_modified: datetime

    @property
    def etag(self) -> str:
        return self.version


class WriteResult(BaseModel):
    """
    Result of a conditional write.

    ``committed=False`` means the version predicate failed and the stored
    value was left untouched.
    """

    committed: bool
    version: Optional[str] = None
    last_modified: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


class MutationOutcome(str, Enum):
    """Outcome of one read-transform-write cycle."""

    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"


class MutationResult(BaseModel):
    """
    Result of `VersionedStore.mutate`.

    Conflict and not-found are ordinary outcomes, not failures: the calling
    layer decides whether to re-read and resubmit or report to the end user.
    """

    outcome: MutationOutcome
    key: str
    document: Optional[VersionedDocument] = Field(default=None, description="Committed document on success")
    created: bool = Field(default=False, description="True when this write created the document")
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is MutationOutcome.OK

    @property
    def etag(self) -> Optional[str]:
        return self.document.version if self.document else None

    def raise_for_outcome(self) -> VersionedDocument:
        """
        Return the committed document, or raise for callers that prefer exceptions.

        Raises:
            VersionConflictException: If the commit lost an optimistic-concurrency race.
            DataNotFoundException: If the transformation targeted a missing record.
        """
        if self.outcome is MutationOutcome.CONFLICT:
            raise VersionConflictException(
                self.error or "Document was modified concurrently", code="VERSION_CONFLICT", details={"key": self.key}
            )
        if self.outcome is MutationOutcome.NOT_FOUND:
            raise DataNotFoundException(self.error or "Record not found", code="NOT_FOUND", details={"key": self.key})
        return self.document
