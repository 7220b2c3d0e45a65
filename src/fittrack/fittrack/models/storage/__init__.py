# ABOUTME: Storage models package exports
# ABOUTME: Exports versioned document, write result and mutation result models

from .versioned_document import VersionedDocument, WriteResult, MutationOutcome, MutationResult

__all__ = [
    "VersionedDocument",
    "WriteResult",
    "MutationOutcome",
    "MutationResult",
]
