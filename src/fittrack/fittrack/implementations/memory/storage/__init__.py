# ABOUTME: In-memory storage implementations
# ABOUTME: Exports the versioned key-value repository

from .versioned_repository import InMemoryVersionedRepository

__all__ = ["InMemoryVersionedRepository"]
