# ABOUTME: Storage interfaces package exports
# ABOUTME: Exports the versioned key-value repository contract

from .versioned_repository import AbstractVersionedRepository

__all__ = [
    "AbstractVersionedRepository",
]
