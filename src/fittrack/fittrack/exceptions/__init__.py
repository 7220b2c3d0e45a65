# ABOUTME: Exceptions package exports
# ABOUTME: Exports the FitTrack exception taxonomy

from fittrack.exceptions.base import (
    CoreException,
    ValidationException,
    DataNotFoundException,
    ConfigurationException,
    AuthenticationException,
    RateLimitExceededException,
    VersionConflictException,
    StorageError,
)

__all__ = [
    "CoreException",
    "ValidationException",
    "DataNotFoundException",
    "ConfigurationException",
    "AuthenticationException",
    "RateLimitExceededException",
    "VersionConflictException",
    "StorageError",
]
