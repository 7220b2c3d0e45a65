# ABOUTME: Core exception classes for the FitTrack backend
# ABOUTME: Provides structured error handling with context and error codes

from typing import Dict, Any


class CoreException(Exception):
    """Base exception class for the FitTrack backend.

    Provides structured error handling with optional error codes and contextual
    details. All custom exceptions in the system should inherit from this class
    to ensure consistent error handling patterns.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary containing contextual information
    """

    def __init__(self, message: str, code: str | None = None, details: Dict[str, Any] | None = None):
        """Initialize CoreException with message, optional code and details.

        Args:
            message: Human-readable error message
            code: Optional error code for programmatic handling
            details: Optional dictionary containing contextual information
        """
        self.message = message
        self.code = code
        self.details = details.copy() if details else {}
        super().__init__(self.message)


class ValidationException(CoreException):
    """Exception raised for data validation errors.

    Used when input data fails validation checks, such as:
    - Empty or non-string user identifiers
    - Non-positive rate limit windows
    - Documents that are not JSON objects

    Should include specific details about what validation failed.
    """

    pass


class DataNotFoundException(CoreException):
    """Exception raised when requested data is not found.

    Used when a document transformation targets a record that does not exist,
    such as replacing or deleting a workout by an unknown identifier.

    Should include details about what was being searched for.
    """

    pass


class ConfigurationException(CoreException):
    """Exception raised for configuration errors.

    Used when system configuration is invalid or missing, such as:
    - Missing token signing secret
    - Signing secret left at its placeholder value
    - Invalid configuration format

    Should include details about the configuration issue.
    """

    pass


class AuthenticationException(CoreException):
    """Exception raised for authentication errors.

    The ``code`` attribute carries one of the ``AuthFailureReason`` values:
    ``missing``, ``malformed``, ``bad_signature`` or ``expired``.
    """

    pass


class RateLimitExceededException(CoreException):
    """Exception raised when rate limits are exceeded.

    ``details["reset_time"]`` holds the epoch-millisecond instant at which the
    sliding window admits a new request.
    """

    def __init__(self, message: str, reset_time: float, code: str | None = "RATE_LIMITED", details: Dict[str, Any] | None = None):
        super().__init__(message, code, {**(details or {}), "reset_time": reset_time})
        self.reset_time = reset_time


class VersionConflictException(CoreException):
    """Exception raised when a conditional write loses an optimistic-concurrency race.

    The stored document was changed since the caller last read it. The caller
    must re-read and resubmit.
    """

    pass


class StorageError(CoreException):
    """Exception raised for storage operation failures.

    Used when the key-value backend itself fails, such as:
    - Backend connection failures
    - Storage capacity limits exceeded
    - Operations on a closed repository

    The message is safe to show to callers; internal diagnostics go in
    ``details``.
    """

    pass
