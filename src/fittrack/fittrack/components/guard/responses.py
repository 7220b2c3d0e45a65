# ABOUTME: Response body builders for handlers using the guard
# ABOUTME: Adds correlation IDs and timestamps, and keeps backend failure messages generic

from datetime import UTC, datetime
from typing import Any, Dict, Optional

from loguru import logger

from fittrack.exceptions import CoreException, StorageError

GENERIC_STORAGE_MESSAGE = "A storage error occurred. Please try again later."


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def format_error_response(
    error: BaseException, user_message: Optional[str] = None, correlation_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Error body safe to return to an untrusted caller.

    The error is logged with its internal details. Storage failures always get
    a generic message so backend specifics never reach the caller.
    """
    details = error.details if isinstance(error, CoreException) else {}
    logger.bind(name=__name__, correlation_id=correlation_id, details=details).error(
        f"Function error: {type(error).__name__}: {error}"
    )

    if isinstance(error, StorageError):
        message = GENERIC_STORAGE_MESSAGE
    else:
        message = user_message or "An error occurred"

    return {
        "error": True,
        "message": message,
        "correlationId": correlation_id,
        "timestamp": _timestamp(),
    }


def format_success_response(data: Dict[str, Any], correlation_id: Optional[str] = None) -> Dict[str, Any]:
    return {
        **data,
        "correlationId": correlation_id,
        "timestamp": _timestamp(),
    }
