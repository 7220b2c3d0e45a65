# ABOUTME: Models package initialization
# ABOUTME: Exports authentication, rate limit, storage and document models

# Authentication models
from .auth import (
    AuthRequest,
    HttpRequest,
    AuthFailureReason,
    CredentialSource,
    TokenPayload,
    TokenVerification,
    AuthenticatedIdentity,
)

# Storage models
from .storage import VersionedDocument, WriteResult, MutationOutcome, MutationResult

# Rate limiting and outcomes
from .common import (
    RateLimitDecision,
    RateLimitPolicy,
    DEFAULT_POLICY,
    AUTH_POLICY,
    MIGRATION_POLICY,
    RequestOutcome,
)

# Document type definitions
from .types import WorkoutRecord, WorkoutLogs, WorkoutStatistics, UserSettings

__all__ = [
    # Authentication
    "AuthRequest",
    "HttpRequest",
    "AuthFailureReason",
    "CredentialSource",
    "TokenPayload",
    "TokenVerification",
    "AuthenticatedIdentity",
    # Storage
    "VersionedDocument",
    "WriteResult",
    "MutationOutcome",
    "MutationResult",
    # Rate limiting
    "RateLimitDecision",
    "RateLimitPolicy",
    "DEFAULT_POLICY",
    "AUTH_POLICY",
    "MIGRATION_POLICY",
    "RequestOutcome",
    # Types
    "WorkoutRecord",
    "WorkoutLogs",
    "WorkoutStatistics",
    "UserSettings",
]
