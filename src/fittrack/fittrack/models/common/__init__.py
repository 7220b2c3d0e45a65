# ABOUTME: Common models package exports
# ABOUTME: Exports rate limit models and request outcomes

from .rate_limit import RateLimitDecision, RateLimitPolicy, DEFAULT_POLICY, AUTH_POLICY, MIGRATION_POLICY
from .outcome import RequestOutcome

__all__ = [
    "RateLimitDecision",
    "RateLimitPolicy",
    "DEFAULT_POLICY",
    "AUTH_POLICY",
    "MIGRATION_POLICY",
    "RequestOutcome",
]
