# ABOUTME: Request guard components
# ABOUTME: Exports the guard, client IP resolution and response body builders

from .client_ip import resolve_client_ip
from .request_guard import GuardDecision, RequestGuard
from .responses import format_error_response, format_success_response

__all__ = [
    "GuardDecision",
    "RequestGuard",
    "format_error_response",
    "format_success_response",
    "resolve_client_ip",
]
