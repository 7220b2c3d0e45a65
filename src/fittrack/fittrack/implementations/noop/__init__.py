# ABOUTME: NoOp implementations package
# ABOUTME: Pass-through implementations for disabling optional behaviour

from .common import NoOpRateLimiter

__all__ = ["NoOpRateLimiter"]
