# ABOUTME: Configuration package initialization
# ABOUTME: Exports configuration classes and logging utilities for the FitTrack core library

from fittrack.config.settings import FitTrackSettings, get_settings
from fittrack.config.security import SecuritySettings, PLACEHOLDER_TOKEN_SECRET, DEFAULT_TOKEN_TTL_SECONDS
from fittrack.config.limits import RateLimitSettings, StorageSettings
from fittrack.config.logging import (
    LoggerConfig,
    LoggingSettings,
    setup_logging,
    get_logger,
    generate_correlation_id,
    bind_request_context,
    configure_for_testing,
    configure_for_production,
    configure_for_development,
)

__all__ = [
    "FitTrackSettings",
    "get_settings",
    "SecuritySettings",
    "PLACEHOLDER_TOKEN_SECRET",
    "DEFAULT_TOKEN_TTL_SECONDS",
    "RateLimitSettings",
    "StorageSettings",
    "LoggerConfig",
    "LoggingSettings",
    "setup_logging",
    "get_logger",
    "generate_correlation_id",
    "bind_request_context",
    "configure_for_testing",
    "configure_for_production",
    "configure_for_development",
]
