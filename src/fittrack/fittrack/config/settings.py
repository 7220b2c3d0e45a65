# ABOUTME: Main configuration composition for the FitTrack backend.
# ABOUTME: Assembles all configuration classes into a single, accessible object.

from functools import lru_cache

from ._base import BaseCoreSettings
from .limits import RateLimitSettings, StorageSettings
from .security import SecuritySettings


class FitTrackSettings(BaseCoreSettings, SecuritySettings, RateLimitSettings, StorageSettings):
    """Represents the complete, composed configuration for the backend.

    Each settings module is self-contained; this class merges them through
    inheritance so handlers read one object. Loading never validates the
    signing secret: that check belongs to token manager construction, so
    importing this module has no side effects on process start.
    """

    pass


@lru_cache
def get_settings() -> FitTrackSettings:
    """Provides a cached instance of the application settings.

    Returns:
        A single, cached instance of FitTrackSettings.
    """
    return FitTrackSettings()
