# ABOUTME: User settings document defaults and transformations
# ABOUTME: Builds default settings and merges device-local settings into the stored copy

import copy
from typing import Any, Callable, Dict, Optional

from fittrack.exceptions import ValidationException
from fittrack.models.types import UserSettings

Transform = Callable[[Dict[str, Any]], Dict[str, Any]]

# Sections merged key by key; anything else is carried over from the stored copy.
SETTINGS_SECTIONS = ("user", "equipment_settings", "preferences", "quick_substitutes")


def default_settings() -> UserSettings:
    return {
        "user": {
            "name": "User",
            "experience_level": "beginner",
            "goals": ["general_fitness"],
            "typical_duration": 45,
            "preferred_zones": ["A", "B", "C"],
            "gym_location": "EOS Fitness Lutz, Florida",
        },
        "equipment_settings": {},
        "quick_substitutes": {},
        "preferences": {
            "show_zones": True,
            "auto_save": True,
            "notification_sound": False,
            "theme": "light",
        },
    }


def replace_settings(settings: Dict[str, Any]) -> Transform:
    """Transform replacing the stored settings with ``settings``."""
    if not isinstance(settings, dict):
        raise ValidationException("Settings must be an object", code="INVALID_SETTINGS")
    replacement = copy.deepcopy(settings)

    def transform(_settings: Dict[str, Any]) -> Dict[str, Any]:
        return copy.deepcopy(replacement)

    return transform


def merge_settings(cloud: Optional[Dict[str, Any]], local: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Merge settings from a device into the stored settings.

    Each section is merged shallowly and the local value wins for every key
    present on both sides.
    """
    if not cloud:
        return copy.deepcopy(local)
    if not local:
        return copy.deepcopy(cloud)

    merged = copy.deepcopy(cloud)
    for section in SETTINGS_SECTIONS:
        local_section = local.get(section)
        if local_section:
            merged[section] = {**(merged.get(section) or {}), **copy.deepcopy(local_section)}
    return merged


def merge_into(local: Optional[Dict[str, Any]]) -> Transform:
    """Transform merging ``local`` into the stored settings."""

    def transform(settings: Dict[str, Any]) -> Dict[str, Any]:
        return merge_settings(settings, local) or settings

    return transform
