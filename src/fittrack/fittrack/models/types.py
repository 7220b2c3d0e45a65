# ABOUTME: Common type definitions for the per-user JSON documents
# ABOUTME: Provides TypedDict classes describing workout logs and user settings

from typing import TypedDict, Any


class ExerciseEntry(TypedDict, total=False):
    """One exercise performed on a piece of equipment."""

    equipment_id: str
    sets: list[dict[str, Any]]
    notes: str


class WorkoutRecord(TypedDict, total=False):
    """A single workout. ``id`` and ``date`` (ISO ``YYYY-MM-DD``) identify it."""

    id: str
    date: str
    duration_minutes: int
    exercises: list[ExerciseEntry]
    notes: str


class MonthlySummary(TypedDict):
    count: int
    total_time: int


class WorkoutStatistics(TypedDict):
    """Aggregates derived from the workout list. Always recomputed in full."""

    total_workouts: int
    total_time: int
    favorite_equipment: dict[str, int]
    monthly_summary: dict[str, MonthlySummary]


class WorkoutTemplate(TypedDict, total=False):
    name: str
    equipment_sequence: list[str]
    estimated_duration: int
    notes: str


class WorkoutLogs(TypedDict):
    workouts: list[WorkoutRecord]
    templates: list[WorkoutTemplate]
    statistics: WorkoutStatistics


class UserSettings(TypedDict, total=False):
    user: dict[str, Any]
    equipment_settings: dict[str, Any]
    quick_substitutes: dict[str, Any]
    preferences: dict[str, Any]
