# ABOUTME: Workout log document defaults, transformations and derived statistics
# ABOUTME: Pure functions applied inside the versioned read-transform-write cycle

import copy
import math
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional

from fittrack.exceptions import DataNotFoundException, ValidationException
from fittrack.models.types import WorkoutLogs, WorkoutRecord, WorkoutStatistics, WorkoutTemplate

Transform = Callable[[Dict[str, Any]], Dict[str, Any]]

DEFAULT_TEMPLATES: List[WorkoutTemplate] = [
    {
        "name": "Push Day",
        "equipment_sequence": ["HS-IL-BP", "EGYM-CP", "NAUT-SP", "HS-IL-SH"],
        "estimated_duration": 60,
        "notes": "Chest, shoulders, triceps focus",
    },
    {
        "name": "Pull Day",
        "equipment_sequence": ["HS-PL-LAT", "NAUT-RW", "HS-IL-ROW", "EGYM-LC"],
        "estimated_duration": 55,
        "notes": "Back, biceps focus",
    },
    {
        "name": "Leg Day",
        "equipment_sequence": ["HS-PL-SQT", "NAUT-LP", "HS-LG-CURL", "HS-LG-EXT"],
        "estimated_duration": 65,
        "notes": "Lower body focus",
    },
]


def empty_statistics() -> WorkoutStatistics:
    return {"total_workouts": 0, "total_time": 0, "favorite_equipment": {}, "monthly_summary": {}}


def default_workout_logs() -> WorkoutLogs:
    """The document a user starts with: no workouts and the starter templates."""
    return {
        "workouts": [],
        "templates": copy.deepcopy(DEFAULT_TEMPLATES),
        "statistics": empty_statistics(),
    }


def _duration(workout: Dict[str, Any]) -> int:
    return workout.get("duration_minutes") or 0


def recompute_statistics(logs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rebuild ``logs["statistics"]`` from the full workout list.

    Nothing from the previous statistics is reused, so the aggregates always
    match the records they summarize.

    - ``total_workouts``: number of workouts
    - ``total_time``: sum of ``duration_minutes``
    - ``favorite_equipment``: exercise count per ``equipment_id``
    - ``monthly_summary``: ``{"YYYY-MM": {"count", "total_time"}}`` keyed by workout date
    """
    workouts = logs.get("workouts") or []
    stats = empty_statistics()
    stats["total_workouts"] = len(workouts)

    for workout in workouts:
        stats["total_time"] += _duration(workout)

        for exercise in workout.get("exercises") or []:
            equipment_id = exercise.get("equipment_id")
            stats["favorite_equipment"][equipment_id] = stats["favorite_equipment"].get(equipment_id, 0) + 1

        month_key = (workout.get("date") or "")[:7]
        if month_key:
            summary = stats["monthly_summary"].setdefault(month_key, {"count": 0, "total_time": 0})
            summary["count"] += 1
            summary["total_time"] += _duration(workout)

    logs["statistics"] = stats
    return logs


def _require_workout(workout: Any) -> WorkoutRecord:
    if not isinstance(workout, dict) or not workout.get("id"):
        raise ValidationException("Workout must be an object with an id", code="INVALID_WORKOUT")
    return workout


def append_workout(workout: WorkoutRecord) -> Transform:
    """Transform adding one workout to the end of the list."""
    _require_workout(workout)

    def transform(logs: Dict[str, Any]) -> Dict[str, Any]:
        logs.setdefault("workouts", []).append(copy.deepcopy(workout))
        return logs

    return transform


def replace_workout(workout_id: str, workout: WorkoutRecord) -> Transform:
    """
    Transform replacing the workout whose ``id`` is ``workout_id``.

    Raises `DataNotFoundException` from inside the transform when no workout
    matches.
    """
    _require_workout(workout)

    def transform(logs: Dict[str, Any]) -> Dict[str, Any]:
        workouts = logs.setdefault("workouts", [])
        for index, existing in enumerate(workouts):
            if existing.get("id") == workout_id:
                workouts[index] = copy.deepcopy(workout)
                return logs
        raise DataNotFoundException("Workout not found", code="NOT_FOUND", details={"workout_id": workout_id})

    return transform


def delete_workout(workout_id: str) -> Transform:
    """Transform removing every workout whose ``id`` is ``workout_id``."""

    def transform(logs: Dict[str, Any]) -> Dict[str, Any]:
        workouts = logs.setdefault("workouts", [])
        remaining = [w for w in workouts if w.get("id") != workout_id]
        if len(remaining) == len(workouts):
            raise DataNotFoundException("Workout not found", code="NOT_FOUND", details={"workout_id": workout_id})
        logs["workouts"] = remaining
        return logs

    return transform


def replace_logs(new_logs: Dict[str, Any]) -> Transform:
    """Transform discarding the stored document in favour of ``new_logs``."""
    if not isinstance(new_logs, dict):
        raise ValidationException("Workout logs must be an object", code="INVALID_LOGS")
    replacement = copy.deepcopy(new_logs)
    replacement.setdefault("workouts", [])
    replacement.setdefault("templates", [])

    def transform(_logs: Dict[str, Any]) -> Dict[str, Any]:
        return copy.deepcopy(replacement)

    return transform


def _sort_key(workout: Dict[str, Any]) -> str:
    return workout.get("date") or ""


def merge_workout_logs(cloud: Optional[Dict[str, Any]], local: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Merge workout logs from a device into the stored document.

    Stored workouts are kept; local workouts are added unless a workout with
    the same ``id`` already exists. The result is ordered newest first by
    date. Templates are keyed by ``name`` and local templates replace stored
    ones of the same name.
    """
    if not cloud:
        return copy.deepcopy(local)
    if not local:
        return copy.deepcopy(cloud)

    merged = copy.deepcopy(cloud)
    merged.setdefault("workouts", [])
    merged.setdefault("templates", [])

    local_workouts = local.get("workouts")
    if isinstance(local_workouts, list):
        existing_ids = {w.get("id") for w in merged["workouts"]}
        for workout in local_workouts:
            if workout.get("id") not in existing_ids:
                merged["workouts"].append(copy.deepcopy(workout))
                existing_ids.add(workout.get("id"))
        merged["workouts"].sort(key=_sort_key, reverse=True)

    local_templates = local.get("templates")
    if isinstance(local_templates, list):
        by_name: Dict[Any, Dict[str, Any]] = {t.get("name"): t for t in merged["templates"]}
        for template in local_templates:
            by_name[template.get("name")] = copy.deepcopy(template)
        merged["templates"] = list(by_name.values())

    return merged


def merge_into(local: Optional[Dict[str, Any]]) -> Transform:
    """Transform merging ``local`` into the stored workout logs."""

    def transform(logs: Dict[str, Any]) -> Dict[str, Any]:
        return merge_workout_logs(logs, local) or logs

    return transform


def build_export_summary(logs: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Summarize a workout log for data export.

    Returns:
        Dict with ``total_workouts``, ``total_workout_time_minutes``,
        ``unique_equipment_used``, ``average_workout_duration`` (rounded) and,
        when any workout is dated, ``first_workout_date`` / ``last_workout_date``.
    """
    workouts = (logs or {}).get("workouts") or []
    summary: Dict[str, Any] = {
        "total_workouts": len(workouts),
        "total_workout_time_minutes": 0,
        "unique_equipment_used": 0,
        "average_workout_duration": 0,
        "export_date": datetime.now(UTC).date().isoformat(),
    }
    if not workouts:
        return summary

    total_time = sum(_duration(w) for w in workouts)
    equipment = {e.get("equipment_id") for w in workouts for e in (w.get("exercises") or []) if e.get("equipment_id")}

    summary["total_workout_time_minutes"] = total_time
    summary["unique_equipment_used"] = len(equipment)
    # Half-up rounding
    summary["average_workout_duration"] = math.floor(total_time / len(workouts) + 0.5)

    dates = sorted(w["date"] for w in workouts if w.get("date"))
    if dates:
        summary["first_workout_date"] = dates[0]
        summary["last_workout_date"] = dates[-1]
    return summary
