# wellness/scoring.py
"""
Point rules for logged activities.

Points are computed once per write and cached on the activity row, so the
aggregates never need to re-derive them from these rules.
"""
from typing import Any

ACTIVITY_TYPES = ("workout", "meal", "mindfulness", "sleep", "hydration")

WORKOUT_MINUTES_CAP = 60
WORKOUT_POINTS_PER_MINUTE = 2
MINDFULNESS_POINTS_PER_MINUTE = 3
MEAL_POINTS = 10
SLEEP_POINTS = 20
HYDRATION_POINTS = 5
DEFAULT_POINTS = 5

LEVEL_STEP_POINTS = 100


def normalize_duration(duration: Any) -> int:
    """Whole minutes, with anything negative or non-numeric counted as 0."""
    if isinstance(duration, bool):
        return 0
    try:
        minutes = int(float(duration))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, minutes)


def score(activity_type: str, duration: Any = None) -> int:
    minutes = normalize_duration(duration)

    if activity_type == "workout":
        return min(minutes, WORKOUT_MINUTES_CAP) * WORKOUT_POINTS_PER_MINUTE
    if activity_type == "meal":
        return MEAL_POINTS
    if activity_type == "mindfulness":
        return minutes * MINDFULNESS_POINTS_PER_MINUTE
    if activity_type == "sleep":
        return SLEEP_POINTS
    if activity_type == "hydration":
        # per logged record, not per glass
        return HYDRATION_POINTS
    return DEFAULT_POINTS


def level_for_points(total_points: int) -> int:
    total_points = int(total_points or 0)
    return max(1, (total_points // LEVEL_STEP_POINTS) + 1)
