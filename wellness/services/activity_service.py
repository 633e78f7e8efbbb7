# wellness/services/activity_service.py
"""
Create, edit and delete logged activities.

Every write touches three records in a fixed order: the activity itself,
the user's profile totals, then the daily rollup for the activity's day.
All three share one session transaction; a failure anywhere rolls the whole
operation back.
"""
import math
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import func

from .. import clock, db
from ..errors import BadRequest, NotFound
from ..models import Activity
from ..scoring import ACTIVITY_TYPES, score
from .aggregation import (
    activity_contribution,
    apply_to_day,
    get_or_create_profile,
    rebuild_day,
    user_zone,
)

DEFAULT_TITLES = {
    "workout": "Workout",
    "meal": "Meal",
    "mindfulness": "Mindfulness session",
    "sleep": "Sleep",
    "hydration": "Glass of water",
}

TEXT_FIELDS = {
    "title": "title",
    "description": "description",
    "notes": "notes",
}

CHOICE_FIELDS = {
    "workoutType": (
        "workout_type",
        ("cardio", "strength", "yoga", "sports", "walking", "running", "cycling", "swimming"),
    ),
    "intensity": ("intensity", ("low", "medium", "high")),
    "mealType": ("meal_type", ("breakfast", "lunch", "dinner", "snack")),
    "meditationType": (
        "meditation_type",
        ("breathing", "guided", "body-scan", "loving-kindness", "movement"),
    ),
}

NUTRIENTS = ("protein", "carbs", "fat", "fiber")

DEFAULT_LIST_LIMIT = 10
MAX_LIST_LIMIT = 100


# ------------------------------
# Helpers
# ------------------------------
def _safe_float_or_none(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        value = float(v)
    except (TypeError, ValueError, OverflowError):
        return None
    # NaN and Infinity are not JSON and would poison the rollups
    return value if math.isfinite(value) else None


def _rating_or_none(v: Any) -> Optional[int]:
    try:
        rating = int(v)
    except (TypeError, ValueError, OverflowError):
        return None
    return rating if 1 <= rating <= 5 else None


def _check_type(activity_type: Any) -> str:
    if not activity_type:
        raise BadRequest("type is required")
    if activity_type not in ACTIVITY_TYPES:
        raise BadRequest(f"type must be one of: {', '.join(ACTIVITY_TYPES)}")
    return activity_type


def _apply_fields(activity: Activity, data: Dict[str, Any], partial: bool, zone=None) -> None:
    """Copy client-writable fields from ``data``; owner and points never are."""
    if "type" in data and not (partial and data["type"] is None):
        activity.type = _check_type(data["type"])

    if "date" in data and data["date"] is not None:
        try:
            activity.date = clock.parse_datetime(data["date"], zone)
        except ValueError:
            raise BadRequest("invalid date")

    if "duration" in data and not (partial and data["duration"] is None):
        activity.duration = _safe_float_or_none(data["duration"])

    if "calories" in data:
        activity.calories = _safe_float_or_none(data["calories"])

    for key, attr in TEXT_FIELDS.items():
        if key in data:
            value = data[key]
            setattr(activity, attr, str(value).strip() if value is not None else None)

    for key, (attr, choices) in CHOICE_FIELDS.items():
        if key in data and (data[key] is None or data[key] in choices):
            setattr(activity, attr, data[key])

    if "sleepQuality" in data:
        activity.sleep_quality = _rating_or_none(data["sleepQuality"])
    if "mood" in data:
        activity.mood = _rating_or_none(data["mood"])

    if "tags" in data:
        tags = data["tags"] or []
        if not isinstance(tags, list):
            raise BadRequest("tags must be a list")
        activity.tags = [str(t) for t in tags]

    if "nutrition" in data:
        nutrition = data["nutrition"]
        if nutrition is None:
            nutrition = {}
        if not isinstance(nutrition, dict):
            raise BadRequest("nutrition must be an object")
        for nutrient in NUTRIENTS:
            setattr(activity, nutrient, _safe_float_or_none(nutrition.get(nutrient)))


def _owned_activity(user_id: int, activity_id: Any) -> Activity:
    if activity_id in (None, ""):
        raise BadRequest("Activity ID is required")
    try:
        activity_id = int(activity_id)
    except (TypeError, ValueError):
        raise NotFound("Activity not found")

    activity = Activity.query.filter_by(id=activity_id, user_id=user_id).first()
    if activity is None:
        raise NotFound("Activity not found")
    return activity


def _commit() -> None:
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


# ------------------------------
# Reads
# ------------------------------
def list_activities(user_id: int, activity_type: Optional[str] = None, limit: Any = None) -> List[Activity]:
    try:
        limit = int(limit) if limit not in (None, "") else DEFAULT_LIST_LIMIT
    except (TypeError, ValueError):
        limit = DEFAULT_LIST_LIMIT
    limit = max(1, min(limit, MAX_LIST_LIMIT))

    query = Activity.query.filter_by(user_id=user_id)
    if activity_type:
        query = query.filter_by(type=activity_type)

    return query.order_by(Activity.date.desc(), Activity.id.desc()).limit(limit).all()


def activity_type_stats(user_id: int) -> List[Dict[str, Any]]:
    rows = (
        db.session.query(
            Activity.type,
            func.count(Activity.id),
            func.max(Activity.date),
            func.coalesce(func.sum(Activity.points_earned), 0),
        )
        .filter(Activity.user_id == user_id)
        .group_by(Activity.type)
        .all()
    )
    by_type = {r[0]: r for r in rows}

    stats = []
    for activity_type in ACTIVITY_TYPES:
        row = by_type.get(activity_type)
        last = row[2] if row else None
        stats.append(
            {
                "type": activity_type,
                "count": int(row[1]) if row else 0,
                "lastActivity": last.isoformat() if last else None,
                "totalPoints": int(row[3]) if row else 0,
            }
        )
    return stats


# ------------------------------
# Writes
# ------------------------------
def create_activity(user_id: int, data: Dict[str, Any]) -> Activity:
    activity_type = _check_type(data.get("type"))

    zone = user_zone(user_id)

    activity = Activity(user_id=user_id, type=activity_type)
    _apply_fields(activity, data, partial=False, zone=zone)
    if not activity.title:
        activity.title = DEFAULT_TITLES[activity.type]
    if activity.date is None:
        activity.date = clock.now(zone)
    if activity.tags is None:
        activity.tags = []

    points = score(activity.type, activity.duration)
    activity.points_earned = points

    try:
        db.session.add(activity)
        db.session.flush()

        profile = get_or_create_profile(user_id)
        profile.add_points(points)

        apply_to_day(user_id, activity.date.date(), activity_contribution(activity))
    except Exception:
        db.session.rollback()
        raise
    _commit()

    current_app.logger.info(
        f"[activities] created id={activity.id} user_id={user_id} "
        f"type={activity.type} points={points}"
    )
    return activity


def update_activity(user_id: int, activity_id: Any, data: Dict[str, Any]) -> Activity:
    activity = _owned_activity(user_id, activity_id)

    old_points = int(activity.points_earned or 0)
    old_day = activity.date.date()

    _apply_fields(activity, data, partial=True, zone=user_zone(user_id))
    if not activity.title:
        activity.title = DEFAULT_TITLES[activity.type]

    new_points = score(activity.type, activity.duration)
    delta = new_points - old_points
    activity.points_earned = new_points
    new_day = activity.date.date()

    try:
        db.session.flush()

        if delta:
            get_or_create_profile(user_id).add_points(delta)

        if new_day == old_day:
            # same day: only the points move, counters stay as logged
            if delta:
                apply_to_day(user_id, old_day, {"points_earned": delta}, create=False)
        else:
            # both days are recounted from their activities, which also
            # clears counters left behind by earlier same-day edits
            rebuild_day(user_id, old_day)
            rebuild_day(user_id, new_day)
    except Exception:
        db.session.rollback()
        raise
    _commit()

    current_app.logger.info(
        f"[activities] updated id={activity.id} user_id={user_id} "
        f"points={old_points}->{new_points}"
    )
    return activity


def delete_activity(user_id: int, activity_id: Any) -> None:
    activity = _owned_activity(user_id, activity_id)
    points = int(activity.points_earned or 0)

    try:
        get_or_create_profile(user_id).add_points(-points)
        apply_to_day(
            user_id,
            activity.date.date(),
            activity_contribution(activity),
            sign=-1,
            create=False,
        )
        db.session.delete(activity)
    except Exception:
        db.session.rollback()
        raise
    _commit()

    current_app.logger.info(
        f"[activities] deleted id={activity_id} user_id={user_id} points=-{points}"
    )
