# wellness/services/aggregation.py
"""
Incremental upkeep of the per-day rollups and the lifetime profile totals.

Nothing here commits; callers own the transaction so the activity row, the
profile and the daily row are written together.
"""
from datetime import date, datetime, timedelta
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from .. import clock, db
from ..models import Activity, DailyStats, UserProfile
from .goals import count_goals_met, daily_targets


def get_or_create_profile(user_id: int) -> UserProfile:
    profile = UserProfile.query.filter_by(user_id=user_id).first()
    if profile is None:
        profile = UserProfile(
            user_id=user_id,
            total_points=0,
            level=1,
            current_streak=0,
            longest_streak=0,
        )
        db.session.add(profile)
    return profile


def user_zone(user_id: int) -> ZoneInfo:
    """The zone whose midnight starts this user's day."""
    profile = UserProfile.query.filter_by(user_id=user_id).first()
    return clock.local_zone(profile.timezone if profile else None)


def activity_contribution(activity: Activity) -> Dict[str, float]:
    """What one activity adds to its day's row, points included."""
    deltas: Dict[str, float] = {"points_earned": int(activity.points_earned or 0)}
    minutes = max(0, activity.duration or 0)

    if activity.type == "workout":
        deltas["workouts_completed"] = 1
    elif activity.type == "meal":
        deltas["meals_logged"] = 1
        if activity.calories:
            deltas["total_calories"] = activity.calories
        if activity.has_nutrition:
            deltas["total_protein"] = activity.protein or 0
            deltas["total_carbs"] = activity.carbs or 0
            deltas["total_fat"] = activity.fat or 0
    elif activity.type == "mindfulness":
        deltas["mindfulness_minutes"] = minutes
    elif activity.type == "sleep":
        deltas["sleep_hours"] = minutes
    elif activity.type == "hydration":
        deltas["water_glasses"] = 1

    return deltas


def refresh_goal_counts(row: DailyStats) -> None:
    targets = daily_targets(row.user_id)
    row.total_goals = len(targets)
    row.goals_completed = count_goals_met(row, targets)
    row.streak_maintained = row.goals_completed > 0


def apply_to_day(
    user_id: int,
    day: date,
    deltas: Dict[str, float],
    sign: int = 1,
    create: bool = True,
) -> Optional[DailyStats]:
    """
    Upsert-increment the (user, day) row by ``sign * deltas``.

    With ``create=False`` a missing row is left alone, which is what
    reversals and point corrections want.
    """
    row = DailyStats.query.filter_by(user_id=user_id, stat_date=day).first()
    if row is None:
        if not create:
            return None
        row = DailyStats.empty(user_id, day)
        db.session.add(row)

    row.increment({field: sign * value for field, value in deltas.items()})
    refresh_goal_counts(row)
    return row


def rebuild_day(user_id: int, day: date) -> Optional[DailyStats]:
    """
    Recount the (user, day) row from that day's activities.

    Used when an activity changes day, where incremental deltas cannot be
    trusted because same-day edits only ever adjust points.
    """
    start = datetime.combine(day, datetime.min.time())
    activities = Activity.query.filter(
        Activity.user_id == user_id,
        Activity.date >= start,
        Activity.date < start + timedelta(days=1),
    ).all()

    row = DailyStats.query.filter_by(user_id=user_id, stat_date=day).first()
    if row is None:
        if not activities:
            return None
        row = DailyStats.empty(user_id, day)
        db.session.add(row)

    for field in DailyStats.COUNTER_FIELDS:
        setattr(row, field, 0)
    for activity in activities:
        row.increment(activity_contribution(activity))
    refresh_goal_counts(row)
    return row
