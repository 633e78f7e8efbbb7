# wellness/services/stats_service.py
"""
Read side: today's progress, streak, trend rows and goal progress.

Everything is read from the daily rollups rather than by scanning
activities. The one write is the streak: when the freshly computed streak
beats the stored one, it is saved back to the profile.
"""
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from flask import current_app

from .. import clock, db
from ..models import DailyStats
from .aggregation import get_or_create_profile
from .goals import DailyTarget, active_goals, count_goals_met, daily_targets


def _rows_between(user_id: int, start: Optional[date], end: date) -> Dict[date, DailyStats]:
    query = DailyStats.query.filter(
        DailyStats.user_id == user_id,
        DailyStats.stat_date <= end,
    )
    if start is not None:
        query = query.filter(DailyStats.stat_date >= start)
    return {row.stat_date: row for row in query.all()}


def compute_streak(user_id: int, today: date, goals_met_today: int, lookback_days: int) -> int:
    """
    Consecutive days, counting back from today, on which at least one goal
    was met. Stops at the first day that misses, and never looks further back
    than ``lookback_days`` (0 or less means no limit).
    """
    if lookback_days > 0:
        rows = _rows_between(user_id, today - timedelta(days=lookback_days - 1), today)
        max_days = lookback_days
    else:
        rows = _rows_between(user_id, None, today)
        max_days = len(rows) + 1

    streak = 0
    for offset in range(max_days):
        day = today - timedelta(days=offset)
        if offset == 0:
            met = goals_met_today
        else:
            row = rows.get(day)
            met = row.goals_completed if row else 0
        if met <= 0:
            break
        streak += 1
    return streak


def _trends(user_id: int, today: date, days: int, targets: List[DailyTarget]) -> List[Dict[str, Any]]:
    start = today - timedelta(days=days - 1)
    rows = _rows_between(user_id, start, today)

    trends = []
    for i in range(days):
        day = start + timedelta(days=i)
        row = rows.get(day)
        if row is None:
            entry = DailyStats.empty(user_id, day).to_dict()
            entry["totalGoals"] = len(targets)
        else:
            entry = row.to_dict()
        if day == today:
            # goals may have changed since the row was written
            entry["goalsCompleted"] = count_goals_met(row, targets)
            entry["totalGoals"] = len(targets)
        trends.append(entry)
    return trends


def _goal_progress(goals, targets: List[DailyTarget], today_row: Optional[DailyStats]) -> List[Dict[str, Any]]:
    field_by_goal = {t.goal.id: t.field for t in targets if t.goal is not None}

    progress = []
    for goal in goals:
        field = field_by_goal.get(goal.id)
        if field is not None:
            current = (getattr(today_row, field) or 0) if today_row else 0
        else:
            current = goal.current_value or 0
        target = goal.target_value or 0
        pct = min(100, round(current / target * 100)) if target > 0 else 0
        progress.append(
            {
                "id": goal.id,
                "title": goal.title,
                "category": goal.category,
                "targetValue": target,
                "currentValue": current,
                "unit": goal.unit,
                "progress": pct,
            }
        )
    return progress


def build_stats(user_id: int) -> Dict[str, Any]:
    cfg = current_app.config
    profile = get_or_create_profile(user_id)
    today = clock.today(clock.local_zone(profile.timezone))

    goals = active_goals(user_id)
    targets = daily_targets(user_id, goals)

    today_row = DailyStats.query.filter_by(user_id=user_id, stat_date=today).first()
    goals_completed = count_goals_met(today_row, targets)

    streak = compute_streak(
        user_id, today, goals_completed, int(cfg.get("STREAK_LOOKBACK_DAYS", 7))
    )
    if streak > int(profile.current_streak or 0):
        profile.current_streak = streak
        if streak > int(profile.longest_streak or 0):
            profile.longest_streak = streak
        current_app.logger.info(f"[stats] user_id={user_id} streak -> {streak}")

    if db.session.new or db.session.dirty:
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def today_value(field):
        return (getattr(today_row, field) or 0) if today_row else 0

    return {
        "user": {
            "totalPoints": int(profile.total_points or 0),
            "currentStreak": int(profile.current_streak or 0),
            "longestStreak": int(profile.longest_streak or 0),
            "level": int(profile.level or 1),
        },
        "today": {
            "goalsCompleted": goals_completed,
            "totalGoals": len(targets),
            "workoutsCompleted": int(today_value("workouts_completed")),
            "mealsLogged": int(today_value("meals_logged")),
            "mindfulnessMinutes": today_value("mindfulness_minutes"),
            "waterGlasses": int(today_value("water_glasses")),
            "pointsEarned": int(today_value("points_earned")),
        },
        "trends": _trends(user_id, today, int(cfg.get("TREND_DAYS", 7)), targets),
        "goals": _goal_progress(goals, targets, today_row),
    }
