# wellness/services/goals.py
"""
Daily goal thresholds.

A user without active wellness goals is measured against the global
defaults below. Once they have active goals in a tracked category, each of
those goals' ``target_value`` becomes a threshold on the matching daily
counter instead.
"""
from typing import List, NamedTuple, Optional

from ..models import DailyStats, WellnessGoal

DEFAULT_DAILY_GOALS = (
    ("workouts_completed", 1),
    ("meals_logged", 3),
    ("mindfulness_minutes", 10),
)

GOAL_CATEGORY_FIELDS = {
    "fitness": "workouts_completed",
    "nutrition": "meals_logged",
    "mindfulness": "mindfulness_minutes",
    "hydration": "water_glasses",
    "sleep": "sleep_hours",
}


class DailyTarget(NamedTuple):
    field: str
    target: float
    goal: Optional[WellnessGoal] = None


def active_goals(user_id: int) -> List[WellnessGoal]:
    return (
        WellnessGoal.query.filter(
            WellnessGoal.user_id == user_id,
            WellnessGoal.status == "active",
        )
        .order_by(WellnessGoal.id.asc())
        .all()
    )


def daily_targets(user_id: int, goals: Optional[List[WellnessGoal]] = None) -> List[DailyTarget]:
    if goals is None:
        goals = active_goals(user_id)

    targets = [
        DailyTarget(GOAL_CATEGORY_FIELDS[g.category], float(g.target_value or 0), g)
        for g in goals
        if g.category in GOAL_CATEGORY_FIELDS
    ]
    if targets:
        return targets
    return [DailyTarget(field, target) for field, target in DEFAULT_DAILY_GOALS]


def count_goals_met(row: Optional[DailyStats], targets: List[DailyTarget]) -> int:
    if row is None:
        return 0
    return sum(1 for t in targets if (getattr(row, t.field) or 0) >= t.target)
