# wellness/models/__init__.py
from .user import User, UserProfile
from .activity import Activity
from .daily_stats import DailyStats
from .wellness_goal import WellnessGoal

__all__ = ["User", "UserProfile", "Activity", "DailyStats", "WellnessGoal"]
