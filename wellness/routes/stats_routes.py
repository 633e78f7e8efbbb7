# wellness/routes/stats_routes.py
from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from ..identity import current_user_id
from ..services.stats_service import build_stats

stats_bp = Blueprint("stats", __name__)


@stats_bp.route("", methods=["GET"])
@jwt_required()
def get_stats():
    """
    Returns:
    {
      "user":  {"totalPoints": 240, "currentStreak": 3, "longestStreak": 5, "level": 3},
      "today": {"goalsCompleted": 2, "totalGoals": 3, "workoutsCompleted": 1,
                "mealsLogged": 3, "mindfulnessMinutes": 5, "waterGlasses": 4,
                "pointsEarned": 95},
      "trends": [{"date": "2025-03-01", "pointsEarned": 80, "goalsCompleted": 1,
                  "totalGoals": 3}, ...],
      "goals": [{"id": 1, "title": "Drink water", "category": "hydration",
                 "targetValue": 8, "currentValue": 4, "unit": "glasses",
                 "progress": 50}, ...]
    }
    """
    user_id = current_user_id()
    return jsonify(build_stats(user_id)), 200
