# wellness/routes/activity_routes.py

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from ..identity import current_user_id
from . import json_body
from ..services.activity_service import (
    activity_type_stats,
    create_activity,
    delete_activity,
    list_activities,
    update_activity,
)

activities_bp = Blueprint("activities", __name__)


def _activity_id(data=None):
    activity_id = request.args.get("id")
    if not activity_id and data:
        activity_id = data.get("id") or data.get("_id")
    return activity_id


# ------------------------------
# GET /api/activities?type=meal&limit=10
# ------------------------------
@activities_bp.route("", methods=["GET"])
@jwt_required()
def get_activities():
    user_id = current_user_id()
    rows = list_activities(
        user_id,
        activity_type=request.args.get("type") or None,
        limit=request.args.get("limit"),
    )
    return jsonify([a.to_dict() for a in rows]), 200


# ------------------------------
# POST /api/activities
# ------------------------------
@activities_bp.route("", methods=["POST"])
@jwt_required()
def post_activity():
    """
    Expected body (type-specific fields are optional):
    {
      "type": "meal",
      "title": "Lunch",
      "date": "2025-03-01T12:30:00",
      "calories": 650,
      "nutrition": {"protein": 30, "carbs": 70, "fat": 20},
      "mealType": "lunch"
    }
    ``userId`` and ``pointsEarned`` in the body are ignored.
    """
    user_id = current_user_id()
    data = json_body()

    activity = create_activity(user_id, data)
    return jsonify(activity.to_dict()), 201


# ------------------------------
# PUT /api/activities?id=123
# ------------------------------
@activities_bp.route("", methods=["PUT"])
@jwt_required()
def put_activity():
    user_id = current_user_id()
    data = json_body()

    activity = update_activity(user_id, _activity_id(data), data)
    return jsonify(activity.to_dict()), 200


# ------------------------------
# DELETE /api/activities?id=123
# ------------------------------
@activities_bp.route("", methods=["DELETE"])
@jwt_required()
def remove_activity():
    user_id = current_user_id()

    delete_activity(user_id, _activity_id())
    return jsonify({"message": "Activity deleted successfully"}), 200


# ------------------------------
# GET /api/activities/stats
# ------------------------------
@activities_bp.route("/stats", methods=["GET"])
@jwt_required()
def get_activity_stats():
    user_id = current_user_id()
    return jsonify(activity_type_stats(user_id)), 200
