# wellness/routes/user_routes.py
import math
from datetime import date
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import Blueprint, jsonify
from flask_jwt_extended import jwt_required

from .. import db
from ..errors import BadRequest
from ..identity import current_user_id
from . import json_body
from ..models import User
from ..services.aggregation import get_or_create_profile

user_bp = Blueprint("user", __name__)

ACTIVITY_LEVELS = ["sedentary", "light", "moderate", "active", "very-active"]


def _user_payload(user, profile):
    return {"user": {**user.to_dict(), **profile.to_dict()}}


@user_bp.route("", methods=["GET"])
@jwt_required()
def get_user():
    user_id = current_user_id()
    user = db.session.get(User, user_id)

    profile = get_or_create_profile(user_id)
    if profile.id is None:
        db.session.commit()

    return jsonify(_user_payload(user, profile)), 200


@user_bp.route("", methods=["PUT"])
@jwt_required()
def update_user():
    user_id = current_user_id()
    user = db.session.get(User, user_id)
    profile = get_or_create_profile(user_id)

    data = json_body()

    # points, level and streaks are derived; never writable here
    for key, attr in (("firstName", "first_name"), ("lastName", "last_name")):
        value = data.get(key)
        if value is not None:
            value = str(value).strip()
            if not value:
                raise BadRequest(f"{key} cannot be empty")
            setattr(user, attr, value)

    for key, attr in (
        ("currentWeight", "current_weight"),
        ("targetWeight", "target_weight"),
        ("height", "height"),
    ):
        if key in data:
            value = data[key]
            try:
                value = float(value) if value is not None else None
            except (TypeError, ValueError, OverflowError):
                raise BadRequest(f"invalid {key}")
            if value is not None and not math.isfinite(value):
                raise BadRequest(f"invalid {key}")
            setattr(profile, attr, value)

    date_of_birth = data.get("dateOfBirth")  # "YYYY-MM-DD"
    if date_of_birth:
        try:
            profile.date_of_birth = date.fromisoformat(date_of_birth[:10])
        except (TypeError, ValueError):
            raise BadRequest("invalid dateOfBirth")

    if data.get("activityLevel") in ACTIVITY_LEVELS:
        profile.activity_level = data["activityLevel"]

    if isinstance(data.get("notificationsEnabled"), bool):
        profile.notifications_enabled = data["notificationsEnabled"]

    if "preferredWorkoutTime" in data:
        profile.preferred_workout_time = data["preferredWorkoutTime"] or None

    timezone = data.get("timezone")
    if timezone:
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, TypeError, ValueError):
            raise BadRequest("invalid timezone")
        profile.timezone = timezone

    db.session.commit()

    return jsonify(_user_payload(user, profile)), 200
