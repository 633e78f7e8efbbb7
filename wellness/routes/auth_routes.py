# wellness/routes/auth_routes.py

from datetime import datetime

from flask import Blueprint, current_app, jsonify
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    get_jwt_identity,
    jwt_required,
)

from .. import db
from ..identity import current_user_id
from . import json_body
from ..models import User, UserProfile

auth_bp = Blueprint("auth", __name__)


def _tokens_for(user: User):
    identity = str(user.id)
    return {
        "token": create_access_token(identity=identity),
        "refreshToken": create_refresh_token(identity=identity),
    }


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = json_body()

    email = (data.get("email") or "").strip().lower()
    first_name = (data.get("firstName") or "").strip()
    last_name = (data.get("lastName") or "").strip()
    password = data.get("password") or ""  # do NOT strip passwords

    if not email or not password or not first_name or not last_name:
        return jsonify({"message": "email, password, firstName and lastName are required"}), 400

    if len(password) < 6:
        return jsonify({"message": "password must be at least 6 characters"}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({"message": "User with this email already exists"}), 400

    user = User(email=email, first_name=first_name, last_name=last_name)
    user.set_password(password)

    try:
        db.session.add(user)
        db.session.flush()
        db.session.add(
            UserProfile(
                user_id=user.id,
                total_points=0,
                level=1,
                current_streak=0,
                longest_streak=0,
            )
        )
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        current_app.logger.exception(f"Registration Error: {e}")
        return jsonify({"message": "Internal server error"}), 500

    current_app.logger.info(f"[auth/register] user_id={user.id}")
    return jsonify({**_tokens_for(user), "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_body()

    email = (data.get("email") or "").strip().lower()
    password = data.get("password") or ""  # do NOT strip passwords

    if not email or not password:
        return jsonify({"message": "Email and password are required"}), 400

    user = User.query.filter_by(email=email).first()

    if not user:
        current_app.logger.info(f"[auth/login] user NOT found for '{email}'")
        return jsonify({"message": "Invalid email or password"}), 401

    if not user.check_password(password):
        current_app.logger.info(f"[auth/login] bad password for user_id={user.id}")
        return jsonify({"message": "Invalid email or password"}), 401

    user.last_login = datetime.utcnow()
    db.session.commit()

    return jsonify({**_tokens_for(user), "user": user.to_dict()}), 200


@auth_bp.route("/refresh", methods=["POST"])
@jwt_required(refresh=True)
def refresh():
    identity = get_jwt_identity()
    return jsonify({"token": create_access_token(identity=identity)}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = db.session.get(User, current_user_id())
    return jsonify({"user": user.to_dict()}), 200
