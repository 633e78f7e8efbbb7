# wellness/identity.py
from flask_jwt_extended import get_jwt_identity

from . import db
from .errors import Unauthorized
from .models import User


def current_user_id() -> int:
    """Id of the user behind the request's access token."""
    try:
        user_id = int(get_jwt_identity())
    except (TypeError, ValueError):
        raise Unauthorized("Unauthorized")

    if db.session.get(User, user_id) is None:
        raise Unauthorized("Unauthorized")
    return user_id
