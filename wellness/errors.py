# wellness/errors.py
"""
Error taxonomy for the API.

Business-rule violations are raised as ``APIError`` subclasses and turned
into ``{"message": ...}`` responses with their status code. Anything else
reaching the handler boundary is logged, the session rolled back, and a
generic 500 returned.
"""
from typing import Any, Dict, Optional

from flask import current_app, jsonify
from werkzeug.exceptions import HTTPException


class APIError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message}


class BadRequest(APIError):
    status_code = 400
    message = "Bad request"


class Unauthorized(APIError):
    status_code = 401
    message = "Unauthorized"


class NotFound(APIError):
    status_code = 404
    message = "Not found"


def register_error_handlers(app):
    from . import db

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        db.session.rollback()
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected(err: Exception):
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error: {err}")
        return jsonify({"message": "Internal server error"}), 500
