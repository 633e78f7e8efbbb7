# wellness/routes/__init__.py
from flask import request

from ..errors import BadRequest


def json_body():
    """Request body as a dict; a missing or unparsable body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadRequest("invalid JSON body")
    return data
