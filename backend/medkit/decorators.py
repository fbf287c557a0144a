# Overview: Request decorators for API routes.

from functools import wraps

from flask import current_app, jsonify, g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError


def require_auth(f):
    """
    Require a valid bearer token when AUTH_REQUIRED is enabled.

    Sets g.user_id to the token identity. Returns 401 if:
    - No Authorization header
    - Invalid signature or expired token
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_app.config.get("AUTH_REQUIRED"):
            return f(*args, **kwargs)

        try:
            verify_jwt_in_request()
        except (JWTExtendedException, PyJWTError):
            return jsonify({"error": "Invalid or expired token"}), 401

        g.user_id = get_jwt_identity()
        return f(*args, **kwargs)

    return decorated_function
