# Overview: Flask API routes for auth operations; parses input and returns JSON responses.

from flask import Blueprint, request, jsonify, current_app

from ..services import auth_service
from ..services.auth_service import InvalidCredentialsError


auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/login")
def login_route():
    """
    Authenticate a user and issue a signed token (valid one hour).

    Unknown usernames and wrong passwords get the same 400 response.
    """
    try:
        data = request.get_json(silent=True) or {}
        username = data.get("username")
        password = data.get("password")

        if not isinstance(username, str) or not isinstance(password, str) or not username or not password:
            return jsonify({"error": "Invalid credentials"}), 400

        token = auth_service.login(username, password)
        return jsonify({"token": token}), 200

    except InvalidCredentialsError as e:
        return jsonify({"error": str(e)}), 400
    except Exception:
        current_app.logger.exception("Login error")
        return jsonify({"error": "Login error"}), 500
