"""
Decorator: @login_required — enforces JWT authentication.

Extracts the Bearer token from the Authorization header, decodes the JWT,
looks up the User, and sets g.current_user. Returns 401 on failure.

Routes read g.current_user once and pass its id into the story service;
the service layer never looks at g.
"""
from functools import wraps

from flask import request, g, jsonify

from models import db
from models.user import User
from services.auth_service import decode_jwt


def _bearer_token():
    auth_header = request.headers.get("Authorization") or ""
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header.split("Bearer ", 1)[1].strip() or None


def login_required(f):
    @wraps(f)
    def decorated(*args, **kwargs):
        token = _bearer_token()
        if token is None:
            return jsonify({"error": "Missing or invalid token"}), 401

        claims = decode_jwt(token)
        if claims is None:
            return jsonify({"error": "Invalid or expired token"}), 401

        user = db.session.get(User, claims.get("user_id"))
        if user is None:
            return jsonify({"error": "User not found"}), 401

        g.current_user = user
        return f(*args, **kwargs)

    return decorated
