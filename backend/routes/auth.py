"""
Auth routes — login, me, logout.

POST /api/auth/login  — exchange Google ID token for JWT
GET  /api/auth/me     — current user info and their story count
POST /api/auth/logout — stateless; the client drops its token
"""
import logging

from flask import Blueprint, request, jsonify, g

from services.auth_service import (
    verify_google_token,
    get_or_create_user,
    generate_jwt,
)
from decorators.login_required import login_required
from services import story_service

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
def login():
    """Exchange a Google ID token for a JWT session token."""
    body = request.get_json(silent=True) or {}
    id_token_str = body.get("token") or ""

    if not id_token_str:
        return jsonify({"error": "Missing token"}), 400

    try:
        claims = verify_google_token(id_token_str)
    except ValueError as exc:
        logger.error("[ERR] Google token verification failed: %s", exc)
        return jsonify({"error": "Invalid Google token"}), 401

    try:
        user = get_or_create_user(claims)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 403

    token = generate_jwt(user)
    return jsonify({"token": token, "user": user.to_dict()})


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    """Return the signed-in user plus how many stories they own."""
    user = g.current_user
    result = user.to_dict()
    result["story_count"] = len(story_service.list_dashboard(user.id))
    return jsonify(result)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """JWTs are not stored server-side; the client discards its token."""
    return jsonify({"message": "logged out"})
