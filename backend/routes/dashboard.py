"""
Dashboard route.

GET /api/dashboard — the signed-in user's stories, public and private
"""
from flask import Blueprint, jsonify, g

from decorators.login_required import login_required
from services import story_service

dashboard_bp = Blueprint("dashboard", __name__)


@dashboard_bp.route("/dashboard", methods=["GET"])
@login_required
def dashboard():
    """Return the caller's display name and every story they own."""
    user = g.current_user
    stories = story_service.list_dashboard(user.id)
    return jsonify({
        "name": user.display_name,
        "stories": [s.to_dict() for s in stories],
    })
