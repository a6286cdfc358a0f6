"""
Story routes — public feed, CRUD, by-author listing, title search.

GET    /api/stories                — public stories, newest first
POST   /api/stories                — create a story owned by the caller
GET    /api/stories/:id            — view one story
GET    /api/stories/:id/edit       — story data for the edit form (owner only)
PUT    /api/stories/:id            — update title/body/status (owner only)
DELETE /api/stories/:id            — delete (owner only)
GET    /api/stories/user/:user_id  — another user's public stories
GET    /api/stories/search?q=      — public stories whose title contains q
GET    /api/stories/search/:query  — same, query in the path

Decisions from the story service map to responses here:
  ALLOW → 200 JSON, NOT_FOUND → 404, REDIRECT → 302 to the public feed.
"""
import logging

from flask import Blueprint, request, jsonify, g, redirect, url_for

from decorators.login_required import login_required
from services import story_service
from services.access_guard import Outcome

logger = logging.getLogger(__name__)

stories_bp = Blueprint("stories", __name__)


def _json_object():
    """Request body as a dict; None when it is JSON but not an object."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def _stories_json(stories):
    return jsonify({"stories": [s.to_dict(include_owner=True) for s in stories]})


def _decision_response(decision, render):
    """Turn a Decision into a Flask response; `render` builds the ALLOW body."""
    if decision.outcome is Outcome.NOT_FOUND:
        return jsonify({"error": "Story not found"}), 404
    if decision.outcome is Outcome.REDIRECT:
        return redirect(url_for(decision.location))
    return render(decision.story)


@stories_bp.route("", methods=["GET"])
@login_required
def list_public_feed():
    """List every public story, newest first, with owner details."""
    return _stories_json(story_service.list_public_feed())


@stories_bp.route("", methods=["POST"])
@login_required
def create_story():
    """
    Create a story owned by the caller.

    Body: { title, body, status? }  (status defaults to 'public')
    """
    body = _json_object()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    try:
        story = story_service.create_story(
            g.current_user.id,
            title=body.get("title"),
            body=body.get("body"),
            status=body.get("status") or "public",
        )
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return jsonify(story.to_dict()), 201


@stories_bp.route("/<int:story_id>", methods=["GET"])
@login_required
def get_story(story_id):
    """Show a single story; private stories of others come back as 404."""
    decision = story_service.get_story_for_view(g.current_user.id, story_id)
    return _decision_response(
        decision, lambda story: jsonify(story.to_dict(include_owner=True))
    )


@stories_bp.route("/<int:story_id>/edit", methods=["GET"])
@login_required
def edit_story(story_id):
    """Story data for the edit form. Non-owners are redirected to the feed."""
    decision = story_service.get_story_for_edit(g.current_user.id, story_id)
    return _decision_response(decision, lambda story: jsonify(story.to_dict()))


@stories_bp.route("/<int:story_id>", methods=["PUT"])
@login_required
def update_story(story_id):
    """
    Update a story owned by the caller.

    Body: any of { title, body, status }.
    """
    body = _json_object()
    if body is None:
        return jsonify({"error": "Request body must be a JSON object"}), 400
    try:
        decision = story_service.update_story(g.current_user.id, story_id, body)
    except ValueError as exc:
        return jsonify({"error": str(exc)}), 400
    return _decision_response(decision, lambda story: jsonify(story.to_dict()))


@stories_bp.route("/<int:story_id>", methods=["DELETE"])
@login_required
def delete_story(story_id):
    """Delete a story owned by the caller."""
    decision = story_service.delete_story(g.current_user.id, story_id)
    return _decision_response(
        decision,
        lambda _story: jsonify({"message": f"Story {story_id} deleted", "id": story_id}),
    )


@stories_bp.route("/user/<int:user_id>", methods=["GET"])
@login_required
def list_by_author(user_id):
    """List a user's public stories."""
    return _stories_json(story_service.list_by_author(user_id))


@stories_bp.route("/search", methods=["GET"])
@stories_bp.route("/search/<path:query>", methods=["GET"])
@login_required
def search_stories(query=None):
    """Search public stories by title (case-insensitive substring)."""
    text = query if query is not None else request.args.get("q", "")
    return _stories_json(story_service.search_by_title(text))
