"""
Story service — the operations the routes call.

Every call takes the acting identity explicitly; nothing here reads request
or session state. Single-story operations fetch by id (no status filter),
then let the access guard decide. Listings go through the query planner.

NOT_FOUND and REDIRECT come back as Decision values, never as exceptions.
PersistenceError from the repository propagates to the route layer.
"""
import logging

from models.story import Story, StoryStatus
from services import story_query
from services import story_repository as repo
from services.access_guard import Decision, Intent, authorize, normalize_id

logger = logging.getLogger(__name__)

PATCHABLE_FIELDS = ("title", "body", "status")


def _fetch(story_id):
    query = story_query.by_id(story_id)
    return repo.find_one(query.filters, include_owner=query.include_owner)


def _clean_patch(patch):
    if not isinstance(patch, dict):
        raise ValueError("update must be an object of fields")
    unknown = sorted(map(str, set(patch) - set(PATCHABLE_FIELDS)))
    if unknown:
        raise ValueError(f"Cannot update field(s): {', '.join(unknown)}")
    return {field: patch[field] for field in PATCHABLE_FIELDS if field in patch}


def create_story(identity, title, body, status=StoryStatus.PUBLIC.value):
    """
    Create a story owned by `identity`.

    Raises:
        ValueError: on a missing owner or an invalid field value.
        PersistenceError: if the insert fails.
    """
    owner_id = normalize_id(identity)
    if owner_id is None:
        raise ValueError("a story needs an owner")
    story = Story(title=title, body=body, status=status, user_id=owner_id)
    repo.insert(story)
    logger.info("[OK] Story created: id=%d (user_id=%d, %s)",
                story.id, story.user_id, story.status)
    return story


def get_story_for_view(identity, story_id):
    return authorize(identity, _fetch(story_id), Intent.VIEW)


def get_story_for_edit(identity, story_id):
    """Owner-only fetch for the edit form; visibility does not matter here."""
    return authorize(identity, _fetch(story_id), Intent.EDIT)


def update_story(identity, story_id, patch):
    """
    Apply `patch` (title/body/status only) if `identity` owns the story.

    Returns:
        Decision — ALLOW carries the updated story; non-owners get REDIRECT
        and the stored story is left untouched.

    Raises:
        ValueError: on a non-patchable field or an invalid value.
    """
    changes = _clean_patch({} if patch is None else patch)
    decision = authorize(identity, _fetch(story_id), Intent.EDIT)
    if not decision.allowed:
        return decision

    story = repo.update_one({"id": decision.story.id}, changes)
    if story is None:
        # Deleted between the fetch and the update
        return Decision.not_found()
    logger.info("[OK] Story updated: id=%d (fields=%s)",
                story.id, ",".join(sorted(changes)) or "none")
    return Decision.allow(story)


def delete_story(identity, story_id):
    """Delete the story if `identity` owns it. A repeat delete is NOT_FOUND."""
    decision = authorize(identity, _fetch(story_id), Intent.DELETE)
    if not decision.allowed:
        return decision

    story = decision.story
    deleted_id = story.id
    if not repo.delete_one({"id": deleted_id}):
        return Decision.not_found()
    logger.info("[OK] Story deleted: id=%d", deleted_id)
    return decision


def list_dashboard(identity):
    return repo.find_many(story_query.dashboard(identity))


def list_public_feed():
    return repo.find_many(story_query.public_feed())


def list_by_author(user_id):
    return repo.find_many(story_query.by_author(user_id))


def search_by_title(text):
    """Public stories whose title contains `text` (case-insensitive), newest first."""
    return repo.find_many(story_query.search(text))
