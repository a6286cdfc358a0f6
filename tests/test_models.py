"""
Tests for SQLAlchemy models — CRUD, defaults, and field rules.

Uses db_session fixture for per-test isolation.
"""
from datetime import datetime

import pytest

from models.story import Story, StoryStatus
from models.user import User


def test_create_user(db_session):
    """Can create a user with required fields, defaults applied."""
    user = User(
        google_id="google-123",
        email="test@example.com",
        display_name="Test User",
    )
    db_session.add(user)
    db_session.flush()

    assert user.id is not None
    assert user.created_at is not None


def test_user_to_dict(db_session):
    """User.to_dict() returns all expected keys."""
    user = User(google_id="google-456", email="ada@example.com", display_name="Ada")
    db_session.add(user)
    db_session.flush()

    d = user.to_dict()
    assert d["email"] == "ada@example.com"
    assert d["display_name"] == "Ada"
    assert "id" in d
    assert "created_at" in d


def test_create_story_defaults(db_session, make_user):
    """Status defaults to public and created_at is stamped at insert."""
    owner = make_user()
    story = Story(title="Trip", body="We went to the lake", user_id=owner.id)
    db_session.add(story)
    db_session.flush()

    assert story.id is not None
    assert story.status == "public"
    assert isinstance(story.created_at, datetime)
    assert story.user is owner


def test_story_title_is_trimmed():
    story = Story(title="  Hello  ", body="b", user_id=1)
    assert story.title == "Hello"


@pytest.mark.parametrize("title", ["", "   ", None])
def test_story_rejects_blank_title(title):
    with pytest.raises(ValueError, match="title is required"):
        Story(title=title, body="b", user_id=1)


def test_story_rejects_blank_body():
    with pytest.raises(ValueError, match="body is required"):
        Story(title="t", body="  ", user_id=1)


def test_story_rejects_unknown_status():
    """Only public and private exist."""
    with pytest.raises(ValueError, match="Invalid status"):
        Story(title="t", body="b", status="draft", user_id=1)


def test_story_accepts_status_enum():
    story = Story(title="t", body="b", status=StoryStatus.PRIVATE, user_id=1)
    assert story.status == "private"


def test_story_owner_cannot_be_reassigned(make_story, make_user):
    owner, other = make_user(), make_user()
    story = make_story(owner)
    with pytest.raises(ValueError, match="cannot be reassigned"):
        story.user_id = other.id
    with pytest.raises(ValueError, match="cannot be reassigned"):
        story.user = other


def test_story_created_at_is_immutable(make_story, make_user):
    story = make_story(make_user())
    with pytest.raises(ValueError, match="cannot be changed"):
        story.created_at = datetime(2030, 1, 1)


def test_story_to_dict_with_owner(make_story, make_user):
    owner = make_user(display_name="Grace")
    story = make_story(owner, title="Compilers", status="private")

    d = story.to_dict(include_owner=True)
    assert d["title"] == "Compilers"
    assert d["status"] == "private"
    assert d["user_id"] == owner.id
    assert d["user"] == {"id": owner.id, "display_name": "Grace", "avatar_url": None}
    assert "user" not in story.to_dict()


@pytest.mark.parametrize("field, value", [("title", 123), ("body", ["b"])])
def test_story_rejects_non_string_text(field, value):
    fields = {"title": "t", "body": "b", "user_id": 1, field: value}
    with pytest.raises(ValueError, match=f"{field} must be a string"):
        Story(**fields)


def test_story_title_length_limit():
    assert Story(title="x" * 255, body="b", user_id=1).title == "x" * 255
    with pytest.raises(ValueError, match="at most 255"):
        Story(title="x" * 256, body="b", user_id=1)
