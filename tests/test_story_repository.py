"""
Tests for services/story_repository.py — filters, eager loading, error wrapping.
"""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from models import db
from models.story import Story
from services import story_query
from services import story_repository as repo
from services.story_repository import PersistenceError


def _db_down(*args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is down"))


class TestCrud:

    def test_insert_returns_id(self, db_session, make_user):
        story = Story(title="t", body="b", user_id=make_user().id)
        story_id = repo.insert(story)
        assert story_id == story.id
        assert db.session.get(Story, story_id) is story

    def test_find_one_without_status_filter(self, db_session, make_user, make_story):
        story = make_story(make_user(), status="private")
        assert repo.find_one({"id": story.id}) is story
        assert repo.find_one({"id": story.id + 100}) is None

    def test_update_one_missing(self, db_session):
        assert repo.update_one({"id": 1}, {"title": "x"}) is None

    def test_delete_one(self, db_session, make_user, make_story):
        story_id = make_story(make_user()).id
        assert repo.delete_one({"id": story_id}) is True
        assert repo.delete_one({"id": story_id}) is False

    def test_unknown_filter_key(self, db_session):
        with pytest.raises(ValueError, match="Unsupported story filter"):
            repo.find_one({"body": "x"})


def test_find_many_loads_owner(db_session, make_user, make_story):
    owner = make_user(display_name="Lin")
    make_story(owner, title="Visible")
    db_session.expunge_all()

    stories = repo.find_many(story_query.public_feed())
    assert len(stories) == 1
    assert "user" in stories[0].__dict__
    assert stories[0].user.display_name == "Lin"


class TestPersistenceErrors:

    def test_find_many_wraps_database_errors(self, db_session):
        with patch.object(db.session, "execute", side_effect=_db_down):
            with pytest.raises(PersistenceError) as excinfo:
                repo.find_many(story_query.public_feed())
        assert excinfo.value.operation == "find_many"
        assert "database is down" in str(excinfo.value)

    def test_insert_wraps_integrity_errors(self, db_session):
        """A story pointing at no user (NOT NULL owner) fails as PersistenceError."""
        story = Story(title="t", body="b")
        with pytest.raises(PersistenceError) as excinfo:
            repo.insert(story)
        assert excinfo.value.operation == "insert"
        # Session is usable again after the rollback
        assert db.session.execute(db.select(Story)).scalars().all() == []
