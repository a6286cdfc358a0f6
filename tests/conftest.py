"""
Shared pytest fixtures for StoryShelf tests.

Uses TestConfig (SQLite in-memory) so tests run without PostgreSQL.
Session-scoped app fixture builds the app once.
Per-test db_session gets fresh tables and drops them afterwards, so route
commits never leak into the next test.
"""
import sys
import os
import itertools
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest

# Add backend to Python path so imports work
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from app import create_app  # noqa: E402
from config import TestConfig  # noqa: E402
from models import db as _db  # noqa: E402
from models.story import Story  # noqa: E402
from models.user import User  # noqa: E402
from services.auth_service import generate_jwt  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def app():
    """Create Flask app with TestConfig (SQLite in-memory) once per session."""
    return create_app(config_class=TestConfig)


@pytest.fixture(scope="function")
def client(app):
    """Flask test client for making HTTP requests."""
    return app.test_client()


@pytest.fixture(scope="function")
def db_session(app):
    """
    Per-test database session on fresh tables.

    The app context stays pushed for the whole test, so test-client
    requests reuse it and share this session.
    """
    with app.app_context():
        _db.create_all()

        yield _db.session

        _db.session.rollback()
        _db.drop_all()


@pytest.fixture()
def make_user(db_session):
    """Factory fixture to create a User in the test database."""
    counter = itertools.count(1)

    def _make_user(email=None, display_name="Test User", google_id=None):
        n = next(counter)
        user = User(
            google_id=google_id or f"google-{n}",
            email=email or f"user{n}@example.com",
            display_name=display_name,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make_user


@pytest.fixture()
def make_story(db_session):
    """
    Factory fixture to create a Story.

    created_at defaults to BASE_TIME plus `minutes`, so ordering tests
    do not depend on the clock.
    """
    def _make_story(owner, title="A story", body="Once upon a time",
                    status="public", minutes=0, created_at=None):
        story = Story(
            title=title,
            body=body,
            status=status,
            user_id=owner.id,
            created_at=created_at or BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(story)
        db_session.commit()
        return story
    return _make_story


@pytest.fixture()
def headers_for(db_session):
    """Return Authorization headers carrying a valid JWT for `user`."""
    def _headers_for(user):
        return {"Authorization": f"Bearer {generate_jwt(user)}"}
    return _headers_for


@pytest.fixture()
def auth_headers(make_user, headers_for):
    """
    Create a user and return Authorization headers with a valid JWT.

    Usage: headers = auth_headers("email@example.com")
    """
    def _auth_headers(email=None):
        return headers_for(make_user(email=email))
    return _auth_headers


@pytest.fixture()
def mock_verify_google_token():
    """Patch google.oauth2.id_token.verify_oauth2_token to return test claims."""
    with patch("services.auth_service.id_token.verify_oauth2_token") as mock:
        mock.return_value = {
            "sub": "google-test-sub-123",
            "email": "testuser@example.com",
            "name": "Test User",
            "picture": "https://example.com/photo.jpg",
        }
        yield mock
