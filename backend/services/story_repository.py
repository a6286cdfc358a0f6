"""
Story repository — SQLAlchemy persistence for stories.

Collaborator contract used by the story service:
  - insert(story)               → id
  - find_one(filters)           → Story or None
  - find_many(query)            → list of Story (owner eager-loaded if asked)
  - update_one(filters, patch)  → updated Story or None
  - delete_one(filters)         → True if a row was deleted

Filters are the plain dicts produced by services.story_query.
Database errors are rolled back and re-raised as PersistenceError with the
operation name. Nothing is retried.
"""
import logging
from functools import wraps

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from models import db
from models.story import Story
from services.story_query import DESC

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"


class PersistenceError(Exception):
    """Raised when a storage call fails (database down, bad SQL, etc.)."""

    def __init__(self, operation, cause=None):
        message = f"{operation} failed"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.operation = operation
        self.cause = cause


def _persistence_call(operation):
    """Roll back and wrap SQLAlchemy errors raised by a repository call."""
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except SQLAlchemyError as exc:
                db.session.rollback()
                logger.error("[ERR] %s failed: %s", operation, exc)
                raise PersistenceError(operation, exc) from exc
        return decorated
    return decorator


def _escape_like(text):
    return (
        text.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _criteria(filters):
    """Translate a filter dict into SQLAlchemy criteria."""
    criteria = []
    for key, value in filters.items():
        if key == "id":
            criteria.append(Story.id == value)
        elif key == "user_id":
            criteria.append(Story.user_id == value)
        elif key == "status":
            criteria.append(Story.status == value)
        elif key == "title_contains":
            pattern = f"%{_escape_like(value)}%"
            criteria.append(Story.title.ilike(pattern, escape=_LIKE_ESCAPE))
        else:
            raise ValueError(f"Unsupported story filter: {key}")
    return criteria


def _ordering(order_by):
    clauses = []
    for field, direction in order_by:
        column = getattr(Story, field)
        clauses.append(column.desc() if direction == DESC else column.asc())
    return clauses


@_persistence_call("insert")
def insert(story):
    db.session.add(story)
    db.session.commit()
    return story.id


@_persistence_call("find_one")
def find_one(filters, include_owner=False):
    stmt = db.select(Story).where(*_criteria(filters))
    if include_owner:
        stmt = stmt.options(joinedload(Story.user))
    return db.session.execute(stmt).unique().scalars().first()


@_persistence_call("find_many")
def find_many(query):
    """Run a planned StoryQuery and return every matching story."""
    stmt = db.select(Story).where(*_criteria(query.filters))
    stmt = stmt.order_by(*_ordering(query.order_by))
    if query.include_owner:
        stmt = stmt.options(joinedload(Story.user))
    return list(db.session.execute(stmt).unique().scalars().all())


@_persistence_call("update_one")
def update_one(filters, patch):
    story = db.session.execute(
        db.select(Story).where(*_criteria(filters))
    ).scalars().first()
    if story is None:
        return None
    try:
        for field, value in patch.items():
            setattr(story, field, value)
    except ValueError:
        # Partially applied patch must not reach the next commit
        db.session.rollback()
        raise
    db.session.commit()
    return story


@_persistence_call("delete_one")
def delete_one(filters):
    story = db.session.execute(
        db.select(Story).where(*_criteria(filters))
    ).scalars().first()
    if story is None:
        return False
    db.session.delete(story)
    db.session.commit()
    return True
