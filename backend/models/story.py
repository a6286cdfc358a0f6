"""
Story model — a short text record owned by one user.

  - status is 'public' or 'private', nothing else
  - owner (user_id) is set at creation and never reassigned
  - created_at is stamped once at insert and never changed

Field rules are enforced with @validates, so a bad value fails at
construction or assignment rather than at commit time.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy.orm import validates

from models import db

TITLE_MAX_LENGTH = 255


class StoryStatus(str, enum.Enum):
    """Visibility of a story to non-owners."""

    PUBLIC = "public"
    PRIVATE = "private"

    @classmethod
    def parse(cls, value):
        """Return the enum member for a status string (or member)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            allowed = ", ".join(s.value for s in cls)
            raise ValueError(
                f"Invalid status {value!r} (expected one of: {allowed})"
            ) from None


class Story(db.Model):
    """Represents a user's story."""

    __tablename__ = "stories"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    body = db.Column(db.Text, nullable=False)
    status = db.Column(
        db.String(20), nullable=False, default=StoryStatus.PUBLIC.value
    )
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    created_at = db.Column(
        db.DateTime,
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )

    user = db.relationship("User", back_populates="stories")

    @validates("title")
    def _validate_title(self, key, value):
        if value is not None and not isinstance(value, str):
            raise ValueError("title must be a string")
        title = (value or "").strip()
        if not title:
            raise ValueError("title is required")
        if len(title) > TITLE_MAX_LENGTH:
            raise ValueError(f"title must be at most {TITLE_MAX_LENGTH} characters")
        return title

    @validates("body")
    def _validate_body(self, key, value):
        if value is not None and not isinstance(value, str):
            raise ValueError("body must be a string")
        if not (value or "").strip():
            raise ValueError("body is required")
        return value

    @validates("status")
    def _validate_status(self, key, value):
        return StoryStatus.parse(value).value

    @validates("user_id")
    def _validate_user_id(self, key, value):
        if self.user_id is not None and value != self.user_id:
            raise ValueError("story owner cannot be reassigned")
        return value

    @validates("user")
    def _validate_user(self, key, value):
        current = self.user
        if current is not None and value is not current:
            raise ValueError("story owner cannot be reassigned")
        return value

    @validates("created_at")
    def _validate_created_at(self, key, value):
        if self.created_at is not None:
            raise ValueError("created_at cannot be changed")
        return value

    def to_dict(self, include_owner=False):
        """Serialize story to dictionary for API responses."""
        result = {
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "status": self.status,
            "user_id": self.user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
        if include_owner:
            result["user"] = self.user.to_owner_dict() if self.user else None
        return result

    def __repr__(self):
        return f"<Story {self.id} ({self.status})>"
