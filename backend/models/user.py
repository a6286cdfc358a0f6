"""
User model — Google sign-in accounts.

Owned by the auth layer. Stories only ever read `id` (ownership) and the
display fields (owner details in public listings).
"""
from datetime import datetime, timezone

from models import db


class User(db.Model):
    """Represents an authenticated user from Google sign-in."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    google_id = db.Column(db.String(255), unique=True, nullable=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    display_name = db.Column(db.String(255))
    avatar_url = db.Column(db.Text)
    created_at = db.Column(
        db.DateTime, default=lambda: datetime.now(timezone.utc)
    )
    last_login_at = db.Column(db.DateTime)

    stories = db.relationship(
        "Story", back_populates="user", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self):
        """Serialize user to dictionary for API responses."""
        return {
            "id": self.id,
            "google_id": self.google_id,
            "email": self.email,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "last_login_at": self.last_login_at.isoformat() if self.last_login_at else None,
        }

    def to_owner_dict(self):
        """Public-facing subset shown next to a story."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "avatar_url": self.avatar_url,
        }

    def __repr__(self):
        return f"<User {self.email}>"
