"""
Flask configuration classes.

Config reads from environment variables with sensible defaults.
TestConfig overrides for pytest with SQLite in-memory.

The postgres:// → postgresql:// fix handles hosted connection strings
that still use the older 'postgres://' prefix, which SQLAlchemy 1.4+
no longer accepts.
"""
import os


def _split_csv(raw):
    return [part.strip().lower() for part in (raw or "").split(",") if part.strip()]


class Config:
    """Base configuration for Flask app."""

    # Flask core
    SECRET_KEY = os.environ.get("SECRET_KEY") or "dev-secret-key-change-me"

    # Database
    _raw_db_url = os.environ.get("DATABASE_URL") or "sqlite:///storyshelf_dev.db"
    SQLALCHEMY_DATABASE_URI = _raw_db_url.replace(
        "postgres://", "postgresql://", 1
    )

    # SQLAlchemy pool settings for production PostgreSQL
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,  # Verify connections before use
        "pool_recycle": 300,    # Recycle connections every 5 minutes
    }

    # Google sign-in
    GOOGLE_CLIENT_ID = os.environ.get("GOOGLE_CLIENT_ID") or ""

    # Empty list = any Google account may sign in
    ALLOWED_EMAIL_DOMAINS = _split_csv(os.environ.get("ALLOWED_EMAIL_DOMAINS"))

    # JWT settings
    JWT_EXPIRY_HOURS = int(os.environ.get("JWT_EXPIRY_HOURS") or "24")

    # CORS — frontend URL for allowed origins
    FRONTEND_URL = os.environ.get("FRONTEND_URL") or "http://localhost:5173"

    LOG_LEVEL = os.environ.get("LOG_LEVEL") or "INFO"


class TestConfig(Config):
    """Test configuration — SQLite in-memory, no external dependencies."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}  # No pool settings needed for SQLite
    SECRET_KEY = "test-secret-key-with-enough-length-for-hs256"
    GOOGLE_CLIENT_ID = "test-client-id"
    ALLOWED_EMAIL_DOMAINS = []
