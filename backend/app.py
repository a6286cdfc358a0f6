"""
Flask application factory.

Creates and configures the Flask app with:
  - SQLAlchemy database connection
  - CORS for frontend communication
  - Route registration
  - Health check endpoint
  - PersistenceError → generic 500 JSON
  - Structured logging with [OK]/[ERR] markers (no Unicode)
"""
import logging
import sys

from flask import Flask, jsonify
from flask_cors import CORS

from config import Config
from models import db
from routes import register_routes
from services.story_repository import PersistenceError


def _configure_logging(app):
    """Send app and module loggers to stdout with [OK]/[ERR] style lines."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    level = getattr(logging, str(app.config.get("LOG_LEVEL") or "INFO").upper(),
                    logging.INFO)
    app.logger.handlers = [handler]
    app.logger.setLevel(level)

    # Module loggers (services.*, routes.*) write through the same handler
    for name in ("services", "routes", "decorators"):
        module_logger = logging.getLogger(name)
        module_logger.handlers = [handler]
        module_logger.setLevel(level)


def create_app(config_class=Config):
    """
    Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config).
                      Pass TestConfig for testing with SQLite in-memory.

    Returns:
        Configured Flask app instance.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    CORS(app, origins=[app.config["FRONTEND_URL"]])

    register_routes(app)

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(exc):
        """Storage failures are not retried; log the operation and fail."""
        app.logger.error("[ERR] Story %s", exc)
        return jsonify({"error": "Something went wrong, please try again"}), 500

    # Health check endpoint — confirms API is running
    @app.route("/api/health")
    def health():
        """Return service health status."""
        app.logger.info("[OK] Health check passed")
        return jsonify({"status": "ok", "service": "storyshelf-api"})

    # No migration tool yet; create missing tables on startup
    with app.app_context():
        db.create_all()

    app.logger.info("[OK] StoryShelf API initialized")
    return app
