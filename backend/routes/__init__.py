"""
Route registration for the Flask app.

Registers all route blueprints:
  - auth routes (Google login/logout/me)
  - dashboard route (the signed-in user's own stories)
  - story routes (public feed, CRUD, by-author, title search)
"""
from routes.auth import auth_bp
from routes.dashboard import dashboard_bp
from routes.stories import stories_bp


def register_routes(app):
    """
    Register all route blueprints with the Flask app.

    Args:
        app: Flask application instance.
    """
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(dashboard_bp, url_prefix="/api")
    app.register_blueprint(stories_bp, url_prefix="/api/stories")
