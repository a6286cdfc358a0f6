"""
Services package — business logic layer.

  - auth_service: Google ID token verification, user lookup, JWT
  - access_guard: view/edit/delete decisions for a story
  - story_query: selection/sort plans for the story listings
  - story_repository: SQLAlchemy persistence for stories
  - story_service: story operations used by the routes
"""
