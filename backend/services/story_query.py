"""
Story query planner — builds the selection for each story listing.

    Mode         Filter                               Sort                 Owner
    DASHBOARD    user_id == identity (any status)     insertion order      no
    PUBLIC_FEED  status == public                     newest first         yes
    BY_AUTHOR    user_id == author, status == public  insertion order      yes
    SEARCH       status == public, title contains q   newest first         yes
    BY_ID        id == story_id (no status filter)    -                    yes

BY_ID deliberately has no status filter: the owner's own private story must
be fetchable for editing, and visibility is decided afterwards by the
access guard.

Plans are plain data; services.story_repository turns them into SQL.
"""
import enum

from models.story import StoryStatus
from services.access_guard import normalize_id

ASC = "asc"
DESC = "desc"

INSERTION_ORDER = (("id", ASC),)
NEWEST_FIRST = (("created_at", DESC), ("id", DESC))


class ListingMode(enum.Enum):
    DASHBOARD = "dashboard"
    PUBLIC_FEED = "public_feed"
    BY_AUTHOR = "by_author"
    SEARCH = "search"
    BY_ID = "by_id"


class StoryQuery:
    """Immutable description of a story selection."""

    __slots__ = ("mode", "filters", "order_by", "include_owner")

    def __init__(self, mode, filters, order_by=(), include_owner=False):
        object.__setattr__(self, "mode", mode)
        object.__setattr__(self, "filters", dict(filters))
        object.__setattr__(self, "order_by", tuple(order_by))
        object.__setattr__(self, "include_owner", include_owner)

    def __setattr__(self, name, value):
        raise AttributeError("StoryQuery is immutable")

    def __eq__(self, other):
        if not isinstance(other, StoryQuery):
            return NotImplemented
        return (
            self.mode is other.mode
            and self.filters == other.filters
            and self.order_by == other.order_by
            and self.include_owner == other.include_owner
        )

    def __hash__(self):
        return hash((self.mode, tuple(sorted(self.filters.items())), self.order_by))

    def __repr__(self):
        return (
            f"<StoryQuery {self.mode.value} filters={self.filters} "
            f"order_by={self.order_by} include_owner={self.include_owner}>"
        )


def plan(mode, identity=None, user_id=None, text=None, story_id=None):
    """
    Build the StoryQuery for a listing mode.

    Args:
        mode: ListingMode member.
        identity: requesting user (DASHBOARD).
        user_id: author whose public stories to list (BY_AUTHOR).
        text: title search text (SEARCH); None or "" matches every public story.
        story_id: record to fetch (BY_ID).

    Raises:
        ValueError: if the mode's required argument is missing.
    """
    public = StoryStatus.PUBLIC.value

    if mode is ListingMode.DASHBOARD:
        owner = normalize_id(identity)
        if owner is None:
            raise ValueError("dashboard listing needs the requesting identity")
        return StoryQuery(mode, {"user_id": owner}, INSERTION_ORDER, include_owner=False)

    if mode is ListingMode.PUBLIC_FEED:
        return StoryQuery(mode, {"status": public}, NEWEST_FIRST, include_owner=True)

    if mode is ListingMode.BY_AUTHOR:
        author = normalize_id(user_id)
        if author is None:
            raise ValueError("author listing needs a user id")
        return StoryQuery(
            mode, {"user_id": author, "status": public}, INSERTION_ORDER,
            include_owner=True,
        )

    if mode is ListingMode.SEARCH:
        filters = {"status": public}
        if text:
            filters["title_contains"] = text
        return StoryQuery(mode, filters, NEWEST_FIRST, include_owner=True)

    if mode is ListingMode.BY_ID:
        record_id = normalize_id(story_id)
        if record_id is None:
            raise ValueError("single-story fetch needs a story id")
        return StoryQuery(mode, {"id": record_id}, (), include_owner=True)

    raise ValueError(f"Unknown listing mode: {mode!r}")


def dashboard(identity):
    return plan(ListingMode.DASHBOARD, identity=identity)


def public_feed():
    return plan(ListingMode.PUBLIC_FEED)


def by_author(user_id):
    return plan(ListingMode.BY_AUTHOR, user_id=user_id)


def search(text):
    return plan(ListingMode.SEARCH, text=text)


def by_id(story_id):
    return plan(ListingMode.BY_ID, story_id=story_id)
