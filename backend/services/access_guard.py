"""
Access guard — decides what an identity may do with a single story.

Rules:
  - Missing story            → NOT_FOUND for every intent
  - VIEW a public story      → ALLOW
  - VIEW a private story     → ALLOW for the owner, NOT_FOUND for anyone else
                               (private stories look exactly like missing ones)
  - EDIT / DELETE            → ALLOW for the owner, REDIRECT to the public
                               listing for anyone else

Owner checks always compare normalized ids, never a populated User object
against a raw id.
"""
import enum

from models.story import StoryStatus

# Endpoint non-owners are sent back to; the route layer turns it into a URL.
LISTING_LOCATION = "stories.list_public_feed"


class Intent(enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    DELETE = "delete"


class Outcome(enum.Enum):
    ALLOW = "allow"
    NOT_FOUND = "not_found"
    REDIRECT = "redirect"


class Decision:
    """Result of an authorization check, consumed by the route layer."""

    __slots__ = ("outcome", "story", "location")

    def __init__(self, outcome, story=None, location=None):
        self.outcome = outcome
        self.story = story
        self.location = location

    @classmethod
    def allow(cls, story):
        return cls(Outcome.ALLOW, story=story)

    @classmethod
    def not_found(cls):
        return cls(Outcome.NOT_FOUND)

    @classmethod
    def redirect(cls, location=LISTING_LOCATION):
        return cls(Outcome.REDIRECT, location=location)

    @property
    def allowed(self):
        return self.outcome is Outcome.ALLOW

    def __eq__(self, other):
        if not isinstance(other, Decision):
            return NotImplemented
        return (
            self.outcome is other.outcome
            and self.story is other.story
            and self.location == other.location
        )

    def __hash__(self):
        return hash((self.outcome, id(self.story), self.location))

    def __repr__(self):
        if self.outcome is Outcome.REDIRECT:
            return f"<Decision redirect -> {self.location}>"
        if self.outcome is Outcome.ALLOW:
            return f"<Decision allow {self.story!r}>"
        return "<Decision not_found>"


def normalize_id(value):
    """
    Reduce an identity or owner reference to a plain identifier value.

    Accepts a User-like object (anything with an `id`), an int, or a
    string of digits. Everything else is returned unchanged so that
    unequal values stay unequal.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        return int(stripped) if stripped.isdigit() else stripped
    if hasattr(value, "id"):
        return normalize_id(value.id)
    return value


def owner_id_of(story):
    """Normalized owner id of a story, raw column first, then the relation."""
    owner = getattr(story, "user_id", None)
    if owner is None:
        owner = getattr(story, "user", None)
    return normalize_id(owner)


def is_owner(identity, story):
    identity_id = normalize_id(identity)
    # True == 1 in Python; a bool is never a user id
    if identity_id is None or isinstance(identity_id, bool):
        return False
    return identity_id == owner_id_of(story)


def authorize(identity, story, intent):
    """
    Decide what `identity` gets for `intent` on `story` (None = not found).

    Pure function of its inputs; never raises for a denied request.

    Raises:
        ValueError: if intent is not an Intent member.
    """
    if not isinstance(intent, Intent):
        raise ValueError(f"Unknown intent: {intent!r}")

    if story is None:
        return Decision.not_found()

    if intent is Intent.VIEW:
        if story.status == StoryStatus.PUBLIC.value or is_owner(identity, story):
            return Decision.allow(story)
        return Decision.not_found()

    # EDIT and DELETE are owner-only; others are sent back to the listing
    if is_owner(identity, story):
        return Decision.allow(story)
    return Decision.redirect()
