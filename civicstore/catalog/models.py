"""
Record types handled by the catalog layer.

Records validate themselves on construction so that every index write in
:class:`~civicstore.catalog.event_catalog.EventCatalog` and
:class:`~civicstore.catalog.service_desk.ServiceDesk` operates on data that
cannot make an index insert fail half way through a fan-out.
"""

from __future__ import annotations

import datetime
import enum
import re
from dataclasses import dataclass, field
from typing import Optional

from ..datastructures import HashMap, HashSet, InvalidArgumentError, Queue

# Event priority: 1 = high, 2 = medium, 3 = low.
EVENT_PRIORITIES = (1, 2, 3)

# Service request priority: 1 = urgent ... 5 = low.
SERVICE_PRIORITY_RANGE = (1, 5)

SERVICE_CATEGORIES = ("sanitation", "roads", "utilities", "safety", "parks")

# Feedback ratings are 1 to 5 stars.
RATING_RANGE = (1, 5)

MAX_COMMENT_LENGTH = 1000
MAX_NOTE_LENGTH = 500
MAX_NAME_LENGTH = 50

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^\+?[\d\s()-]{6,20}$")

EVENT_CATEGORIES = (
    "Community",
    "Sports",
    "Culture",
    "Education",
    "Health",
    "Environment",
    "Safety",
    "Infrastructure",
)


def _require_text(name: str, value: Optional[str]) -> None:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{name} is required")


@dataclass
class Event:
    """A local event or announcement."""

    id: int
    title: str
    category: str
    event_date: datetime.date
    location: str
    description: str = ""
    priority: int = 3
    tags: tuple[str, ...] = ()
    organizer: Optional[str] = None
    end_date: Optional[datetime.date] = None
    is_featured: bool = False
    view_count: int = 0

    def __post_init__(self) -> None:
        if self.id is None:
            raise InvalidArgumentError("event id is required")
        _require_text("title", self.title)
        _require_text("category", self.category)
        _require_text("location", self.location)
        if not isinstance(self.event_date, datetime.date):
            raise InvalidArgumentError("event_date must be a date")
        if isinstance(self.event_date, datetime.datetime):
            self.event_date = self.event_date.date()
        if self.priority not in EVENT_PRIORITIES:
            raise InvalidArgumentError(f"priority must be one of {EVENT_PRIORITIES}")
        if self.end_date is not None and self.end_date < self.event_date:
            raise InvalidArgumentError("end_date cannot precede event_date")
        self.tags = tuple(self.tags)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on title, description, location and tags."""
        q = query.lower()
        if q in self.title.lower() or q in self.description.lower() or q in self.location.lower():
            return True
        return any(q in t.lower() for t in self.tags)


class ServiceRequestStatus(enum.Enum):
    SUBMITTED = "Submitted"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"
    CLOSED = "Closed"


@dataclass
class ServiceRequest:
    """A reported municipal issue (ticket)."""

    id: int
    reference_number: str
    location: str
    category: str
    description: str
    created_at: datetime.datetime
    priority: int = 5
    submitted_by: Optional[str] = None
    status: ServiceRequestStatus = ServiceRequestStatus.SUBMITTED

    def __post_init__(self) -> None:
        _require_text("location", self.location)
        _require_text("description", self.description)
        if self.category not in SERVICE_CATEGORIES:
            raise InvalidArgumentError(
                f"category must be one of {', '.join(SERVICE_CATEGORIES)}; got {self.category!r}"
            )
        lo, hi = SERVICE_PRIORITY_RANGE
        if not (lo <= self.priority <= hi):
            raise InvalidArgumentError(f"priority must be between {lo} and {hi}")


@dataclass
class SearchPattern:
    """Per-user search history used for recommendations."""

    user_id: str
    recent_searches: Queue[str] = field(default_factory=Queue)
    category_preferences: HashMap[str, int] = field(default_factory=HashMap)
    viewed_event_ids: HashSet[int] = field(default_factory=HashSet)
    last_search: Optional[datetime.datetime] = None


def _check_length(name: str, value: Optional[str], limit: int) -> None:
    if value is not None and len(value) > limit:
        raise InvalidArgumentError(f"{name} cannot exceed {limit} characters")


class FeedbackStage(enum.Enum):
    SUBMISSION = "Submission"
    PROGRESS = "Progress"
    RESOLUTION = "Resolution"


# Aspect fields rated alongside the overall score.
FEEDBACK_ASPECTS = ("ease_of_reporting", "website_usability", "information_clarity")


@dataclass
class ServiceFeedback:
    """Star ratings and comments left against one service request."""

    id: int
    service_request_id: int
    reference_number: str
    overall_rating: int
    ease_of_reporting: int
    website_usability: int
    information_clarity: int
    created_at: datetime.datetime
    comments: Optional[str] = None
    went_well: Optional[str] = None
    improvements: Optional[str] = None
    would_recommend: bool = False
    stage: FeedbackStage = FeedbackStage.SUBMISSION
    user_email: Optional[str] = None
    user_phone: Optional[str] = None

    def __post_init__(self) -> None:
        _require_text("reference_number", self.reference_number)
        lo, hi = RATING_RANGE
        for name in ("overall_rating",) + FEEDBACK_ASPECTS:
            value = getattr(self, name)
            if not isinstance(value, int) or not (lo <= value <= hi):
                raise InvalidArgumentError(f"{name} must be between {lo} and {hi}")
        _check_length("comments", self.comments, MAX_COMMENT_LENGTH)
        _check_length("went_well", self.went_well, MAX_NOTE_LENGTH)
        _check_length("improvements", self.improvements, MAX_NOTE_LENGTH)


@dataclass
class User:
    """A registered resident. Credentials are not held here."""

    id: int
    email: str
    first_name: str
    last_name: str
    created_at: datetime.datetime
    phone_number: Optional[str] = None
    last_login_at: Optional[datetime.datetime] = None
    is_active: bool = True

    def __post_init__(self) -> None:
        if not self.email or not _EMAIL_RE.match(self.email):
            raise InvalidArgumentError(f"invalid email address: {self.email!r}")
        _require_text("first_name", self.first_name)
        _require_text("last_name", self.last_name)
        _check_length("first_name", self.first_name, MAX_NAME_LENGTH)
        _check_length("last_name", self.last_name, MAX_NAME_LENGTH)
        if self.phone_number and not _PHONE_RE.match(self.phone_number):
            raise InvalidArgumentError(f"invalid phone number: {self.phone_number!r}")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
