from .models import (
    EVENT_CATEGORIES,
    SERVICE_CATEGORIES,
    Event,
    FeedbackStage,
    SearchPattern,
    ServiceFeedback,
    ServiceRequest,
    ServiceRequestStatus,
    User,
)
from .event_catalog import EventCatalog
from .navigation import NavigationHistory
from .recommendations import recommend, score_event
from .service_desk import ServiceDesk, make_reference
from .feedback import FeedbackBox, FeedbackSummary
from .accounts import AccountDirectory

__all__ = [
    "EVENT_CATEGORIES",
    "SERVICE_CATEGORIES",
    "Event",
    "FeedbackStage",
    "SearchPattern",
    "ServiceFeedback",
    "ServiceRequest",
    "ServiceRequestStatus",
    "User",
    "EventCatalog",
    "NavigationHistory",
    "recommend",
    "score_event",
    "ServiceDesk",
    "make_reference",
    "FeedbackBox",
    "FeedbackSummary",
    "AccountDirectory",
]
