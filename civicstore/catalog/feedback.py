"""Resident feedback on handled service requests, plus summary statistics."""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from ..datastructures import DynamicArray, HashMap, InvalidArgumentError, KeyNotFoundError
from .models import FEEDBACK_ASPECTS, FeedbackStage, ServiceFeedback
from .service_desk import ServiceDesk

logger = logging.getLogger(__name__)

# Entries listed under "recent" in a summary.
RECENT_FEEDBACK = 10


@dataclass
class FeedbackSummary:
    total: int = 0
    average_overall_rating: float = 0.0
    average_ease_of_reporting: float = 0.0
    average_website_usability: float = 0.0
    average_information_clarity: float = 0.0
    # Percentage (0-100) of entries that would recommend the service.
    recommendation_rate: float = 0.0
    recent: DynamicArray[ServiceFeedback] = field(default_factory=DynamicArray)


class FeedbackBox:
    """Collects :class:`ServiceFeedback` in submission order.

    With a :class:`ServiceDesk` attached, every entry must name a reference
    the desk knows; the request id is then filled in from the desk.
    """

    def __init__(self, desk: Optional[ServiceDesk] = None) -> None:
        self._desk = desk
        self._next_id = 1
        self._entries: DynamicArray[ServiceFeedback] = DynamicArray()
        self._by_reference: HashMap[str, DynamicArray[ServiceFeedback]] = HashMap()

    def submit(
        self,
        reference_number: str,
        overall_rating: int,
        ease_of_reporting: int,
        website_usability: int,
        information_clarity: int,
        service_request_id: Optional[int] = None,
        comments: Optional[str] = None,
        went_well: Optional[str] = None,
        improvements: Optional[str] = None,
        would_recommend: bool = False,
        user_email: Optional[str] = None,
        user_phone: Optional[str] = None,
        created_at: Optional[datetime.datetime] = None,
    ) -> ServiceFeedback:
        """Validate and store one feedback entry at the submission stage."""
        if self._desk is not None:
            request, found = self._desk.get_by_reference(reference_number)
            if not found:
                raise KeyNotFoundError(reference_number)
            service_request_id = request.id  # type: ignore[union-attr]
        if service_request_id is None:
            raise InvalidArgumentError("service_request_id is required")

        entry = ServiceFeedback(
            id=self._next_id,
            service_request_id=service_request_id,
            reference_number=reference_number,
            overall_rating=overall_rating,
            ease_of_reporting=ease_of_reporting,
            website_usability=website_usability,
            information_clarity=information_clarity,
            created_at=created_at or datetime.datetime.now(),
            comments=comments,
            went_well=went_well,
            improvements=improvements,
            would_recommend=would_recommend,
            stage=FeedbackStage.SUBMISSION,
            user_email=user_email,
            user_phone=user_phone,
        )
        self._next_id += 1

        bucket, found = self._by_reference.try_get(reference_number)
        if not found:
            bucket = DynamicArray()
            self._by_reference.add(reference_number, bucket)
        bucket.append(entry)  # type: ignore[union-attr]
        self._entries.append(entry)

        logger.info("Feedback %d on %s: %d stars", entry.id, reference_number, overall_rating)
        return entry

    def for_request(self, reference_number: str) -> DynamicArray[ServiceFeedback]:
        bucket, found = self._by_reference.try_get(reference_number)
        return DynamicArray(bucket) if found else DynamicArray()

    def _average(self, rating: Callable[[ServiceFeedback], int]) -> float:
        if not self._entries:
            return 0.0
        return sum(rating(e) for e in self._entries) / len(self._entries)

    def summary(self, recent: int = RECENT_FEEDBACK) -> FeedbackSummary:
        """Averages per rated aspect, recommendation rate and the latest entries.

        ``recent`` holds up to `recent` of the newest entries, oldest first.
        Every figure is 0 when no feedback has been given.
        """
        total = len(self._entries)
        if total == 0:
            return FeedbackSummary()

        averages = {
            name: self._average(lambda e, n=name: getattr(e, n)) for name in FEEDBACK_ASPECTS
        }
        recommending = sum(1 for e in self._entries if e.would_recommend)
        return FeedbackSummary(
            total=total,
            average_overall_rating=self._average(lambda e: e.overall_rating),
            average_ease_of_reporting=averages["ease_of_reporting"],
            average_website_usability=averages["website_usability"],
            average_information_clarity=averages["information_clarity"],
            recommendation_rate=recommending * 100.0 / total,
            recent=self._entries[max(0, total - recent):],  # type: ignore[arg-type]
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ServiceFeedback]:
        return iter(self._entries)
