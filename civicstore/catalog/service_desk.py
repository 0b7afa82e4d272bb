"""Service-request intake and triage.

Reference numbers are ``SR`` + submission date (YYYYMMDD) + the request id
zero-padded to four digits, e.g. ``SR202510250007``.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterator, Optional, Tuple

from ..datastructures import AVLTreeMap, DynamicArray, HashMap, KeyNotFoundError, PriorityQueue
from .models import ServiceRequest, ServiceRequestStatus

logger = logging.getLogger(__name__)


def make_reference(request_id: int, created_at: datetime.datetime) -> str:
    return f"SR{created_at:%Y%m%d}{request_id:04d}"


class ServiceDesk:
    """Owns every index over submitted service requests."""

    def __init__(self) -> None:
        self._next_id = 1
        self._by_id: HashMap[int, ServiceRequest] = HashMap()
        self._by_reference: HashMap[str, ServiceRequest] = HashMap()
        self._by_created: AVLTreeMap[datetime.datetime, DynamicArray[ServiceRequest]] = AVLTreeMap()
        # (priority, id): lower priority number first, then submission order.
        self._triage: PriorityQueue[ServiceRequest] = PriorityQueue()

    # -----------------------------
    # Intake
    # -----------------------------
    def submit(
        self,
        location: str,
        category: str,
        description: str,
        priority: int = 5,
        submitted_by: Optional[str] = None,
        created_at: Optional[datetime.datetime] = None,
    ) -> ServiceRequest:
        """Validate and index a new request; returns it with id and reference set."""
        created_at = created_at or datetime.datetime.now()
        request_id = self._next_id
        request = ServiceRequest(
            id=request_id,
            reference_number=make_reference(request_id, created_at),
            location=location,
            category=category,
            description=description,
            created_at=created_at,
            priority=priority,
            submitted_by=submitted_by,
        )
        self._next_id += 1

        bucket, found = self._by_created.find(created_at)
        if not found:
            bucket = DynamicArray()
            self._by_created.insert(created_at, bucket)
        bucket.append(request)  # type: ignore[union-attr]
        self._triage.enqueue(request, (request.priority, request.id))
        self._by_id.add(request.id, request)
        self._by_reference.add(request.reference_number, request)

        logger.info("Submitted %s (%s, priority %d)", request.reference_number, category, priority)
        return request

    # -----------------------------
    # Lookups
    # -----------------------------
    def get(self, request_id: int) -> ServiceRequest:
        return self._by_id[request_id]

    def get_by_reference(self, reference: str) -> Tuple[Optional[ServiceRequest], bool]:
        return self._by_reference.try_get(reference)

    def recent(self, count: int = 5) -> DynamicArray[ServiceRequest]:
        """The `count` most recently created requests, newest first."""
        out: DynamicArray[ServiceRequest] = DynamicArray()
        pairs = self._by_created.in_order()
        for i in range(len(pairs) - 1, -1, -1):
            bucket = pairs[i][1]
            for j in range(len(bucket) - 1, -1, -1):
                if len(out) >= count:
                    return out
                out.append(bucket[j])
        return out

    def by_submitter(self, email: str) -> DynamicArray[ServiceRequest]:
        return DynamicArray(r for r in self if r.submitted_by == email)

    # -----------------------------
    # Triage
    # -----------------------------
    def _drop_stale(self) -> None:
        # Requests resolved or closed outside the queue are discarded lazily.
        while not self._triage.is_empty() and self._triage.peek().status != ServiceRequestStatus.SUBMITTED:
            self._triage.dequeue()

    def next_for_triage(self) -> Tuple[Optional[ServiceRequest], bool]:
        """Most urgent request still waiting, without taking it."""
        self._drop_stale()
        return self._triage.try_peek()

    def take_next(self) -> Tuple[Optional[ServiceRequest], bool]:
        """Dequeue the most urgent waiting request and mark it in progress."""
        self._drop_stale()
        request, found = self._triage.try_dequeue()
        if found:
            request.status = ServiceRequestStatus.IN_PROGRESS  # type: ignore[union-attr]
            logger.info("Triage picked %s", request.reference_number)  # type: ignore[union-attr]
        return request, found

    def triage_order(self) -> DynamicArray[ServiceRequest]:
        """Waiting requests from most to least urgent; the queue is not drained."""
        tmp: PriorityQueue[ServiceRequest] = PriorityQueue(self._triage.to_list())
        out: DynamicArray[ServiceRequest] = DynamicArray()
        while not tmp.is_empty():
            request = tmp.dequeue()
            if request.status == ServiceRequestStatus.SUBMITTED:
                out.append(request)
        return out

    def _set_status(self, reference: str, status: ServiceRequestStatus) -> ServiceRequest:
        request, found = self._by_reference.try_get(reference)
        if not found:
            raise KeyNotFoundError(reference)
        request.status = status  # type: ignore[union-attr]
        logger.info("%s -> %s", reference, status.value)
        return request  # type: ignore[return-value]

    def resolve(self, reference: str) -> ServiceRequest:
        return self._set_status(reference, ServiceRequestStatus.RESOLVED)

    def close(self, reference: str) -> ServiceRequest:
        return self._set_status(reference, ServiceRequestStatus.CLOSED)

    # -----------------------------
    # Container protocol
    # -----------------------------
    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[ServiceRequest]:
        """Requests in creation order."""
        for _, bucket in self._by_created.in_order():
            yield from bucket
