"""Event catalog: one write path fanning out to every event index.

The catalog owns all of its indices; nothing here is process-global. Callers
that share one catalog between threads must serialise writes themselves.

Indices
-------
- id store:        HashMap[int, Event]
- date index:      AVLTreeMap[date, DynamicArray[Event]]
- category index:  HashMap[str, DynamicArray[Event]]
- priority queue:  PriorityQueue[Event] keyed by ``event.priority``
- categories/tags: HashSet[str]

Every index write in :meth:`EventCatalog.add` is idempotent, and the id store
is written last, so a repeated ``add`` of the same event is always safe.
"""

from __future__ import annotations

import datetime
import logging
from typing import Iterable, Iterator, Optional, Tuple

from ..datastructures import (
    AVLTreeMap,
    DynamicArray,
    HashMap,
    HashSet,
    InvalidArgumentError,
    KeyNotFoundError,
    PriorityQueue,
)
from .models import Event, SearchPattern
from .recommendations import DEFAULT_LIMIT, recommend

logger = logging.getLogger(__name__)

# Number of recent search queries remembered per user.
RECENT_SEARCH_WINDOW = 10

SORT_KEYS = ("date", "priority", "title")


class EventCatalog:
    """Indexed, queryable collection of :class:`Event` records."""

    def __init__(self) -> None:
        self._store: HashMap[int, Event] = HashMap()
        self._by_date: AVLTreeMap[datetime.date, DynamicArray[Event]] = AVLTreeMap()
        self._by_category: HashMap[str, DynamicArray[Event]] = HashMap()
        self._priority: PriorityQueue[Event] = PriorityQueue()
        self._queued_ids: HashSet[int] = HashSet()
        self._categories: HashSet[str] = HashSet()
        self._tags: HashSet[str] = HashSet()
        self._patterns: HashMap[str, SearchPattern] = HashMap()

    # -----------------------------------------------------------
    # Write path
    # -----------------------------------------------------------
    @staticmethod
    def _append_once(bucket: DynamicArray[Event], event: Event) -> None:
        if bucket.first_or_default(lambda e: e.id == event.id) is None:
            bucket.append(event)

    def add(self, event: Event) -> bool:
        """Index `event` everywhere; return False if its id is already stored."""
        if not isinstance(event, Event):
            raise InvalidArgumentError(f"expected Event, got {type(event).__name__}")
        if self._store.contains_key(event.id):
            logger.warning("Event %s already catalogued; ignoring", event.id)
            return False

        bucket, found = self._by_date.find(event.event_date)
        if not found:
            bucket = DynamicArray()
            self._by_date.insert(event.event_date, bucket)
        self._append_once(bucket, event)  # type: ignore[arg-type]

        bucket, found = self._by_category.try_get(event.category)
        if not found:
            bucket = DynamicArray()
            self._by_category.add(event.category, bucket)
        self._append_once(bucket, event)  # type: ignore[arg-type]

        if self._queued_ids.add(event.id):
            self._priority.enqueue(event, event.priority)

        self._categories.add(event.category)
        for tag in event.tags:
            self._tags.add(tag)

        # Written last: presence in the store marks a completed fan-out.
        self._store.add(event.id, event)
        logger.debug("Indexed event %s (%s, %s)", event.id, event.category, event.event_date)
        return True

    def add_many(self, events: Iterable[Event]) -> int:
        """Add each event; return how many were new."""
        added = sum(1 for e in events if self.add(e))
        logger.info("Catalogued %d new events (%d total)", added, len(self))
        return added

    # -----------------------------------------------------------
    # Lookups
    # -----------------------------------------------------------
    def get(self, event_id: int) -> Event:
        return self._store[event_id]

    def try_get(self, event_id: int) -> Tuple[Optional[Event], bool]:
        return self._store.try_get(event_id)

    def by_category(self, category: str) -> DynamicArray[Event]:
        bucket, found = self._by_category.try_get(category)
        return DynamicArray(bucket) if found else DynamicArray()

    def in_range(self, start: datetime.date, end: datetime.date) -> DynamicArray[Event]:
        """Events dated within ``[start, end]``, ascending by date."""
        out: DynamicArray[Event] = DynamicArray()
        if start > end:
            return out
        for _, bucket in self._by_date.range(start, end):
            out.extend(bucket)
        return out

    def upcoming(self, today: datetime.date) -> DynamicArray[Event]:
        """Events on or after `today`, ascending by date."""
        if len(self._by_date) == 0:
            return DynamicArray()
        return self.in_range(today, self._by_date.max_key())

    def featured(self, today: datetime.date) -> DynamicArray[Event]:
        return self.upcoming(today).where(lambda e: e.is_featured)

    def next_priority(self) -> Event:
        """The most urgent event (lowest priority number); raises when empty."""
        return self._priority.peek()

    def priority_order(self, limit: Optional[int] = None) -> DynamicArray[Event]:
        """Events from most to least urgent, without draining the queue."""
        tmp: PriorityQueue[Event] = PriorityQueue(self._priority.to_list())
        out: DynamicArray[Event] = DynamicArray()
        while not tmp.is_empty() and (limit is None or len(out) < limit):
            out.append(tmp.dequeue())
        return out

    def categories(self) -> HashSet[str]:
        return HashSet(self._categories)

    def tags(self) -> HashSet[str]:
        return HashSet(self._tags)

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        start: Optional[datetime.date] = None,
        end: Optional[datetime.date] = None,
        sort_by: str = "date",
    ) -> DynamicArray[Event]:
        """Filter by category, free-text query and date range, then sort.

        ``category`` of None, "" or "All" means every category. ``sort_by`` is
        one of "date", "priority" or "title" (case-insensitive title order).
        """
        sort_by = (sort_by or "date").lower()
        if sort_by not in SORT_KEYS:
            raise InvalidArgumentError(f"sort_by must be one of {SORT_KEYS}")

        if category and category != "All":
            candidates = self.by_category(category)
        else:
            candidates = DynamicArray(self)

        if query:
            candidates = candidates.where(lambda e: e.matches(query))
        if start is not None:
            candidates = candidates.where(lambda e: e.event_date >= start)
        if end is not None:
            candidates = candidates.where(lambda e: e.event_date <= end)

        if sort_by == "priority":
            ordered = sorted(candidates, key=lambda e: e.priority)
        elif sort_by == "title":
            ordered = sorted(candidates, key=lambda e: e.title.lower())
        else:
            ordered = sorted(candidates, key=lambda e: e.event_date)
        return DynamicArray(ordered)

    # -----------------------------------------------------------
    # Search tracking & recommendations
    # -----------------------------------------------------------
    def _pattern_for(self, user_id: str) -> SearchPattern:
        pattern, found = self._patterns.try_get(user_id)
        if not found:
            pattern = SearchPattern(user_id=user_id)
            self._patterns.add(user_id, pattern)
        return pattern  # type: ignore[return-value]

    def pattern(self, user_id: str) -> Tuple[Optional[SearchPattern], bool]:
        return self._patterns.try_get(user_id)

    def track_search(
        self,
        user_id: str,
        query: Optional[str] = None,
        category: Optional[str] = None,
        when: Optional[datetime.datetime] = None,
    ) -> SearchPattern:
        """Record a search; keeps the last RECENT_SEARCH_WINDOW queries."""
        if not user_id:
            raise InvalidArgumentError("user_id is required")
        pattern = self._pattern_for(user_id)

        if query:
            pattern.recent_searches.enqueue(query)
            while len(pattern.recent_searches) > RECENT_SEARCH_WINDOW:
                pattern.recent_searches.dequeue()

        if category and category != "All":
            count = pattern.category_preferences.get(category, 0)
            pattern.category_preferences.add(category, count + 1)

        pattern.last_search = when or datetime.datetime.now()
        return pattern

    def track_view(self, user_id: str, event_id: int) -> Event:
        """Mark `event_id` viewed by `user_id` and bump its view count."""
        if not user_id:
            raise InvalidArgumentError("user_id is required")
        event, found = self._store.try_get(event_id)
        if not found:
            raise KeyNotFoundError(event_id)
        self._pattern_for(user_id).viewed_event_ids.add(event_id)
        event.view_count += 1  # type: ignore[union-attr]
        return event  # type: ignore[return-value]

    def recommend(self, user_id: str, today: datetime.date, limit: int = DEFAULT_LIMIT) -> DynamicArray[Event]:
        """Best events for `user_id`, or featured upcoming events for unknown users."""
        pattern, found = self._patterns.try_get(user_id)
        if not found:
            return self.featured(today)
        return recommend(self._store.values(), pattern, today, limit=limit)  # type: ignore[arg-type]

    # -----------------------------------------------------------
    # Container protocol
    # -----------------------------------------------------------
    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, event_id: int) -> bool:
        return self._store.contains_key(event_id)

    def __iter__(self) -> Iterator[Event]:
        """Every event in ascending date order."""
        for _, bucket in self._by_date.in_order():
            yield from bucket
