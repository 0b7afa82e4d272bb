import datetime
from typing import Iterable

from ..datastructures import DynamicArray, PriorityQueue
from .models import Event, SearchPattern

DEFAULT_LIMIT = 5

# Events further away than this get no urgency bonus.
UPCOMING_WINDOW_DAYS = 30


# -----------------------------------------------------------
# Scoring
# -----------------------------------------------------------
def score_event(event: Event, pattern: SearchPattern, today: datetime.date) -> float:
    """Relevance of `event` to the user described by `pattern`.

    score = 10 * searches in the event's category
          +  5 * (4 - priority)                      # priority 1 -> 15, 3 -> 5
          + (30 - days_until) / 3                    # only within 30 days
          + 0.5 * view_count
    """
    score = 0.0
    score += pattern.category_preferences.get(event.category, 0) * 10
    score += (4 - event.priority) * 5

    days_until = (event.event_date - today).days
    if 0 <= days_until <= UPCOMING_WINDOW_DAYS:
        score += (UPCOMING_WINDOW_DAYS - days_until) / 3

    score += event.view_count * 0.5
    return score


# -----------------------------------------------------------
# Ranking
# -----------------------------------------------------------
def recommend(
    events: Iterable[Event],
    pattern: SearchPattern,
    today: datetime.date,
    limit: int = DEFAULT_LIMIT,
) -> DynamicArray[Event]:
    """Return up to `limit` unviewed events, highest score first.

    The queue is a min-heap, so scores are pushed negated to pop the best
    event first. Ties come out in no particular order.
    """
    ranked: PriorityQueue[Event] = PriorityQueue()
    for event in events:
        if pattern.viewed_event_ids.contains(event.id):
            continue
        ranked.enqueue(event, -score_event(event, pattern, today))

    out: DynamicArray[Event] = DynamicArray()
    while len(out) < limit:
        event, found = ranked.try_dequeue()
        if not found:
            break
        out.append(event)
    return out
