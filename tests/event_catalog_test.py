import datetime as dt
import logging

import pytest

from civicstore.catalog import Event, EventCatalog, SearchPattern, score_event
from civicstore.datastructures import InvalidArgumentError, KeyNotFoundError

TODAY = dt.date(2025, 10, 1)


def make_event(event_id, days, category="Community", priority=3, **kw):
    return Event(
        id=event_id,
        title=kw.pop("title", f"Event {event_id}"),
        category=category,
        event_date=TODAY + dt.timedelta(days=days),
        location=kw.pop("location", "Town Hall"),
        priority=priority,
        **kw,
    )


@pytest.fixture
def catalog():
    c = EventCatalog()
    c.add_many([
        make_event(1, 10, "Sports", priority=2, title="Marathon", tags=("running",)),
        make_event(2, 3, "Culture", priority=1, title="Jazz Night", is_featured=True),
        make_event(3, -5, "Sports", priority=3, title="Past Game"),
        make_event(4, 40, "Health", priority=2, title="Blood Drive", description="Give blood"),
        make_event(5, 3, "Community", priority=3, title="clean-up day", tags=("parks", "volunteer")),
    ])
    return c


# ----------------------------
# Records
# ----------------------------

def test_event_validation():
    with pytest.raises(InvalidArgumentError):
        make_event(1, 0, title="  ")
    with pytest.raises(InvalidArgumentError):
        make_event(1, 0, priority=7)
    with pytest.raises(InvalidArgumentError):
        make_event(1, 5, end_date=TODAY)


def test_event_datetime_is_coerced_to_date():
    e = Event(id=1, title="t", category="c", location="l",
              event_date=dt.datetime(2025, 10, 1, 18, 30))
    assert e.event_date == dt.date(2025, 10, 1)
    assert not isinstance(e.event_date, dt.datetime)


def test_event_matches_text_fields_and_tags():
    e = make_event(1, 0, title="Farmers Market", tags=("Food",), description="fresh produce")
    assert e.matches("market")
    assert e.matches("PRODUCE")
    assert e.matches("food")
    assert e.matches("town hall")
    assert not e.matches("concert")


# ----------------------------
# Indexing
# ----------------------------

def test_add_fans_out_to_every_index(catalog):
    assert len(catalog) == 5
    assert 2 in catalog
    assert catalog.get(2).title == "Jazz Night"
    assert [e.id for e in catalog.by_category("Sports")] == [1, 3]
    assert sorted(catalog.categories()) == ["Community", "Culture", "Health", "Sports"]
    assert sorted(catalog.tags()) == ["parks", "running", "volunteer"]


def test_duplicate_add_is_rejected_without_double_indexing(catalog, caplog):
    with caplog.at_level(logging.WARNING):
        assert catalog.add(make_event(1, 10, "Sports", title="Other")) is False
    assert "already catalogued" in caplog.text
    assert len(catalog) == 5
    assert [e.id for e in catalog.by_category("Sports")] == [1, 3]
    assert len(catalog.priority_order()) == 5
    assert catalog.get(1).title == "Marathon"


def test_add_rejects_non_events():
    with pytest.raises(InvalidArgumentError):
        EventCatalog().add({"id": 1})


def test_lookup_missing_event(catalog):
    with pytest.raises(KeyNotFoundError):
        catalog.get(999)
    assert catalog.try_get(999) == (None, False)
    assert catalog.by_category("Nope").to_list() == []


def test_iteration_is_date_ordered(catalog):
    assert [e.id for e in catalog] == [3, 2, 5, 1, 4]


def test_in_range_and_upcoming(catalog):
    start, end = TODAY, TODAY + dt.timedelta(days=10)
    assert [e.id for e in catalog.in_range(start, end)] == [2, 5, 1]
    assert catalog.in_range(end, start).to_list() == []
    assert [e.id for e in catalog.upcoming(TODAY)] == [2, 5, 1, 4]
    assert [e.id for e in catalog.featured(TODAY)] == [2]
    assert EventCatalog().upcoming(TODAY).to_list() == []


def test_in_range_after_last_event_is_empty():
    c = EventCatalog()
    c.add(Event(id=1, title="New Year Fair", category="Community", location="Square",
                event_date=dt.date(2025, 1, 1)))
    assert c.in_range(dt.date(2025, 6, 1), dt.date(2025, 12, 31)).to_list() == []
    assert c.upcoming(dt.date(2025, 6, 1)).to_list() == []
    assert c.search(start=dt.date(2025, 6, 1)).to_list() == []


def test_priority_order_does_not_drain(catalog):
    assert catalog.next_priority().id == 2
    first = [e.priority for e in catalog.priority_order()]
    assert first == sorted(first)
    assert [e.priority for e in catalog.priority_order(limit=3)] == [1, 2, 2]
    assert len(catalog.priority_order()) == 5


# ----------------------------
# Search
# ----------------------------

def test_search_filters_and_sorts(catalog):
    assert [e.id for e in catalog.search(category="Sports")] == [3, 1]
    assert [e.id for e in catalog.search(category="All", query="blood")] == [4]
    assert [e.id for e in catalog.search(query="VOLUNTEER")] == [5]
    assert [e.id for e in catalog.search(start=TODAY, end=TODAY + dt.timedelta(days=5))] == [2, 5]
    assert [e.title for e in catalog.search(sort_by="title")] == [
        "Blood Drive", "clean-up day", "Jazz Night", "Marathon", "Past Game",
    ]
    assert [e.priority for e in catalog.search(sort_by="priority")] == [1, 2, 2, 3, 3]


def test_search_rejects_unknown_sort(catalog):
    with pytest.raises(InvalidArgumentError):
        catalog.search(sort_by="popularity")


# ----------------------------
# Tracking & recommendations
# ----------------------------

def test_track_search_keeps_recent_window_and_counts_categories(catalog):
    for i in range(12):
        catalog.track_search("u1", query=f"q{i}", category="Sports")
    catalog.track_search("u1", category="All")
    pattern, found = catalog.pattern("u1")
    assert found
    assert pattern.recent_searches.to_list() == [f"q{i}" for i in range(2, 12)]
    assert pattern.category_preferences["Sports"] == 12
    assert "All" not in pattern.category_preferences
    assert catalog.pattern("ghost") == (None, False)


def test_track_view_bumps_count(catalog):
    e = catalog.track_view("u1", 4)
    assert e.view_count == 1
    pattern, _ = catalog.pattern("u1")
    assert 4 in pattern.viewed_event_ids
    with pytest.raises(KeyNotFoundError):
        catalog.track_view("u1", 999)
    with pytest.raises(InvalidArgumentError):
        catalog.track_view("", 4)


def test_score_event_formula():
    pattern = SearchPattern(user_id="u")
    pattern.category_preferences["Sports"] = 2
    e = make_event(1, 6, "Sports", priority=1, view_count=4)
    # 2*10 + (4-1)*5 + (30-6)/3 + 4*0.5
    assert score_event(e, pattern, TODAY) == 20 + 15 + 8 + 2
    far = make_event(2, 31, "Health", priority=3)
    assert score_event(far, pattern, TODAY) == 5


def test_recommend_prefers_searched_category_and_skips_viewed(catalog):
    catalog.track_search("fan", category="Sports")
    catalog.track_search("fan", category="Sports")
    recs = catalog.recommend("fan", TODAY, limit=3)
    assert recs[0].id == 1
    assert len(recs) == 3

    catalog.track_view("fan", 1)
    assert 1 not in [e.id for e in catalog.recommend("fan", TODAY)]


def test_recommend_for_unknown_user_falls_back_to_featured(catalog):
    assert [e.id for e in catalog.recommend("stranger", TODAY)] == [2]
