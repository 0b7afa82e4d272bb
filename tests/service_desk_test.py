import datetime as dt

import pytest

from civicstore.catalog import NavigationHistory, ServiceDesk, ServiceRequestStatus, make_reference
from civicstore.datastructures import InvalidArgumentError, KeyNotFoundError

T0 = dt.datetime(2025, 10, 25, 9, 0)


def at(minutes):
    return T0 + dt.timedelta(minutes=minutes)


@pytest.fixture
def desk():
    d = ServiceDesk()
    d.submit("Main St", "roads", "Pothole", priority=3, created_at=at(0), submitted_by="ann@example.org")
    d.submit("Park Ave", "sanitation", "Overflowing bin", priority=5, created_at=at(5))
    d.submit("Elm St", "safety", "Broken streetlight", priority=1, created_at=at(10), submitted_by="ann@example.org")
    d.submit("Oak Rd", "utilities", "Water leak", priority=1, created_at=at(15))
    return d


# ----------------------------
# Intake
# ----------------------------

def test_reference_numbers():
    assert make_reference(7, T0) == "SR202510250007"


def test_submit_assigns_ids_and_references(desk):
    assert len(desk) == 4
    r = desk.get(3)
    assert r.reference_number == "SR202510250003"
    assert r.status is ServiceRequestStatus.SUBMITTED
    found, ok = desk.get_by_reference("SR202510250003")
    assert ok and found is r
    assert desk.get_by_reference("SR000") == (None, False)
    with pytest.raises(KeyNotFoundError):
        desk.get(99)


@pytest.mark.parametrize("kwargs", [
    dict(location="", category="roads", description="x"),
    dict(location="a", category="weather", description="x"),
    dict(location="a", category="roads", description=" "),
    dict(location="a", category="roads", description="x", priority=0),
    dict(location="a", category="roads", description="x", priority=6),
])
def test_submit_validates(kwargs):
    d = ServiceDesk()
    with pytest.raises(InvalidArgumentError):
        d.submit(**kwargs)
    assert len(d) == 0
    # a rejected submission does not consume an id
    assert d.submit("a", "roads", "x", created_at=T0).id == 1


def test_creation_order_and_recent(desk):
    assert [r.id for r in desk] == [1, 2, 3, 4]
    assert [r.id for r in desk.recent(2)] == [4, 3]
    assert [r.id for r in desk.recent(10)] == [4, 3, 2, 1]


def test_requests_sharing_a_timestamp():
    d = ServiceDesk()
    d.submit("a", "roads", "x", created_at=T0)
    d.submit("b", "roads", "y", created_at=T0)
    assert [r.id for r in d] == [1, 2]
    assert [r.id for r in d.recent(1)] == [2]


def test_by_submitter(desk):
    assert [r.id for r in desk.by_submitter("ann@example.org")] == [1, 3]
    assert desk.by_submitter("nobody@example.org").to_list() == []


# ----------------------------
# Triage
# ----------------------------

def test_triage_order_is_priority_then_submission(desk):
    assert [r.id for r in desk.triage_order()] == [3, 4, 1, 2]
    # listing does not consume the queue
    assert len(desk.triage_order()) == 4


def test_take_next_marks_in_progress(desk):
    r, ok = desk.take_next()
    assert ok and r.id == 3
    assert r.status is ServiceRequestStatus.IN_PROGRESS
    nxt, ok = desk.next_for_triage()
    assert ok and nxt.id == 4


def test_resolved_requests_leave_the_queue(desk):
    desk.resolve("SR202510250003")
    desk.close("SR202510250004")
    assert desk.get(3).status is ServiceRequestStatus.RESOLVED
    assert [r.id for r in desk.triage_order()] == [1, 2]
    r, _ = desk.next_for_triage()
    assert r.id == 1


def test_status_change_unknown_reference(desk):
    with pytest.raises(KeyNotFoundError):
        desk.resolve("SR-missing")


def test_empty_desk_triage():
    d = ServiceDesk()
    assert d.next_for_triage() == (None, False)
    assert d.take_next() == (None, False)
    assert d.triage_order().to_list() == []


# ----------------------------
# Navigation history
# ----------------------------

def test_navigation_back_and_current():
    nav = NavigationHistory()
    assert nav.current() == (None, False)
    for page in ["home", "events", "event/4"]:
        nav.visit(page)
    assert nav.current() == ("event/4", True)
    assert nav.back() == ("event/4", True)
    assert nav.current() == ("events", True)
    assert len(nav) == 2


def test_navigation_depth_discards_oldest():
    nav = NavigationHistory(depth=3)
    for page in ["a", "b", "c", "d", "e"]:
        nav.visit(page)
    assert nav.to_list() == ["e", "d", "c"]
    assert len(nav) == 3


def test_navigation_depth_must_be_positive():
    with pytest.raises(InvalidArgumentError):
        NavigationHistory(depth=0)
