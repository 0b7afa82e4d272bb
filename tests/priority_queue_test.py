import pytest

from civicstore.datastructures import EmptyCollectionError, PriorityQueue


def test_lowest_priority_value_first():
    pq = PriorityQueue()
    pq.enqueue("low", 5)
    pq.enqueue("urgent", 1)
    pq.enqueue("mid", 3)
    assert pq.peek() == "urgent"
    assert pq.peek_priority() == 1
    assert [pq.dequeue() for _ in range(3)] == ["urgent", "mid", "low"]
    assert pq.is_empty()


def test_bulk_constructor_heapifies():
    pairs = [(f"item{p}", p) for p in [9, 4, 7, 1, 8, 2, 6, 3, 5]]
    pq = PriorityQueue(pairs)
    assert len(pq) == 9
    assert [pq.dequeue() for _ in range(9)] == [f"item{p}" for p in range(1, 10)]


def test_heap_array_parent_never_greater_than_children():
    pq = PriorityQueue()
    for p in [5, 3, 8, 1, 9, 2, 7]:
        pq.enqueue(p, p)
    prios = [p for _, p in pq.to_list()]
    for i in range(1, len(prios)):
        assert prios[(i - 1) // 2] <= prios[i]


def test_items_need_not_be_comparable():
    pq = PriorityQueue()
    a, b = object(), object()
    pq.enqueue(a, 2)
    pq.enqueue(b, 2)
    pq.enqueue({"x": 1}, 1)
    assert pq.dequeue() == {"x": 1}
    assert {id(pq.dequeue()), id(pq.dequeue())} == {id(a), id(b)}


def test_tuple_priorities():
    pq = PriorityQueue()
    pq.enqueue("second", (1, 2))
    pq.enqueue("third", (2, 0))
    pq.enqueue("first", (1, 1))
    assert [pq.dequeue() for _ in range(3)] == ["first", "second", "third"]


def test_empty_queue_behaviour():
    pq = PriorityQueue()
    with pytest.raises(EmptyCollectionError):
        pq.dequeue()
    with pytest.raises(EmptyCollectionError):
        pq.peek()
    with pytest.raises(EmptyCollectionError):
        pq.peek_priority()
    assert pq.try_dequeue() == (None, False)
    assert pq.try_peek() == (None, False)


def test_clear():
    pq = PriorityQueue([("a", 1), ("b", 2)])
    assert pq.try_peek() == ("a", True)
    pq.clear()
    assert len(pq) == 0
    assert pq.to_list() == []
