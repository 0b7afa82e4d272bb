import pytest

from civicstore.datastructures import DoublyLinkedList, EmptyCollectionError, IndexOutOfRangeError


def test_append_prepend_and_order():
    lst = DoublyLinkedList([2, 3])
    lst.prepend(1)
    lst.append(4)
    assert lst.to_list() == [1, 2, 3, 4]
    assert list(reversed(lst)) == [4, 3, 2, 1]
    assert len(lst) == 4


def test_indexed_access_from_both_ends():
    lst = DoublyLinkedList(range(10))
    for i in range(10):
        assert lst[i] == i
    lst[7] = 70
    assert lst.get(7) == 70
    with pytest.raises(IndexOutOfRangeError):
        lst.get(10)
    with pytest.raises(IndexOutOfRangeError):
        lst.get(-1)


def test_remove_by_value_and_index():
    lst = DoublyLinkedList(["a", "b", "c", "b"])
    assert lst.remove("b") is True
    assert lst.to_list() == ["a", "c", "b"]
    assert lst.remove("zzz") is False
    assert lst.remove_at(0) == "a"
    assert lst.remove_at(1) == "b"
    assert lst.to_list() == ["c"]


def test_remove_head_and_tail_keep_links_consistent():
    lst = DoublyLinkedList([1, 2, 3])
    lst.remove(1)
    lst.remove(3)
    assert lst.to_list() == [2]
    assert list(reversed(lst)) == [2]
    lst.remove(2)
    assert len(lst) == 0
    lst.append(9)
    assert lst.to_list() == [9]


def test_pop_front_and_back():
    lst = DoublyLinkedList([1, 2, 3])
    assert lst.pop_front() == 1
    assert lst.pop_back() == 3
    assert lst.pop_back() == 2
    with pytest.raises(EmptyCollectionError):
        lst.pop_front()


def test_predicate_helpers():
    lst = DoublyLinkedList([("k1", 1), ("k2", 2)])
    assert lst.first_or_default(lambda p: p[0] == "k2") == ("k2", 2)
    assert lst.first_or_default(lambda p: p[0] == "k3") is None
    assert lst.remove_first(lambda p: p[0] == "k1") == ("k1", 1)
    assert lst.remove_first(lambda p: p[0] == "k1") is None
    assert lst.index_of(("k2", 2)) == 0
    assert ("k2", 2) in lst


def test_clear():
    lst = DoublyLinkedList(range(5))
    lst.clear()
    assert len(lst) == 0
    assert list(lst) == []
