import random

import pytest

from civicstore.datastructures import AVLTreeMap, InvalidArgumentError, KeyNotFoundError, OrderedMap

TREE_TYPES = [OrderedMap, AVLTreeMap]


def _assert_avl(node):
    """Return subtree height, checking balance and cached heights on the way."""
    if node is None:
        return 0
    lh = _assert_avl(node.left)
    rh = _assert_avl(node.right)
    assert abs(lh - rh) <= 1, f"unbalanced at {node.key!r}"
    assert node.height == 1 + max(lh, rh)
    return 1 + max(lh, rh)


# ----------------------------
# Behaviour shared by both trees
# ----------------------------

@pytest.mark.parametrize("cls", TREE_TYPES)
def test_insert_find_and_update(cls):
    m = cls()
    assert m.insert(5, "five") is True
    assert m.insert(3, "three") is True
    assert m.insert(5, "FIVE") is False
    assert len(m) == 2
    assert m.find(5) == ("FIVE", True)
    assert m.find(4) == (None, False)
    assert m[3] == "three"
    assert m.get(99, "none") == "none"


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_in_order_is_sorted(cls):
    m = cls()
    keys = [50, 20, 70, 10, 30, 60, 80, 25]
    for k in keys:
        m[k] = str(k)
    assert m.keys().to_list() == sorted(keys)
    assert [k for k, _ in m.in_order()] == sorted(keys)
    assert list(m) == sorted(keys)
    assert m.values().to_list() == [str(k) for k in sorted(keys)]


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_range_is_inclusive(cls):
    m = cls()
    for k in range(0, 100, 10):
        m[k] = k
    assert [k for k, _ in m.range(20, 50)] == [20, 30, 40, 50]
    assert [k for k, _ in m.range(15, 35)] == [20, 30]
    assert m.range(101, 200).to_list() == []


@pytest.mark.parametrize("cls", TREE_TYPES)
@pytest.mark.parametrize("keys", [[1, 2, 3], [3, 2, 1], [2, 1, 3]])
def test_range_above_every_key_is_empty(cls, keys):
    m = cls()
    for k in keys:
        m[k] = k
    assert m.range(10, 20).to_list() == []
    assert m.range(-5, 0).to_list() == []
    assert [k for k, _ in m.range(3, 99)] == [3]


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_range_on_empty_map(cls):
    assert cls().range(0, 10).to_list() == []


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_min_max_and_empty(cls):
    m = cls()
    with pytest.raises(KeyNotFoundError):
        m.min_key()
    with pytest.raises(KeyNotFoundError):
        m.max_key()
    assert m.height() == 0
    for k in [8, 3, 12]:
        m[k] = None
    assert m.min_key() == 3
    assert m.max_key() == 12


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_missing_key_and_none_key(cls):
    m = cls()
    with pytest.raises(KeyNotFoundError):
        _ = m["absent"]
    with pytest.raises(InvalidArgumentError):
        m.insert(None, 1)
    assert m.find(None) == (None, False)
    assert m.remove(None) is False


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_remove_leaf_single_child_and_two_children(cls):
    m = cls()
    for k in [50, 30, 70, 20, 40, 60, 80, 35]:
        m[k] = k
    assert m.remove(20) is True   # leaf
    assert m.remove(40) is True   # one child (35)
    assert m.remove(50) is True   # two children / root
    assert m.remove(50) is False
    assert m.keys().to_list() == [30, 35, 60, 70, 80]
    assert len(m) == 5
    for k in [30, 35, 60, 70, 80]:
        assert m[k] == k


@pytest.mark.parametrize("cls", TREE_TYPES)
def test_clear(cls):
    m = cls()
    for k in range(5):
        m[k] = k
    m.clear()
    assert len(m) == 0
    assert m.in_order().to_list() == []


# ----------------------------
# Shape
# ----------------------------

def test_plain_bst_degenerates_on_sorted_input():
    m = OrderedMap()
    for k in range(200):
        m.insert(k, k)
    assert m.height() == 200
    assert m[199] == 199
    assert m.remove(0)
    assert m.height() == 199


def test_avl_stays_logarithmic_on_sorted_input():
    m = AVLTreeMap()
    for k in range(1, 1024):
        m.insert(k, k)
    # a perfectly balanced tree of 1023 nodes has 10 levels
    assert m.height() == 10
    _assert_avl(m._root)


@pytest.mark.parametrize("keys", [
    [3, 2, 1],  # left-left
    [1, 2, 3],  # right-right
    [3, 1, 2],  # left-right
    [1, 3, 2],  # right-left
])
def test_avl_single_and_double_rotations(keys):
    m = AVLTreeMap()
    for k in keys:
        m.insert(k, k)
    assert m._root.key == 2
    assert m.height() == 2


def test_avl_balanced_after_random_inserts_and_removes():
    rng = random.Random(1234)
    keys = rng.sample(range(10_000), 500)
    m = AVLTreeMap()
    for k in keys:
        m.insert(k, k)
    _assert_avl(m._root)

    for k in keys[::2]:
        assert m.remove(k)
    _assert_avl(m._root)
    assert len(m) == 250
    assert m.keys().to_list() == sorted(keys[1::2])
