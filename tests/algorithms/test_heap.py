import pytest

from amgraph.algorithms.heap import PriorityQueue


def test_extract_in_priority_order():
    pq = PriorityQueue()
    for priority, value in [(5, "e"), (1, "a"), (3, "c"), (2, "b"), (4, "d")]:
        pq.insert(priority, value)
    assert len(pq) == 5
    assert [pq.extract_minimum() for _ in range(5)] == ["a", "b", "c", "d", "e"]
    assert not pq


def test_empty_queue():
    pq = PriorityQueue()
    assert pq.extract_minimum() is None
    assert pq.peek_minimum_value() is None
    assert len(pq) == 0


def test_equal_priorities_are_fifo():
    pq = PriorityQueue()
    pq.insert(1, "first")
    pq.insert(1, "second")
    assert pq.extract_minimum() == "first"
    assert pq.extract_minimum() == "second"


def test_decrease_key_reorders():
    pq = PriorityQueue()
    pq.insert(2, "a")
    node = pq.insert(10, "b")
    pq.insert(5, "c")
    pq.decrease_key(node, 1)
    assert node.priority == 1
    assert pq.peek_minimum_value() == "b"
    assert len(pq) == 3
    assert [pq.extract_minimum() for _ in range(3)] == ["b", "a", "c"]
    assert pq.extract_minimum() is None


def test_decrease_key_twice():
    pq = PriorityQueue()
    node = pq.insert(10, "x")
    pq.insert(6, "y")
    pq.decrease_key(node, 8)
    pq.decrease_key(node, 3)
    assert pq.extract_minimum() == "x"
    assert pq.extract_minimum() == "y"
    assert pq.extract_minimum() is None


def test_decrease_key_to_same_priority_is_noop():
    pq = PriorityQueue()
    node = pq.insert(4, "x")
    pq.decrease_key(node, 4)
    assert len(pq) == 1
    assert pq.extract_minimum() == "x"


def test_decrease_key_rejects_increase():
    pq = PriorityQueue()
    node = pq.insert(4, "x")
    with pytest.raises(ValueError, match="greater than current priority"):
        pq.decrease_key(node, 7)


def test_decrease_key_after_extract():
    pq = PriorityQueue()
    node = pq.insert(4, "x")
    pq.extract_minimum()
    assert node.extracted
    with pytest.raises(ValueError, match="no longer in the queue"):
        pq.decrease_key(node, 1)
