"""
Unit tests for the binary min-heap PriorityQueue.
"""

import random

from algorithms import PriorityQueue


def _heap_ok(pq):
    heap = pq.snapshot()
    return all(heap[i][1] >= heap[(i - 1) // 2][1] for i in range(1, len(heap)))


def test_empty_queue_pops_none():
    pq = PriorityQueue()
    assert pq.empty
    assert pq.pop() is None
    assert pq.empty


def test_pops_in_priority_order():
    rng = random.Random(3)
    pq = PriorityQueue()
    priorities = [rng.randint(0, 50) for _ in range(200)]
    for i, p in enumerate(priorities):
        pq.add(i, p)
        assert _heap_ok(pq)

    popped = []
    while not pq.empty:
        item = pq.pop()
        popped.append(priorities[item])
        assert _heap_ok(pq)

    assert popped == sorted(priorities)


def test_interleaved_add_and_pop_returns_live_minimum():
    pq = PriorityQueue()
    pq.add("c", 5)
    pq.add("a", 1)
    assert pq.pop() == "a"
    pq.add("b", 3)
    pq.add("d", 0)
    assert [pq.pop(), pq.pop(), pq.pop()] == ["d", "b", "c"]
    assert pq.pop() is None


def test_same_item_can_be_queued_twice():
    pq = PriorityQueue()
    pq.add("B", 10)
    pq.add("B", 5)
    pq.add("C", 7)
    assert len(pq) == 3
    assert pq.pop() == "B"
    assert pq.pop() == "C"
    # stale copy is still there; the consumer is the one that drops it
    assert pq.pop() == "B"


def test_equal_priorities_keep_insertion_order_for_two_items():
    pq = PriorityQueue()
    pq.add("first", 1)
    pq.add("second", 1)
    assert pq.pop() == "first"
    assert pq.pop() == "second"


def test_left_child_wins_a_tie_between_children():
    pq = PriorityQueue()
    pq.add("root", 0)
    pq.add("L", 1)
    pq.add("R", 1)
    pq.add("x", 2)

    assert pq.pop() == "root"
    assert pq.snapshot()[0] == ("L", 1)
    assert pq.pop() == "L"
    assert pq.pop() == "R"
    assert pq.pop() == "x"


def test_moved_element_stops_at_child_with_equal_priority():
    pq = PriorityQueue()
    pq.add("root", 0)
    pq.add("L", 2)
    pq.add("R", 3)
    pq.add("last", 2)

    # "last" moves to the top and is not pushed below the equal left child
    assert pq.pop() == "root"
    assert pq.snapshot() == [("last", 2), ("L", 2), ("R", 3)]


def test_equal_priority_push_does_not_pass_its_parent():
    pq = PriorityQueue()
    pq.add("a", 1)
    pq.add("b", 1)
    pq.add("c", 1)
    assert [item for item, _ in pq.snapshot()] == ["a", "b", "c"]


def test_peek_and_clear():
    pq = PriorityQueue()
    assert pq.peek() is None
    pq.add("x", 4)
    pq.add("y", 2)
    assert pq.peek() == ("y", 2)
    assert len(pq) == 2

    pq.clear()
    assert pq.empty
    assert pq.pop() is None
