"""Indexable min-heap backing the A* open set."""

from __future__ import annotations

import pytest

from tilepuzzle.engine.gamesolver import MinQueue


def test_pops_in_priority_order() -> None:
    queue: MinQueue[str] = MinQueue()
    for value, priority in [("c", 3), ("a", 1), ("d", 4), ("b", 2)]:
        queue.push(value, priority)
    assert [queue.pop() for _ in range(4)] == ["a", "b", "c", "d"]
    assert len(queue) == 0


def test_ties_pop_in_insertion_order() -> None:
    queue: MinQueue[int] = MinQueue()
    for value in [5, 3, 9, 1]:
        queue.push(value, 0)
    assert [queue.pop() for _ in range(4)] == [5, 3, 9, 1]


def test_repush_updates_priority() -> None:
    queue: MinQueue[str] = MinQueue()
    queue.push("a", 5)
    queue.push("b", 3)
    queue.push("a", 1)
    assert len(queue) == 2
    assert queue.priority("a") == 1
    assert queue.peek() == "a"
    assert queue.pop() == "a"
    assert queue.pop() == "b"


def test_membership() -> None:
    queue: MinQueue[tuple[int, int]] = MinQueue()
    queue.push((1, 2), 7)
    assert (1, 2) in queue
    assert queue.contains((1, 2))
    assert (2, 1) not in queue
    queue.pop()
    assert (1, 2) not in queue


def test_empty_queue_raises() -> None:
    queue: MinQueue[int] = MinQueue()
    with pytest.raises(IndexError):
        queue.pop()
    with pytest.raises(IndexError):
        queue.peek()
    queue.push(1, 1)
    queue.push(1, 0)
    queue.pop()
    with pytest.raises(IndexError):
        queue.pop()
