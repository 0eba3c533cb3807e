"""Indexable binary min-heap used as the A* open set."""

from __future__ import annotations

import heapq
import itertools
from typing import Generic, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)

# Placeholder left in the heap when an entry is superseded.
_REMOVED = object()


class MinQueue(Generic[T]):
    """Min-priority queue with O(1) membership and decrease-key.

    Each value is held at most once.  Pushing a value that is already queued
    replaces its priority; the stale heap entry is skipped lazily on pop.
    Equal priorities pop in insertion order.
    """

    def __init__(self) -> None:
        self._heap: list[list] = []
        self._entries: dict[T, list] = {}
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, value: object) -> bool:
        return value in self._entries

    def contains(self, value: T) -> bool:
        return value in self._entries

    def priority(self, value: T) -> float:
        return self._entries[value][0]

    def push(self, value: T, priority: float) -> None:
        if value in self._entries:
            self._entries.pop(value)[-1] = _REMOVED
        entry = [priority, next(self._counter), value]
        self._entries[value] = entry
        heapq.heappush(self._heap, entry)

    def pop(self) -> T:
        """Remove and return the value with the lowest priority."""
        while self._heap:
            _, _, value = heapq.heappop(self._heap)
            if value is not _REMOVED:
                del self._entries[value]
                return value
        raise IndexError("pop from an empty MinQueue")

    def peek(self) -> T:
        while self._heap and self._heap[0][-1] is _REMOVED:
            heapq.heappop(self._heap)
        if not self._heap:
            raise IndexError("peek at an empty MinQueue")
        return self._heap[0][-1]
