# gridsearch/core/priority_queue.py
#!/usr/bin/env python3
"""
Binary heap ordered by an injected "comes before" comparator.

comparator(a, b) is True when a must sit nearer the root than b. Equal-priority
values come out in whatever order the sift mechanics leave them; there is no
FIFO promise among ties.
"""

import heapq
from typing import Callable, Generic, List, Optional, TypeVar

T = TypeVar("T")


class _Entry(Generic[T]):
    __slots__ = ("value", "_before")

    def __init__(self, value: T, before: Callable[[T, T], bool]):
        self.value = value
        self._before = before

    def __lt__(self, other: "_Entry[T]") -> bool:
        return self._before(self.value, other.value)


class PriorityQueue(Generic[T]):
    def __init__(self, comparator: Callable[[T, T], bool]):
        self._heap: List[_Entry[T]] = []
        self._comparator = comparator

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def is_empty(self) -> bool:
        return not self._heap

    def find(self, predicate: Callable[[T], bool]) -> Optional[T]:
        """Linear scan in heap order; first match or None."""
        for entry in self._heap:
            if predicate(entry.value):
                return entry.value
        return None

    def peek(self) -> T:
        if not self._heap:
            raise IndexError("peek on an empty priority queue")
        return self._heap[0].value

    def push(self, *values: T) -> int:
        for value in values:
            heapq.heappush(self._heap, _Entry(value, self._comparator))
        return len(self._heap)

    def pop(self) -> T:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        return heapq.heappop(self._heap).value

    def replace(self, value: T) -> T:
        """Pop the root and push value in one sift."""
        if not self._heap:
            raise IndexError("replace on an empty priority queue")
        return heapq.heapreplace(self._heap, _Entry(value, self._comparator)).value
