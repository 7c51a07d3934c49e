# gridsearch/core/frontier.py
#!/usr/bin/env python3
"""
Frontier strategies: the set of discovered-but-unexpanded nodes.

    StackFrontier   LIFO          (depth-first)
    QueueFrontier   FIFO          (breadth-first)
    GreedyFrontier  lowest h      (greedy best-first)
    AStarFrontier   lowest g + h  (A*)
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Tuple, Type

from gridsearch.core.errors import EmptyFrontierError
from gridsearch.core.priority_queue import PriorityQueue
from gridsearch.core.types import Node, State


class Frontier(ABC):
    name: str = "frontier"

    @abstractmethod
    def add(self, node: Node) -> None: ...

    @abstractmethod
    def contains_state(self, state: State) -> bool: ...

    @abstractmethod
    def is_empty(self) -> bool: ...

    @abstractmethod
    def _take(self) -> Node: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def remove(self) -> Node:
        if self.is_empty():
            raise EmptyFrontierError(f"remove() on an empty {self.name} frontier")
        return self._take()

    def label_for(self, node: Node) -> str:
        return ""


# -------------------- uninformed --------------------

class _ListFrontier(Frontier):
    def __init__(self):
        self._nodes: Deque[Node] = deque()

    def add(self, node: Node) -> None:
        self._nodes.append(node)

    def contains_state(self, state: State) -> bool:
        return any(n.state == state for n in self._nodes)

    def is_empty(self) -> bool:
        return not self._nodes

    def __len__(self) -> int:
        return len(self._nodes)


class StackFrontier(_ListFrontier):
    name = "stack"

    def _take(self) -> Node:
        return self._nodes.pop()


class QueueFrontier(_ListFrontier):
    name = "queue"

    def _take(self) -> Node:
        return self._nodes.popleft()


# -------------------- informed --------------------

class _HeapFrontier(Frontier):
    def __init__(self):
        self._pq: PriorityQueue[Node] = PriorityQueue(self.before)

    @staticmethod
    @abstractmethod
    def before(a: Node, b: Node) -> bool: ...

    def add(self, node: Node) -> None:
        self._pq.push(node)

    def contains_state(self, state: State) -> bool:
        return self._pq.find(lambda n: n.state == state) is not None

    def is_empty(self) -> bool:
        return self._pq.is_empty()

    def _take(self) -> Node:
        return self._pq.pop()

    def __len__(self) -> int:
        return self._pq.size()


class GreedyFrontier(_HeapFrontier):
    name = "greedy"

    @staticmethod
    def before(a: Node, b: Node) -> bool:
        return a.heuristic < b.heuristic

    def label_for(self, node: Node) -> str:
        return str(node.heuristic)


class AStarFrontier(_HeapFrontier):
    name = "astar"

    @staticmethod
    def before(a: Node, b: Node) -> bool:
        # Equal f: shallower first. Queued states are never re-costed, so
        # popping the deeper twin first could park a neighbor at a worse g.
        fa, fb = a.path_cost + a.heuristic, b.path_cost + b.heuristic
        return fa < fb or (fa == fb and a.path_cost < b.path_cost)

    def label_for(self, node: Node) -> str:
        return f"{node.path_cost}+{node.heuristic}"


# -------------------- selector --------------------

FRONTIERS: Dict[str, Type[Frontier]] = {
    "stack": StackFrontier,
    "queue": QueueFrontier,
    "greedy": GreedyFrontier,
    "astar": AStarFrontier,
}
STRATEGIES: Tuple[str, ...] = tuple(FRONTIERS)

_ALIASES = {"dfs": "stack", "bfs": "queue", "a*": "astar"}


def canonical_strategy(name: str) -> str:
    key = name.strip().lower()
    key = _ALIASES.get(key, key)
    if key not in FRONTIERS:
        raise ValueError(f"unknown strategy {name!r}; expected one of {', '.join(STRATEGIES)}")
    return key


def make_frontier(name: str) -> Frontier:
    return FRONTIERS[canonical_strategy(name)]()
