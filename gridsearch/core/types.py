# gridsearch/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any

State = Tuple[int, int]  # (row, col)


class Action(Enum):
    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    def apply(self, s: State) -> State:
        d_row, d_col = self.value
        return (s[0] + d_row, s[1] + d_col)


# Neighbor expansion order; Stack/Queue tie-breaks depend on it.
ACTION_ORDER: Tuple[Action, ...] = (Action.UP, Action.DOWN, Action.LEFT, Action.RIGHT)


class CellType(Enum):
    SPACE = " "
    WALL = "#"
    START = "A"
    GOAL = "B"


class CellState(Enum):
    UNEXPLORED = "unexplored"
    EXPLORED = "explored"
    FRONTIER = "frontier"
    SOLUTION_PATH = "solution_path"
    UNREACHABLE = "unreachable"


class Outcome(Enum):
    PENDING = "pending"
    CONTINUE = "continue"
    FOUND_SOLUTION = "found_solution"
    NO_SOLUTION = "no_solution"

    @property
    def is_terminal(self) -> bool:
        return self in (Outcome.FOUND_SOLUTION, Outcome.NO_SOLUTION)


@dataclass
class Cell:
    type: CellType = CellType.SPACE
    state: CellState = CellState.UNEXPLORED
    label: str = ""

    def clear(self) -> None:
        """Drop exploration annotations; walls go back to UNREACHABLE."""
        self.state = CellState.UNREACHABLE if self.type is CellType.WALL else CellState.UNEXPLORED
        self.label = ""


@dataclass(frozen=True)
class Node:
    state: State
    parent: Optional["Node"] = None
    action: Optional[Action] = None
    heuristic: int = 0
    path_cost: int = 0

    def child(self, action: Action, state: State, heuristic: int) -> "Node":
        return Node(state=state, parent=self, action=action,
                    heuristic=heuristic, path_cost=self.path_cost + 1)

    def path(self) -> List[State]:
        """States from the root down to this node."""
        out: List[State] = []
        cur: Optional[Node] = self
        while cur is not None:
            out.append(cur.state)
            cur = cur.parent
        out.reverse()
        return out


@dataclass
class StepResult:
    outcome: Outcome
    explored_count: int = 0
    current: Optional[State] = None
    opened: List[State] = field(default_factory=list)
    path: Optional[List[State]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
