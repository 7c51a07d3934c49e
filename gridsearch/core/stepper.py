# gridsearch/core/stepper.py
#!/usr/bin/env python3
"""
Search stepper: one node expansion per step() so a host loop can render
between expansions.

    PENDING --start()--> CONTINUE --step()...--> FOUND_SOLUTION | NO_SOLUTION

The stepper owns its frontier and writes cell annotations into the grid.
It does no timing of its own; pacing belongs to whoever calls step().
"""

import logging
from typing import List, Optional

from gridsearch.core.frontier import Frontier, canonical_strategy, make_frontier
from gridsearch.core.grid import Grid
from gridsearch.core.types import CellState, Node, Outcome, State, StepResult

logger = logging.getLogger(__name__)


class SearchStepper:
    def __init__(self, grid: Grid, strategy: str = "queue"):
        self.grid = grid
        self.strategy = canonical_strategy(strategy)
        self.frontier: Optional[Frontier] = None
        self.outcome = Outcome.PENDING
        self.explored_count = 0
        self._goal_node: Optional[Node] = None

    # -------------------- lifecycle --------------------

    def start(self) -> None:
        """Seed a fresh frontier with the start node."""
        self.grid.reset()
        start = self.grid.start
        root = Node(state=start, heuristic=self.grid.heuristic(start), path_cost=0)

        self.frontier = make_frontier(self.strategy)
        self.frontier.add(root)
        self.grid.set_state(start, CellState.FRONTIER)
        self.outcome = Outcome.CONTINUE
        self.explored_count = 0
        self._goal_node = None
        logger.debug("search started: strategy=%s start=%s goal=%s",
                     self.strategy, start, self.grid.goal)

    def reset(self) -> None:
        """Discard the frontier and clear grid annotations."""
        self.grid.reset()
        self.frontier = None
        self.outcome = Outcome.PENDING
        self.explored_count = 0
        self._goal_node = None

    def switch_strategy(self, strategy: str) -> None:
        self.strategy = canonical_strategy(strategy)
        self.reset()

    # -------------------- observables --------------------

    @property
    def is_finished(self) -> bool:
        return self.outcome.is_terminal

    @property
    def solution(self) -> Optional[List[State]]:
        return self._goal_node.path() if self._goal_node is not None else None

    @property
    def frontier_size(self) -> int:
        return len(self.frontier) if self.frontier is not None else 0

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Empty frontier: no solution.
          - Pop a node; if it is the goal, mark the path and finish.
          - Else mark it explored and push its undiscovered neighbors.
        """
        if self.outcome is Outcome.PENDING:
            self.start()

        if self.is_finished:
            return self._result()

        if self.frontier.is_empty():
            self.outcome = Outcome.NO_SOLUTION
            logger.debug("frontier exhausted after %d expansions", self.explored_count)
            return self._result()

        node = self.frontier.remove()
        self.explored_count += 1

        if node.state == self.grid.goal:
            self._goal_node = node
            for s in node.path():
                self.grid.set_state(s, CellState.SOLUTION_PATH)
            self.outcome = Outcome.FOUND_SOLUTION
            logger.debug("goal reached after %d expansions, path length %d",
                         self.explored_count, node.path_cost)
            return self._result(current=node.state)

        self.grid.set_state(node.state, CellState.EXPLORED)

        opened: List[State] = []
        for action, s in self.grid.neighbors(node.state):
            if self.frontier.contains_state(s) or self.grid.get_state(s) is CellState.EXPLORED:
                continue
            child = node.child(action, s, self.grid.heuristic(s))
            self.frontier.add(child)
            self.grid.set_label(s, self.frontier.label_for(child))
            self.grid.set_state(s, CellState.FRONTIER)
            opened.append(s)

        logger.debug("expanded %s (g=%d, h=%d), opened %s",
                     node.state, node.path_cost, node.heuristic, opened)
        return self._result(current=node.state, opened=opened)

    def run(self, max_steps: Optional[int] = None) -> StepResult:
        """Call step() until the search finishes or max_steps calls were made."""
        result = self._result()
        steps = 0
        while not self.is_finished:
            if max_steps is not None and steps >= max_steps:
                break
            result = self.step()
            steps += 1
        return result

    # -------------------- metrics --------------------

    def _result(self, current: Optional[State] = None,
                opened: Optional[List[State]] = None) -> StepResult:
        path = self.solution
        return StepResult(
            outcome=self.outcome,
            explored_count=self.explored_count,
            current=current,
            opened=opened or [],
            path=path,
            metrics=self._metrics(path_len=len(path) if path else 0),
        )

    def _metrics(self, path_len: int = 0) -> dict:
        return {
            "strategy": self.strategy,
            "explored": self.explored_count,
            "frontier_size": self.frontier_size,
            "path_len": path_len,
        }
