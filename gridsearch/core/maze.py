# gridsearch/core/maze.py
#!/usr/bin/env python3
"""
Randomized depth-first maze carving.

Starts from an all-wall grid, carves from a random lattice cell (even row,
even col) to unvisited lattice cells two steps away, clearing the wall cell in
between, and backtracks when stuck. Every carved cell is connected, so any two
of them make a solvable start/goal pair.
"""

import logging
import random
from typing import List, Optional, Set

from gridsearch.core.grid import Grid
from gridsearch.core.types import ACTION_ORDER, Cell, CellType, State

logger = logging.getLogger(__name__)


def generate_maze(height: int, width: int, seed: Optional[int] = None,
                  rng: Optional[random.Random] = None) -> Grid:
    if height < 1 or width < 1:
        raise ValueError(f"maze dimensions must be positive, got {height}x{width}")
    if height < 3 and width < 3:
        raise ValueError(f"a {height}x{width} maze has room for only one open cell")
    rng = rng or random.Random(seed)

    types = [[CellType.WALL] * width for _ in range(height)]

    first = (2 * rng.randrange((height + 1) // 2), 2 * rng.randrange((width + 1) // 2))
    types[first[0]][first[1]] = CellType.SPACE
    visited: Set[State] = {first}
    carved: List[State] = [first]
    stack: List[State] = [first]

    while stack:
        r, c = stack[-1]
        options = []
        for action in ACTION_ORDER:
            dr, dc = action.value
            nr, nc = r + 2 * dr, c + 2 * dc
            if 0 <= nr < height and 0 <= nc < width and (nr, nc) not in visited:
                options.append(((r + dr, c + dc), (nr, nc)))

        if not options:
            stack.pop()
            continue

        rng.shuffle(options)
        between, nxt = options[0]
        for s in (between, nxt):
            types[s[0]][s[1]] = CellType.SPACE
            carved.append(s)
        visited.add(nxt)
        stack.append(nxt)

    start, goal = rng.sample(carved, 2)
    types[start[0]][start[1]] = CellType.START
    types[goal[0]][goal[1]] = CellType.GOAL
    logger.debug("carved %dx%d maze: %d open cells, start=%s goal=%s",
                 height, width, len(carved), start, goal)

    return Grid([[Cell(type=t) for t in row] for row in types])
