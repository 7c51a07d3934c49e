# gridsearch/app/headless.py
#!/usr/bin/env python3
"""
Terminal runner: solve one grid and print the annotated result.

    python -m gridsearch.app.headless --map=02_two_routes --strategy=astar
    python -m gridsearch.app.headless --maze=21x41 --seed=7 --strategy=greedy

Exit status: 0 solution found, 1 no solution, 2 bad input.
"""

import logging
import sys
from typing import List, Optional

from gridsearch.app.config import build_grid, resolve_settings
from gridsearch.core.errors import GridError
from gridsearch.core.grid import Grid
from gridsearch.core.stepper import SearchStepper
from gridsearch.core.types import CellState, CellType, Outcome

logger = logging.getLogger(__name__)

_STATE_GLYPHS = {
    CellState.SOLUTION_PATH: "*",
    CellState.EXPLORED: ".",
    CellState.FRONTIER: "o",
}


def render_text(grid: Grid) -> str:
    """Walls and start/goal keep their template glyph; other cells show their state."""
    lines = []
    for row in grid.cells:
        chars = []
        for cell in row:
            if cell.type is CellType.SPACE:
                chars.append(_STATE_GLYPHS.get(cell.state, " "))
            else:
                chars.append(cell.type.value)
        lines.append("".join(chars))
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = resolve_settings(argv)
    except ValueError as ex:
        logging.basicConfig(level=logging.WARNING)
        logger.error("bad settings: %s", ex)
        return 2
    logging.basicConfig(level=settings.log_level)

    try:
        grid = build_grid(settings)
    except (GridError, ValueError, OSError) as ex:
        logger.error("could not build grid: %s", ex)
        return 2

    stepper = SearchStepper(grid, settings.strategy)
    result = stepper.run()

    print(render_text(grid))
    path_cost = len(result.path) - 1 if result.path else 0
    print(f"{stepper.strategy}: {result.outcome.value}, "
          f"explored {result.explored_count}, path cost {path_cost}")
    return 0 if result.outcome is Outcome.FOUND_SOLUTION else 1


if __name__ == "__main__":
    sys.exit(main())
