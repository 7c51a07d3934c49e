# tests/test_stepper.py
import sys
from collections import deque
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from gridsearch.core.frontier import STRATEGIES
from gridsearch.core.grid import Grid, bundled_maps, load_map
from gridsearch.core.maze import generate_maze
from gridsearch.core.stepper import SearchStepper
from gridsearch.core.types import CellState, CellType, Outcome

OPEN_3X3 = "A  \n   \n  B"

# short route left/down (3 edges), long route right and around (7 edges)
DETOUR = " A  \n ## \nB   "


def _bfs_distance(grid):
    """Reference shortest path length, independent of the stepper."""
    dist = {grid.start: 0}
    todo = deque([grid.start])
    while todo:
        s = todo.popleft()
        for _, n in grid.neighbors(s):
            if n not in dist:
                dist[n] = dist[s] + 1
                todo.append(n)
    return dist.get(grid.goal)


def _solve(template_or_grid, strategy):
    grid = template_or_grid if isinstance(template_or_grid, Grid) else Grid.from_template(template_or_grid)
    stepper = SearchStepper(grid, strategy)
    stepper.run()
    return stepper


# -------------------- worked examples --------------------

def test_two_cell_grid_with_bfs():
    grid = Grid.from_template("AB")
    stepper = SearchStepper(grid, "queue")
    assert stepper.outcome is Outcome.PENDING

    stepper.start()
    assert stepper.outcome is Outcome.CONTINUE
    assert stepper.explored_count == 0
    assert grid.get_state((0, 0)) is CellState.FRONTIER

    res = stepper.step()
    assert res.outcome is Outcome.CONTINUE
    assert res.current == (0, 0)
    assert res.opened == [(0, 1)]
    assert grid.get_state((0, 0)) is CellState.EXPLORED
    assert grid.get_state((0, 1)) is CellState.FRONTIER

    res = stepper.step()
    assert res.outcome is Outcome.FOUND_SOLUTION
    assert res.explored_count == 2
    assert res.path == [(0, 0), (0, 1)]
    assert grid.get_state((0, 0)) is CellState.SOLUTION_PATH
    assert grid.get_state((0, 1)) is CellState.SOLUTION_PATH


def test_wall_between_start_and_goal():
    grid = Grid.from_template("A#B")
    stepper = SearchStepper(grid, "queue")
    stepper.start()
    assert stepper.step().outcome is Outcome.CONTINUE
    res = stepper.step()
    assert res.outcome is Outcome.NO_SOLUTION
    assert res.explored_count == 1
    assert res.path is None
    assert stepper.solution is None
    assert grid.get_state((0, 2)) is CellState.UNEXPLORED


def test_pending_step_starts_and_expands():
    stepper = SearchStepper(Grid.from_template("AB"), "stack")
    res = stepper.step()
    assert res.current == (0, 0)
    assert res.explored_count == 1


def test_terminal_step_is_a_no_op():
    stepper = _solve("AB", "queue")
    before = stepper.explored_count
    for _ in range(3):
        res = stepper.step()
        assert res.outcome is Outcome.FOUND_SOLUTION
        assert res.current is None
    assert stepper.explored_count == before

    stuck = _solve("A#B", "astar")
    assert stuck.step().outcome is Outcome.NO_SOLUTION


def test_dfs_and_bfs_explore_differently():
    dfs = _solve(OPEN_3X3, "stack")
    bfs = _solve(OPEN_3X3, "queue")
    assert dfs.explored_count == 5
    assert bfs.explored_count == 9
    assert len(dfs.solution) - 1 == len(bfs.solution) - 1 == 4


def test_dfs_may_return_a_longer_path():
    dfs = _solve(DETOUR, "stack")
    bfs = _solve(DETOUR, "queue")
    assert dfs.solution == [(0, 1), (0, 2), (0, 3), (1, 3), (2, 3), (2, 2), (2, 1), (2, 0)]
    assert dfs.explored_count == 8
    assert bfs.solution == [(0, 1), (0, 0), (1, 0), (2, 0)]
    assert bfs.explored_count == 6


def test_informed_frontiers_label_cells():
    grid = Grid.from_template(DETOUR)
    stepper = SearchStepper(grid, "astar")
    stepper.step()
    assert grid.get_label((0, 0)) == "1+2"
    assert grid.get_label((0, 2)) == "1+4"
    stepper.run()
    assert stepper.solution == [(0, 1), (0, 0), (1, 0), (2, 0)]
    assert stepper.explored_count == 4

    grid = Grid.from_template(DETOUR)
    stepper = SearchStepper(grid, "greedy")
    stepper.step()
    assert grid.get_label((0, 0)) == "2"
    assert grid.get_label((0, 2)) == "4"

    grid = Grid.from_template(DETOUR)
    SearchStepper(grid, "queue").step()
    assert grid.get_label((0, 0)) == ""
    assert grid.get_state((0, 0)) is CellState.FRONTIER


# -------------------- properties --------------------

def _all_grids():
    grids = [load_map(p) for p in bundled_maps().values()]
    grids += [generate_maze(11, 17, seed=s) for s in range(5)]
    grids += [Grid.from_template(t) for t in (OPEN_3X3, DETOUR, "AB", "A#B", "B\n \nA")]
    return grids


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_every_search_terminates_and_expands_each_state_once(strategy):
    for grid in _all_grids():
        open_cells = sum(1 for row in grid.cells for c in row if c.type is not CellType.WALL)
        stepper = SearchStepper(grid, strategy)
        seen = set()
        for _ in range(open_cells + 1):
            res = stepper.step()
            if res.current is not None:
                assert res.current not in seen
                seen.add(res.current)
            if stepper.is_finished:
                break
        assert stepper.is_finished
        expected = Outcome.NO_SOLUTION if _bfs_distance(grid) is None else Outcome.FOUND_SOLUTION
        assert stepper.outcome is expected


@pytest.mark.parametrize("strategy", ["queue", "astar"])
def test_bfs_and_astar_find_shortest_paths(strategy):
    for grid in _all_grids():
        shortest = _bfs_distance(grid)
        if shortest is None:
            continue
        stepper = _solve(grid, strategy)
        path = stepper.solution
        assert len(path) - 1 == shortest
        assert path[0] == grid.start and path[-1] == grid.goal


@pytest.mark.parametrize("strategy", STRATEGIES)
def test_solution_is_a_connected_walk(strategy):
    for grid in _all_grids():
        stepper = _solve(grid, strategy)
        path = stepper.solution
        if path is None:
            continue
        for a, b in zip(path, path[1:]):
            assert b in [n for _, n in grid.neighbors(a)]
        for s in path:
            assert grid.get_state(s) is CellState.SOLUTION_PATH


def test_sealed_goal_has_no_solution():
    grid = load_map(bundled_maps()["04_sealed_goal"])
    for strategy in STRATEGIES:
        stepper = _solve(grid, strategy)
        assert stepper.outcome is Outcome.NO_SOLUTION
        assert grid.get_state(grid.goal) is CellState.UNEXPLORED


# -------------------- lifecycle --------------------

def test_reset_restores_grid_and_pending():
    grid = Grid.from_template(DETOUR)
    stepper = _solve(grid, "astar")
    stepper.reset()
    assert stepper.outcome is Outcome.PENDING
    assert stepper.explored_count == 0
    assert stepper.frontier_size == 0
    for row in grid.cells:
        for cell in row:
            expected = CellState.UNREACHABLE if cell.type is CellType.WALL else CellState.UNEXPLORED
            assert cell.state is expected
            assert cell.label == ""

    stepper.run()
    assert stepper.outcome is Outcome.FOUND_SOLUTION
    assert stepper.explored_count == 4


def test_switch_strategy_starts_over():
    stepper = _solve(DETOUR, "queue")
    stepper.switch_strategy("dfs")
    assert stepper.strategy == "stack"
    assert stepper.outcome is Outcome.PENDING
    stepper.run()
    assert len(stepper.solution) == 8


def test_run_respects_step_budget():
    grid = load_map(bundled_maps()["03_corridors"])
    stepper = SearchStepper(grid, "queue")
    res = stepper.run(max_steps=3)
    assert res.outcome is Outcome.CONTINUE
    assert stepper.explored_count == 3

    res = stepper.run()
    assert res.outcome is Outcome.FOUND_SOLUTION


def test_paused_search_resumes_where_it_stopped():
    grid = Grid.from_template(OPEN_3X3)
    stepper = SearchStepper(grid, "queue")
    stepper.run(max_steps=4)
    snapshot = [[(c.state, c.label) for c in row] for row in grid.cells]
    frontier = stepper.frontier_size

    assert [[(c.state, c.label) for c in row] for row in grid.cells] == snapshot
    assert stepper.frontier_size == frontier
    stepper.run()
    assert stepper.explored_count == 9


def test_metrics_snapshot():
    stepper = SearchStepper(Grid.from_template("AB"), "greedy")
    res = stepper.step()
    assert res.metrics == {"strategy": "greedy", "explored": 1, "frontier_size": 1, "path_len": 0}
    res = stepper.step()
    assert res.metrics["path_len"] == 2
    assert res.metrics["frontier_size"] == 0


def test_unknown_strategy_rejected_up_front():
    with pytest.raises(ValueError):
        SearchStepper(Grid.from_template("AB"), "random-walk")
