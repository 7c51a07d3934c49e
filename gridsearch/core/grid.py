# gridsearch/core/grid.py
#!/usr/bin/env python3
"""
Grid model: fixed topology (cell types) plus per-cell exploration annotations.

Template encoding, one line per row:
    '#' wall, 'A' start, 'B' goal, ' ' open space.
Rows must be non-empty and of equal length.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from gridsearch.core.errors import MalformedTemplateError, TopologyError
from gridsearch.core.types import ACTION_ORDER, Action, Cell, CellState, CellType, State

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"

_CHAR_TO_TYPE: Dict[str, CellType] = {t.value: t for t in CellType}


def manhattan(a: State, b: State) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@dataclass
class Grid:
    cells: List[List[Cell]]  # [row][col]
    start: State = field(init=False)
    goal: State = field(init=False)

    def __post_init__(self):
        if not self.cells or not self.cells[0]:
            raise MalformedTemplateError("grid needs at least one row and one column")
        width = len(self.cells[0])
        for r, row in enumerate(self.cells):
            if len(row) != width:
                raise MalformedTemplateError(
                    f"row {r} has {len(row)} cells, expected {width}")

        starts = self._find(CellType.START)
        goals = self._find(CellType.GOAL)
        if len(starts) != 1:
            raise TopologyError(f"expected exactly one start cell, found {len(starts)}")
        if len(goals) != 1:
            raise TopologyError(f"expected exactly one goal cell, found {len(goals)}")
        self.start = starts[0]
        self.goal = goals[0]
        self.reset()

    # -------------------- construction --------------------

    @classmethod
    def from_template(cls, text: str) -> "Grid":
        if text.endswith("\n"):
            text = text[:-1]
        if not text:
            raise MalformedTemplateError("empty template")

        rows: List[List[Cell]] = []
        for r, line in enumerate(text.split("\n")):
            line = line.rstrip("\r")
            if not line:
                raise MalformedTemplateError(f"row {r} is empty")
            row: List[Cell] = []
            for c, ch in enumerate(line):
                cell_type = _CHAR_TO_TYPE.get(ch)
                if cell_type is None:
                    raise MalformedTemplateError(
                        f"unexpected character {ch!r} at row {r}, col {c}")
                row.append(Cell(type=cell_type))
            rows.append(row)
        return cls(rows)

    def to_template(self) -> str:
        return "\n".join("".join(cell.type.value for cell in row) for row in self.cells)

    # -------------------- geometry --------------------

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0])

    def in_bounds(self, s: State) -> bool:
        r, c = s
        return 0 <= r < self.height and 0 <= c < self.width

    def is_wall(self, s: State) -> bool:
        return self.cell(s).type is CellType.WALL

    def neighbors(self, s: State) -> List[Tuple[Action, State]]:
        """Open neighbors of s in Up, Down, Left, Right order."""
        out: List[Tuple[Action, State]] = []
        for action in ACTION_ORDER:
            n = action.apply(s)
            if self.in_bounds(n) and not self.is_wall(n):
                out.append((action, n))
        return out

    def heuristic(self, s: State) -> int:
        return manhattan(s, self.goal)

    # -------------------- annotations --------------------

    def cell(self, s: State) -> Cell:
        return self.cells[s[0]][s[1]]

    def get_state(self, s: State) -> CellState:
        return self.cell(s).state

    def set_state(self, s: State, state: CellState) -> None:
        self.cell(s).state = state

    def get_label(self, s: State) -> str:
        return self.cell(s).label

    def set_label(self, s: State, label: str) -> None:
        self.cell(s).label = label

    def reset(self) -> None:
        for row in self.cells:
            for cell in row:
                cell.clear()

    # -------------------- editing --------------------

    def set_type(self, s: State, cell_type: CellType) -> None:
        """
        Change the topology of one cell.

        START/GOAL move the marker; the previous marker cell becomes SPACE.
        The current start or goal cell can only be replaced by moving the
        marker elsewhere first.
        """
        if not self.in_bounds(s):
            raise IndexError(f"cell {s} is outside a {self.height}x{self.width} grid")
        cur = self.cell(s).type
        if cur is cell_type:
            return

        if cell_type is CellType.START:
            if s == self.goal:
                raise TopologyError("start and goal cannot share a cell")
            self._retype(self.start, CellType.SPACE)
            self.start = s
        elif cell_type is CellType.GOAL:
            if s == self.start:
                raise TopologyError("start and goal cannot share a cell")
            self._retype(self.goal, CellType.SPACE)
            self.goal = s
        elif cur in (CellType.START, CellType.GOAL):
            raise TopologyError(f"cannot overwrite the {cur.name.lower()} cell at {s}")
        self._retype(s, cell_type)

    def toggle_wall(self, s: State) -> bool:
        """Flip SPACE <-> WALL. Returns False when s is the start or goal."""
        cur = self.cell(s).type
        if cur is CellType.SPACE:
            self.set_type(s, CellType.WALL)
        elif cur is CellType.WALL:
            self.set_type(s, CellType.SPACE)
        else:
            return False
        return True

    def _retype(self, s: State, cell_type: CellType) -> None:
        cell = self.cell(s)
        cell.type = cell_type
        cell.clear()

    def _find(self, cell_type: CellType) -> List[State]:
        return [(r, c)
                for r, row in enumerate(self.cells)
                for c, cell in enumerate(row)
                if cell.type is cell_type]


# -------------------- map files --------------------

def load_map(path) -> Grid:
    with open(path, "r", encoding="utf-8") as f:
        return Grid.from_template(f.read())


def bundled_maps() -> Dict[str, Path]:
    """Template files shipped with the package, keyed by file stem, sorted."""
    return {p.stem: p for p in sorted(MAP_DIR.glob("*.txt"))}


def open_map(name: str) -> Grid:
    """Load a bundled map by name, else treat name as a template path."""
    maps = bundled_maps()
    if name in maps:
        return load_map(maps[name])
    return load_map(Path(name))
