# gridsearch/app/viewer.py
#!/usr/bin/env python3
"""
Grid Search Viewer: paints the grid, drives the stepper, edits walls.

- Keyboard:
    [SPACE]       -> run/pause
    [N]           -> single step
    [R]           -> reset
    [+]/[-]       -> steps/sec
    [1]..[4]      -> strategy (stack / queue / greedy / astar)
    [M]           -> next bundled map
    [G]           -> generate a random maze
    [Q]/[ESC]     -> quit
- Mouse:
    left click on a cell toggles a wall while no search is running

Settings come from gridsearch.app.config (env vars or --key=value flags).
"""

import logging
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridsearch.app.config import MAX_SPEED, MIN_SPEED, Settings, build_grid, map_key, resolve_settings
from gridsearch.core.errors import GridError
from gridsearch.core.frontier import STRATEGIES
from gridsearch.core.grid import Grid, bundled_maps, open_map
from gridsearch.core.maze import generate_maze
from gridsearch.core.stepper import SearchStepper
from gridsearch.core.types import CellState, CellType, Outcome, State

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
MIN_CELL = 8
MAZE_SIZE = (21, 31)
FONT_NAME = None  # default pygame font

STRATEGY_LABELS = {
    "stack": "Stack (DFS)",
    "queue": "Queue (BFS)",
    "greedy": "Greedy",
    "astar": "A*",
}

OUTCOME_LABELS = {
    Outcome.PENDING: "Idle",
    Outcome.CONTINUE: "Searching",
    Outcome.FOUND_SOLUTION: "Found solution",
    Outcome.NO_SOLUTION: "No solution",
}

# Colors
WHITE       = (255, 255, 255)
BLACK       = (  0,   0,   0)
BLUE        = ( 70, 130, 180)
RED         = (220,  50,  47)
BG_TOP      = ( 24,  26,  32)
BG_BOTTOM   = ( 36,  40,  48)
TEXT_LIGHT  = (230, 235, 240)
ACCENT_GOLD = (255, 210,   0)
CARD_BG     = ( 24,  28,  36, 220)

CELL_COLORS = {
    CellState.UNEXPLORED:    (200, 200, 200),
    CellState.EXPLORED:      (214, 120, 160),
    CellState.FRONTIER:      (110, 170, 235),
    CellState.SOLUTION_PATH: (  0, 230, 180),
    CellState.UNREACHABLE:   ( 40,  40,  46),
}


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        if self.active and self.togglable:
            bg = (58, 86, 160)
        elif self.hover:
            bg = (46, 50, 60)
        else:
            bg = (36, 40, 48)
        pygame.draw.rect(screen, bg, self.rect, border_radius=10)
        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235, 238, 242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, settings: Settings, key: str = "custom"):
        pygame.init()

        self.grid = grid
        self.settings = settings
        self.selected_map_key = key
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.screen = pygame.display.set_mode((1100, 720), pygame.RESIZABLE)
        pygame.display.set_caption(f"Grid Search - {key}")

        self._buttons: List[UIButton] = []
        self._layout(*self.screen.get_size())

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = settings.steps_per_sec
        self._last_step_t = 0.0

        self.stepper = SearchStepper(self.grid, settings.strategy)
        self._refresh_active_states()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(MIN_CELL, min(avail_w // self.grid.width, avail_h // self.grid.height))

        grid_plate_w = self.grid.width * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.height * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - PANEL_W - grid_plate_w) // 2)
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(win_w - PANEL_W, 0, PANEL_W, win_h)

        self._build_buttons()

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[State]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        s = (row, col)
        return s if pos[0] >= ox and pos[1] >= oy and self.grid.in_bounds(s) else None

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(MIN_SPEED, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.stepper.step()
        if res.outcome.is_terminal:
            self.running = False
            logger.info("%s: %s after %d expansions", self.stepper.strategy,
                        res.outcome.value, res.explored_count)
            self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key in (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4):
                    self._switch_strategy(STRATEGIES[e.key - pygame.K_1])
                elif e.key == pygame.K_m:
                    self._next_map()
                elif e.key == pygame.K_g:
                    self._new_maze()
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                clicked = any([b.handle_mouse(e) for b in self._buttons])
                if not clicked and e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    self._edit_cell(e.pos)

    # ---------- actions ----------
    def _toggle_run(self):
        if self.stepper.is_finished:
            return
        self.running = not self.running
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(MIN_SPEED, min(MAX_SPEED, self.steps_per_sec + dv)))

    def _reset(self):
        self.running = False
        self.stepper.reset()
        self._refresh_active_states()

    def _switch_strategy(self, name: str):
        self.running = False
        self.stepper.switch_strategy(name)
        self._refresh_active_states()

    def _use_grid(self, grid: Grid, key: str):
        self.grid = grid
        self.selected_map_key = key
        self.running = False
        self.stepper = SearchStepper(grid, self.stepper.strategy)
        pygame.display.set_caption(f"Grid Search - {key}")
        self._layout(*self.screen.get_size())
        self._refresh_active_states()

    def _next_map(self):
        keys = list(bundled_maps())
        if not keys:
            return
        idx = (keys.index(self.selected_map_key) + 1) % len(keys) if self.selected_map_key in keys else 0
        try:
            self._use_grid(open_map(keys[idx]), keys[idx])
        except (GridError, OSError) as ex:
            logger.warning("Failed to load map %s: %s", keys[idx], ex)

    def _new_maze(self):
        self._use_grid(generate_maze(*MAZE_SIZE), "random maze")

    def _edit_cell(self, pos: Tuple[int, int]):
        if self.running:
            return
        s = self._cell_at(pos)
        if s is None:
            return
        if self.grid.toggle_wall(s):
            self.stepper.reset()
            self._refresh_active_states()

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        for y in range(h):
            t = y / max(1, h - 1)
            c = tuple(int(a + (b - a) * t) for a, b in zip(BG_TOP, BG_BOTTOM))
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        show_labels = cs >= 22

        for row in range(self.grid.height):
            for col in range(self.grid.width):
                cell = self.grid.cells[row][col]
                rect = pygame.Rect(ox + col * cs, oy + row * cs, cs, cs)
                pygame.draw.rect(self.screen, CELL_COLORS[cell.state], rect)
                pygame.draw.rect(self.screen, BLACK, rect, 1)

                if cell.type is CellType.START:
                    self._draw_badge(rect, "A", BLUE)
                elif cell.type is CellType.GOAL:
                    self._draw_badge(rect, "B", RED)
                elif show_labels and cell.label and cell.state is CellState.FRONTIER:
                    txt = self.font_small.render(cell.label, True, BLACK)
                    self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_badge(self, rect: pygame.Rect, letter: str, color: Tuple[int, int, int]):
        pygame.draw.circle(self.screen, color, rect.center, max(3, self.cell_size // 2 - 2))
        if self.cell_size >= 14:
            txt = self.font_small.render(letter, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
        w = rb.width - 32
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed -", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-1)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+1)))
        y += h + gap

        self._strategy_buttons: Dict[str, UIButton] = {}
        for name in STRATEGIES:
            add(STRATEGY_LABELS[name], lambda n=name: self._switch_strategy(n), togglable=True)
            self._strategy_buttons[name] = self._buttons[-1]
            y += h + gap

        add("Next Map", self._next_map); y += h + gap
        add("Random Maze", self._new_maze)

        if hasattr(self, "stepper"):
            self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        for name, btn in getattr(self, "_strategy_buttons", {}).items():
            btn.set_active(name == self.stepper.strategy)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card = pygame.Surface((rb.width - 20, 230), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        solution = self.stepper.solution
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Explored: {self.stepper.explored_count}")
        line(f"Frontier: {self.stepper.frontier_size}")
        line(f"Path cost: {len(solution) - 1 if solution else 0}")
        line(f"State: {OUTCOME_LABELS[self.stepper.outcome]}")
        line("-" * 26)
        line(f"Map: {self.selected_map_key}")
        line(f"Strategy: {STRATEGY_LABELS[self.stepper.strategy]}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    try:
        settings = resolve_settings(argv)
    except ValueError as ex:
        logging.basicConfig(level=logging.WARNING)
        logger.error("bad settings: %s", ex)
        sys.exit(2)
    logging.basicConfig(level=settings.log_level)

    try:
        grid, key = build_grid(settings), map_key(settings)
    except (GridError, ValueError, OSError) as ex:
        logger.error("could not build grid: %s", ex)
        sys.exit(2)
    Viewer(grid, settings, key).run()


if __name__ == "__main__":
    main()
