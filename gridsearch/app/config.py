# gridsearch/app/config.py
#!/usr/bin/env python3
"""
Runtime settings for the viewer and the headless runner.

Every setting reads an environment variable and may be overridden on the
command line with --key=value:

    GRIDSEARCH_STRATEGY  --strategy=   stack | queue | greedy | astar (default queue)
    GRIDSEARCH_SPEED     --speed=      steps per second, 1..60 (default 8)
    GRIDSEARCH_MAP       --map=        bundled map name or template path
                         --maze=       HxW, generate a random maze instead
    GRIDSEARCH_SEED      --seed=       int seed for maze generation
    GRIDSEARCH_LOG       --log=        logging level name (default WARNING)
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from gridsearch.core.frontier import canonical_strategy
from gridsearch.core.grid import Grid, bundled_maps, open_map
from gridsearch.core.maze import generate_maze

MIN_SPEED, MAX_SPEED = 1, 60

_ENV_KEYS = {
    "strategy": "GRIDSEARCH_STRATEGY",
    "speed": "GRIDSEARCH_SPEED",
    "map": "GRIDSEARCH_MAP",
    "seed": "GRIDSEARCH_SEED",
    "log": "GRIDSEARCH_LOG",
}


@dataclass
class Settings:
    strategy: str = "queue"
    steps_per_sec: int = 8
    map_name: Optional[str] = None
    maze: Optional[Tuple[int, int]] = None
    seed: Optional[int] = None
    log_level: int = logging.WARNING


def parse_flags(argv: List[str]) -> Dict[str, str]:
    """Collect --key=value flags; anything else is ignored."""
    flags: Dict[str, str] = {}
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            flags[key.lower()] = value
    return flags


def parse_maze_size(text: str) -> Tuple[int, int]:
    try:
        h, w = (int(part) for part in text.lower().split("x"))
    except ValueError:
        raise ValueError(f"maze size must look like 21x31, got {text!r}") from None
    if h < 1 or w < 1:
        raise ValueError(f"maze size must be positive, got {text!r}")
    return h, w


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level {name!r}")
    return level


def resolve_settings(argv: Optional[List[str]] = None,
                     environ: Optional[Mapping[str, str]] = None) -> Settings:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    raw = {key: environ[env] for key, env in _ENV_KEYS.items() if environ.get(env)}
    raw.update(parse_flags(argv))

    settings = Settings()
    if "strategy" in raw:
        settings.strategy = canonical_strategy(raw["strategy"])
    if "speed" in raw:
        try:
            speed = int(raw["speed"])
        except ValueError:
            raise ValueError(f"speed must be an integer, got {raw['speed']!r}") from None
        settings.steps_per_sec = max(MIN_SPEED, min(MAX_SPEED, speed))
    if "map" in raw:
        settings.map_name = raw["map"]
    if "maze" in raw:
        settings.maze = parse_maze_size(raw["maze"])
    if "seed" in raw:
        try:
            settings.seed = int(raw["seed"])
        except ValueError:
            raise ValueError(f"seed must be an integer, got {raw['seed']!r}") from None
    if "log" in raw:
        settings.log_level = _log_level(raw["log"])
    return settings


def map_key(settings: Settings) -> str:
    if settings.maze is not None:
        return "random maze"
    return settings.map_name or next(iter(bundled_maps()))


def build_grid(settings: Settings) -> Grid:
    """Grid named by the settings: a generated maze or a map file."""
    if settings.maze is not None:
        return generate_maze(*settings.maze, seed=settings.seed)
    return open_map(map_key(settings))
