# pathviz/algorithms.py
from __future__ import annotations
from typing import Callable, Dict, Optional

from .astar import SearchSteps, astar, dijkstra, greedy
from .config import ALGORITHM_NAMES, RunConfig
from .errors import ConfigError
from .grid import Grid
from .traversal import bfs, bidirectional, dfs
from .types import Coord

Algorithm = Callable[[Grid, Coord, Coord, Optional[RunConfig]], SearchSteps]

ALGORITHMS: Dict[str, Algorithm] = {
    "astar": astar,
    "dijkstra": dijkstra,
    "greedy": greedy,
    "bfs": bfs,
    "dfs": dfs,
    "bidirectional": bidirectional,
}

LABELS: Dict[str, str] = {
    "astar": "A*",
    "dijkstra": "Dijkstra",
    "greedy": "Greedy Best-First",
    "bfs": "Breadth-First",
    "dfs": "Depth-First",
    "bidirectional": "Bidirectional",
}


def get_algorithm(name: str) -> Algorithm:
    try:
        return ALGORITHMS[name]
    except KeyError:
        raise ConfigError(f"unknown algorithm {name!r}") from None
