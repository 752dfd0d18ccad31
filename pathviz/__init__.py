# pathviz/__init__.py
from .types import Coord, NodeKind, Outcome
from .errors import PathvizError, RunRejected, SnapshotError, ConfigError
from .config import RunConfig
from .grid import Grid, Node
from .heuristics import manhattan
from .astar import astar, dijkstra, greedy
from .traversal import bfs, dfs, bidirectional
from .algorithms import ALGORITHMS, get_algorithm
from .paths import Path, reconstruct, reconstruct_path, reconstruct_bidirectional
from .generators import scatter_walls, carve_maze
from .controller import SearchController, SearchRun, RunResult, PathStep, NodeEvent, RunComplete

__all__ = [
    "Coord", "NodeKind", "Outcome",
    "PathvizError", "RunRejected", "SnapshotError", "ConfigError",
    "RunConfig", "Grid", "Node", "manhattan",
    "astar", "dijkstra", "greedy", "bfs", "dfs", "bidirectional",
    "ALGORITHMS", "get_algorithm",
    "Path", "reconstruct", "reconstruct_path", "reconstruct_bidirectional",
    "scatter_walls", "carve_maze",
    "SearchController", "SearchRun", "RunResult", "PathStep", "NodeEvent", "RunComplete",
]
