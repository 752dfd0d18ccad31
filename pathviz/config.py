# pathviz/config.py
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional

from .errors import ConfigError

ALGORITHM_NAMES = ("astar", "dijkstra", "greedy", "bfs", "dfs", "bidirectional")
DFS_ORDERS = ("fixed", "reversed", "random")
GREEDY_PRIORITIES = ("h", "h+weight")

MIN_WEIGHT, MAX_WEIGHT = 1, 10


@dataclass(frozen=True)
class RunConfig:
    """Caller-supplied knobs for a run and for grid generation."""

    algorithm: str = "astar"
    delay_ms: float = 0.0         # pause after each visit; 0 runs flat out
    obstacle_percent: int = 20    # 0-40 looks sensible, anything up to 100 is accepted
    weight: int = 5               # value painted by the "weight" draw mode
    dfs_order: str = "fixed"
    greedy_priority: str = "h"
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.algorithm not in ALGORITHM_NAMES:
            raise ConfigError(f"unknown algorithm {self.algorithm!r}; expected one of {', '.join(ALGORITHM_NAMES)}")
        if self.delay_ms < 0:
            raise ConfigError("delay_ms must be non-negative")
        if not 0 <= self.obstacle_percent <= 100:
            raise ConfigError("obstacle_percent must be within 0..100")
        if not isinstance(self.weight, int) or not MIN_WEIGHT <= self.weight <= MAX_WEIGHT:
            raise ConfigError(f"weight must be an integer within {MIN_WEIGHT}..{MAX_WEIGHT}")
        if self.dfs_order not in DFS_ORDERS:
            raise ConfigError(f"dfs_order must be one of {', '.join(DFS_ORDERS)}")
        if self.greedy_priority not in GREEDY_PRIORITIES:
            raise ConfigError(f"greedy_priority must be one of {', '.join(GREEDY_PRIORITIES)}")

    @property
    def delay_sec(self) -> float:
        return self.delay_ms / 1000.0

    def replace(self, **changes) -> "RunConfig":
        return replace(self, **changes)

    @staticmethod
    def speed_to_delay(speed: int) -> float:
        """Map a 1..100 speed slider to a per-visit delay in ms (100 -> 1 ms, 1 -> 100 ms)."""
        if not 1 <= speed <= 100:
            raise ConfigError("speed must be within 1..100")
        return float(101 - speed)
