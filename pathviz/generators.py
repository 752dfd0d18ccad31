# pathviz/generators.py
from __future__ import annotations
from typing import List, Optional
import logging, random

from .grid import Grid
from .types import Coord, NodeKind

log = logging.getLogger(__name__)


def scatter_walls(grid: Grid, percent: float, rng: Optional[random.Random] = None) -> int:
    """
    Turn floor(rows*cols*percent/100) uniformly chosen Empty cells into Wall.
    Only Empty cells are eligible, so Start/End and weights survive; when fewer
    Empty cells exist than requested, all of them are walled. Returns walls placed.
    """
    rng = rng or random.Random()
    target = int(grid.rows * grid.cols * percent // 100)
    empties: List[Coord] = [n.coord for n in grid if n.kind is NodeKind.EMPTY]
    picks = rng.sample(empties, min(target, len(empties)))
    for s in picks:
        grid.set_kind(s, NodeKind.WALL)
    if len(picks) < target:
        log.info("only %d empty cells for %d requested walls", len(picks), target)
    return len(picks)


def carve_maze(grid: Grid, rng: Optional[random.Random] = None) -> None:
    """
    Recursive-backtracking maze. Every cell becomes Wall (endpoints are dropped),
    then passages are carved two cells at a time from (1, 1), staying inside
    the outer border. All carved cells end up 4-connected to (1, 1).
    """
    if grid.rows < 3 or grid.cols < 3:
        raise ValueError("a maze needs at least a 3x3 grid")
    rng = rng or random.Random()
    grid.fill(NodeKind.WALL)

    start = (1, 1)
    grid.set_kind(start, NodeKind.EMPTY)
    stack: List[Coord] = [start]

    while stack:
        r, c = stack[-1]
        cand = [(r - 2, c), (r + 2, c), (r, c - 2), (r, c + 2)]
        options = [(nr, nc) for nr, nc in cand
                   if 0 < nr < grid.rows - 1 and 0 < nc < grid.cols - 1
                   and grid.nodes[nr][nc].kind is NodeKind.WALL]
        if options:
            nr, nc = rng.choice(options)
            grid.set_kind(((r + nr) // 2, (c + nc) // 2), NodeKind.EMPTY)
            grid.set_kind((nr, nc), NodeKind.EMPTY)
            stack.append((nr, nc))
        else:
            stack.pop()
