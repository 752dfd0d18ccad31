# pathviz/traversal.py
"""Queue/stack searches: BFS, DFS and bidirectional BFS. Same generator protocol as astar.py."""
from __future__ import annotations
from collections import deque
from typing import Deque, Generator, List, Optional, Set, Tuple
import logging, random

from .astar import SearchSteps
from .config import RunConfig
from .grid import Grid, Node
from .types import Coord, Outcome, ParentMap

log = logging.getLogger(__name__)


def bfs(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    grid.node(start).g = 0
    queue: Deque[Coord] = deque([start])
    seen: Set[Coord] = {start}

    while queue:
        yield None
        s = queue.popleft()
        log.debug("processing %s", s)
        if s == end:
            return Outcome.reached(s)
        cur = grid.node(s)
        for nb in grid.neighbors(s):
            if nb.coord in seen:
                continue
            seen.add(nb.coord)
            nb.parent = s
            nb.g = cur.g + nb.weight
            queue.append(nb.coord)
            yield nb

    return Outcome.not_found()


def _push_order(nbs: List[Node], order: str, rng: random.Random) -> List[Node]:
    # the last pushed is the first explored
    if order == "reversed":
        return nbs[::-1]
    if order == "random":
        rng.shuffle(nbs)
    return nbs


def dfs(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    order = config.dfs_order if config is not None else "fixed"
    rng = random.Random(config.seed if config is not None else None)

    # entries carry their parent; a node is settled by the first entry popped for it
    stack: List[Tuple[Coord, Optional[Coord]]] = [(start, None)]
    visited: Set[Coord] = set()

    while stack:
        yield None
        s, parent = stack.pop()
        if s in visited:
            continue
        visited.add(s)
        cur = grid.node(s)
        cur.parent = parent
        cur.g = 0 if parent is None else grid.node(parent).g + cur.weight
        log.debug("processing %s", s)
        if s == end:
            return Outcome.reached(s)
        yield cur

        fresh = [nb for nb in grid.neighbors(s) if nb.coord not in visited]
        for nb in _push_order(fresh, order, rng):
            stack.append((nb.coord, s))

    return Outcome.not_found()


def _expand(grid: Grid, queue: Deque[Coord], parents: ParentMap,
            other: ParentMap) -> Generator[Optional[Node], None, Optional[Coord]]:
    """One expansion for one side; returns the meeting point if the sides touched."""
    s = queue.popleft()
    if s in other:
        return s
    for nb in grid.neighbors(s):
        key = nb.coord
        if key in parents:
            continue
        parents[key] = s
        queue.append(key)
        yield nb
        if key in other:
            return key
    return None


def bidirectional(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    fq: Deque[Coord] = deque([start])
    bq: Deque[Coord] = deque([end])
    # parent maps double as each side's visited set
    forward: ParentMap = {start: None}
    backward: ParentMap = {end: None}

    while fq and bq:
        yield None
        meet = yield from _expand(grid, fq, forward, backward)
        if meet is None:
            meet = yield from _expand(grid, bq, backward, forward)
        if meet is not None:
            log.debug("sides met at %s", meet)
            return Outcome.met(meet, forward, backward)

    return Outcome.not_found()
