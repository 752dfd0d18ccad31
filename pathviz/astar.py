# pathviz/astar.py
"""
Priority-queue searches: A*, Dijkstra and Greedy Best-First.

Each search is a generator. It yields None at the top of every loop
iteration (a point where the controller may pause or cancel) and yields a
Node the first time that node enters the frontier. The Outcome comes back
as the generator's return value.

The heap holds (priority, seq, coord). seq is a monotonic counter, so ties
pop in insertion order. Relaxation pushes a fresh entry instead of
decreasing a key; stale entries are skipped on pop because their coord is
already closed.
"""
from __future__ import annotations
from typing import Callable, Generator, List, Optional, Set, Tuple
import heapq, logging

from .config import RunConfig
from .grid import Grid, Node
from .heuristics import manhattan
from .types import Coord, Outcome

log = logging.getLogger(__name__)

SearchSteps = Generator[Optional[Node], None, Outcome]


def _best_first(grid: Grid, start: Coord, end: Coord,
                priority: Callable[[Node], float], relax: bool) -> SearchSteps:
    """
    relax=True  -> A*/Dijkstra: g, h, f and parent improve whenever a cheaper route shows up.
    relax=False -> Greedy: parent and g are fixed at first discovery, h is refreshed per look.
    """
    src = grid.node(start)
    src.g = 0
    src.h = manhattan(start, end)
    src.f = priority(src)

    openh: List[Tuple[float, int, Coord]] = [(src.f, 0, start)]
    counter = 1
    discovered: Set[Coord] = {start}
    closed: Set[Coord] = set()

    while openh:
        yield None
        _, _, s = heapq.heappop(openh)
        if s in closed:
            continue
        cur = grid.node(s)
        log.debug("processing %s with g=%s f=%s", s, cur.g, cur.f)
        if s == end:
            return Outcome.reached(s)
        closed.add(s)

        for nb in grid.neighbors(s):
            key = nb.coord
            if key in closed:
                continue
            nb.h = manhattan(key, end)
            first = key not in discovered
            tentative = cur.g + nb.weight
            if first or (relax and tentative < nb.g):
                nb.g = tentative
                nb.f = priority(nb)
                nb.parent = s
                heapq.heappush(openh, (nb.f, counter, key))
                counter += 1
                if first:
                    discovered.add(key)
                    yield nb

    return Outcome.not_found()


def astar(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    return (yield from _best_first(grid, start, end, lambda n: n.g + n.h, relax=True))


def dijkstra(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    return (yield from _best_first(grid, start, end, lambda n: n.g, relax=True))


def greedy(grid: Grid, start: Coord, end: Coord, config: Optional[RunConfig] = None) -> SearchSteps:
    if config is not None and config.greedy_priority == "h+weight":
        key = lambda n: n.h + n.weight
    else:
        key = lambda n: n.h
    return (yield from _best_first(grid, start, end, key, relax=False))
