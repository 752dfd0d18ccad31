# pathviz/paths.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from .grid import Grid, Node
from .types import Coord, Outcome, ParentMap


@dataclass
class Path:
    """Cells strictly between Start and End, in start->end order."""
    nodes: List[Node]
    cost: int     # weight of every cell entered after Start, End included

    @property
    def length(self) -> int:
        """Number of moves from Start to End."""
        return len(self.nodes) + 1

    @property
    def coords(self) -> List[Coord]:
        return [n.coord for n in self.nodes]


def _chain(first: Optional[Coord], parent_of: Callable[[Coord], Optional[Coord]]) -> List[Coord]:
    out: List[Coord] = []
    s = first
    while s is not None:
        out.append(s)
        s = parent_of(s)
    return out


def _assemble(grid: Grid, coords: List[Coord]) -> Path:
    nodes = [grid.node(s) for s in coords]
    inner = [n for n in nodes if not n.kind.is_endpoint]
    cost = sum(n.weight for n in inner)
    if len(nodes) > 1:
        cost += nodes[-1].weight if nodes[-1].kind.is_endpoint else 0
    return Path(inner, cost)


def reconstruct_path(grid: Grid, terminal: Coord) -> Path:
    """Follow Node.parent from terminal back to the node without a parent."""
    coords = _chain(terminal, lambda s: grid.node(s).parent)
    coords.reverse()
    return _assemble(grid, coords)


def reconstruct_bidirectional(grid: Grid, meeting: Coord, forward: ParentMap, backward: ParentMap) -> Path:
    """meeting -> start via forward parents (reversed), then meeting -> end via backward parents."""
    head = _chain(meeting, forward.get)
    head.reverse()
    tail = _chain(backward.get(meeting), backward.get)
    return _assemble(grid, head + tail)


def reconstruct(grid: Grid, outcome: Outcome) -> Path:
    if not outcome.found:
        raise ValueError("no path to reconstruct from an unsuccessful outcome")
    if outcome.bidirectional:
        return reconstruct_bidirectional(grid, outcome.terminal, outcome.forward, outcome.backward)
    return reconstruct_path(grid, outcome.terminal)
