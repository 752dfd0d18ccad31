# pathviz/grid.py
from __future__ import annotations
from dataclasses import dataclass, field
from math import inf
from typing import Any, Dict, List, Optional
import json, logging, os

from .errors import SnapshotError
from .types import Coord, NodeKind

log = logging.getLogger(__name__)

TEXT_KINDS = {
    ".": NodeKind.EMPTY,
    "#": NodeKind.WALL,
    "S": NodeKind.START,
    "E": NodeKind.END,
    "*": NodeKind.PATH,
    "o": NodeKind.VISITED,
}
TEXT_CHARS = {kind: ch for ch, kind in TEXT_KINDS.items()}
TEXT_CHARS[NodeKind.VISITED_DARK] = "o"


@dataclass(eq=False)
class Node:
    row: int
    col: int
    kind: NodeKind = NodeKind.EMPTY
    weight: int = 1
    g: float = inf
    h: float = 0
    f: float = inf
    parent: Optional[Coord] = None
    visit_count: int = 0

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_wall(self) -> bool:
        return self.kind is NodeKind.WALL

    def clear_search(self) -> None:
        self.g = inf
        self.h = 0
        self.f = inf
        self.parent = None


@dataclass
class Grid:
    rows: int
    cols: int
    nodes: List[List[Node]] = field(repr=False)
    start: Optional[Coord] = None
    end: Optional[Coord] = None

    @staticmethod
    def empty(rows: int, cols: int) -> "Grid":
        if rows <= 0 or cols <= 0:
            raise ValueError("grid dimensions must be positive")
        nodes = [[Node(r, c) for c in range(cols)] for r in range(rows)]
        return Grid(rows, cols, nodes)

    @staticmethod
    def parse(text: str) -> "Grid":
        """Build a grid from lines such as "S.3#E"; digits 1-9 are weighted cells."""
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines or any(len(line) != len(lines[0]) for line in lines):
            raise SnapshotError("text grid must be a non-empty rectangle")
        gw = Grid.empty(len(lines), len(lines[0]))
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                if ch in "123456789":
                    gw.set_kind((r, c), NodeKind.WEIGHT, int(ch))
                elif ch in TEXT_KINDS:
                    gw.set_kind((r, c), TEXT_KINDS[ch])
                else:
                    raise SnapshotError(f"unexpected character {ch!r} at ({r}, {c})")
        return gw

    def to_text(self) -> str:
        return "\n".join(
            "".join(str(min(n.weight, 9)) if n.kind is NodeKind.WEIGHT else TEXT_CHARS[n.kind] for n in row)
            for row in self.nodes)

    # ----------------- lookup -----------------

    def in_bounds(self, s: Coord) -> bool:
        r, c = s
        return 0 <= r < self.rows and 0 <= c < self.cols

    def node(self, s: Coord) -> Node:
        r, c = s
        if not self.in_bounds(s):
            raise IndexError(f"{s} is outside a {self.rows}x{self.cols} grid")
        return self.nodes[r][c]

    def __iter__(self):
        for row in self.nodes:
            yield from row

    def is_blocked(self, s: Coord) -> bool:
        return self.node(s).is_wall

    def neighbors(self, s: Coord) -> List[Node]:
        """Passable 4-neighbors in fixed order: up, down, left, right."""
        r, c = s
        cand = [(r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)]
        return [self.nodes[p[0]][p[1]] for p in cand
                if self.in_bounds(p) and not self.nodes[p[0]][p[1]].is_wall]

    def count(self, kind: NodeKind) -> int:
        return sum(1 for n in self if n.kind is kind)

    # ----------------- mutation -----------------

    def set_kind(self, s: Coord, kind: NodeKind, weight: int = 1) -> Node:
        """Single mutation path for cell kinds; keeps at most one Start and one End."""
        if not isinstance(weight, int) or weight < 1:
            raise ValueError("weight must be a positive integer")
        node = self.node(s)
        if kind.is_endpoint:
            weight = 1
            old = self.start if kind is NodeKind.START else self.end
            if old is not None and old != s:
                prev = self.node(old)
                prev.kind, prev.weight = NodeKind.EMPTY, 1
        if node.kind is NodeKind.START and kind is not NodeKind.START:
            self.start = None
        elif node.kind is NodeKind.END and kind is not NodeKind.END:
            self.end = None

        node.kind = kind
        node.weight = weight
        if kind is NodeKind.START:
            self.start = s
        elif kind is NodeKind.END:
            self.end = s
        log.debug("node %s set to %s (weight %d)", s, kind.value, weight)
        return node

    def set_start(self, s: Coord) -> Node:
        return self.set_kind(s, NodeKind.START)

    def set_end(self, s: Coord) -> Node:
        return self.set_kind(s, NodeKind.END)

    def clear_search(self) -> None:
        """Wipe visited/path marks and search bookkeeping left by the previous run."""
        for n in self:
            if n.kind.is_search_mark:
                n.kind = NodeKind.EMPTY
            n.clear_search()

    def reset(self, keep_endpoints: bool = False) -> None:
        """Restore every cell to Empty and zero the per-run fields and visit counts."""
        keep = {self.start: NodeKind.START, self.end: NodeKind.END} if keep_endpoints else {}
        for n in self:
            n.kind = keep.get(n.coord, NodeKind.EMPTY)
            n.weight = 1
            n.visit_count = 0
            n.clear_search()
        if not keep_endpoints:
            self.start = self.end = None

    def fill(self, kind: NodeKind) -> None:
        """Overwrite every cell (endpoints included) with a plain kind and zero visit counts."""
        if kind.is_endpoint:
            raise ValueError("cannot fill a grid with an endpoint kind")
        for n in self:
            n.kind, n.weight = kind, 1
            n.visit_count = 0
            n.clear_search()
        self.start = self.end = None

    # ----------------- snapshot -----------------

    def snapshot(self) -> List[List[Dict[str, Any]]]:
        return [[{"type": n.kind.value, "weight": n.weight, "visitCount": n.visit_count}
                 for n in row] for row in self.nodes]

    def restore(self, data: Any) -> None:
        """Replace every cell from snapshot data; on any error the grid is left as it was."""
        cells = _parse_snapshot(data)
        if len(cells) != self.rows or len(cells[0]) != self.cols:
            raise SnapshotError(f"snapshot is {len(cells)}x{len(cells[0])}, grid is {self.rows}x{self.cols}")
        self.start = self.end = None
        for r, row in enumerate(cells):
            for c, (kind, weight, visits) in enumerate(row):
                n = self.nodes[r][c]
                n.kind, n.weight, n.visit_count = kind, weight, visits
                n.clear_search()
                if kind is NodeKind.START:
                    self.start = (r, c)
                elif kind is NodeKind.END:
                    self.end = (r, c)
        log.info("imported %dx%d snapshot", self.rows, self.cols)

    @staticmethod
    def from_snapshot(data: Any) -> "Grid":
        cells = _parse_snapshot(data)
        gw = Grid.empty(len(cells), len(cells[0]))
        gw.restore(data)
        return gw

    def save(self, path: str) -> None:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.snapshot(), f)

    @staticmethod
    def load(path: str) -> "Grid":
        with open(path, "r") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as exc:
                raise SnapshotError(f"{path} is not valid JSON: {exc}") from exc
        return Grid.from_snapshot(data)


def _parse_snapshot(data: Any):
    if not isinstance(data, list) or not data or not all(isinstance(row, list) for row in data):
        raise SnapshotError("snapshot must be a non-empty list of rows")
    width = len(data[0])
    if width == 0 or any(len(row) != width for row in data):
        raise SnapshotError("snapshot rows must be non-empty and of equal length")

    cells = []
    starts = ends = 0
    for r, row in enumerate(data):
        parsed = []
        for c, cell in enumerate(row):
            if not isinstance(cell, dict):
                raise SnapshotError(f"cell ({r}, {c}) is not an object")
            try:
                kind = NodeKind(cell.get("type"))
            except ValueError:
                raise SnapshotError(f"cell ({r}, {c}) has unknown type {cell.get('type')!r}") from None
            weight = cell.get("weight", 1)
            visits = cell.get("visitCount", 0) or 0
            if isinstance(weight, bool) or not isinstance(weight, int) or weight < 1:
                raise SnapshotError(f"cell ({r}, {c}) has invalid weight {weight!r}")
            if isinstance(visits, bool) or not isinstance(visits, int) or visits < 0:
                raise SnapshotError(f"cell ({r}, {c}) has invalid visitCount {visits!r}")
            if kind.is_endpoint:
                weight = 1
            starts += kind is NodeKind.START
            ends += kind is NodeKind.END
            parsed.append((kind, weight, visits))
        cells.append(parsed)
    if starts > 1 or ends > 1:
        raise SnapshotError("snapshot holds more than one start or end")
    return cells
