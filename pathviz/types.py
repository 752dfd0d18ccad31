# pathviz/types.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

Coord = Tuple[int, int]  # (row, col)

ParentMap = Dict[Coord, Optional[Coord]]


class NodeKind(str, Enum):
    EMPTY = "empty"
    START = "start"
    END = "end"
    WALL = "wall"
    WEIGHT = "weight"
    PATH = "path"
    VISITED = "visited-pale"
    VISITED_DARK = "visited-dark"

    @property
    def is_endpoint(self) -> bool:
        return self in (NodeKind.START, NodeKind.END)

    @property
    def is_visited(self) -> bool:
        return self in (NodeKind.VISITED, NodeKind.VISITED_DARK)

    @property
    def is_search_mark(self) -> bool:
        """Kinds a run paints onto the grid and the next run wipes."""
        return self.is_visited or self is NodeKind.PATH


FOUND = "found"
NOT_FOUND = "not_found"
ABORTED = "aborted"


@dataclass(frozen=True)
class Outcome:
    status: str                       # FOUND | NOT_FOUND | ABORTED
    terminal: Optional[Coord] = None  # end, or the meeting point for bidirectional
    forward: Optional[ParentMap] = None
    backward: Optional[ParentMap] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND

    @property
    def bidirectional(self) -> bool:
        return self.backward is not None

    @staticmethod
    def reached(terminal: Coord) -> "Outcome":
        return Outcome(FOUND, terminal)

    @staticmethod
    def met(meeting: Coord, forward: ParentMap, backward: ParentMap) -> "Outcome":
        return Outcome(FOUND, meeting, forward, backward)

    @staticmethod
    def not_found() -> "Outcome":
        return Outcome(NOT_FOUND)

    @staticmethod
    def aborted() -> "Outcome":
        return Outcome(ABORTED)
