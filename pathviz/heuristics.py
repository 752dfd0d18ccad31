# pathviz/heuristics.py
from .types import Coord


def manhattan(a: Coord, b: Coord) -> int:
    """4-connected distance; admissible here because every enterable cell costs at least 1."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])
