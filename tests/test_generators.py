import random
from collections import deque

import pytest

from pathviz import Grid, NodeKind, RunConfig, SearchController, carve_maze, scatter_walls


def reachable(gw, origin):
    seen = {origin}
    queue = deque([origin])
    while queue:
        s = queue.popleft()
        for nb in gw.neighbors(s):
            if nb.coord not in seen:
                seen.add(nb.coord)
                queue.append(nb.coord)
    return seen


def test_scatter_places_exact_count_and_spares_endpoints():
    gw = Grid.empty(10, 10)
    gw.set_start((0, 0))
    gw.set_end((9, 9))
    placed = scatter_walls(gw, 30, random.Random(1))
    assert placed == 30
    assert gw.count(NodeKind.WALL) == 30
    assert gw.node((0, 0)).kind is NodeKind.START
    assert gw.node((9, 9)).kind is NodeKind.END


def test_scatter_stops_at_saturation():
    gw = Grid.parse("S..\n.4.\n..E")
    placed = scatter_walls(gw, 100, random.Random(2))
    assert placed == 6
    assert gw.to_text() == "S##\n#4#\n##E"


def test_scatter_rounds_target_down():
    gw = Grid.empty(3, 3)
    assert scatter_walls(gw, 40, random.Random(0)) == 3


def test_scatter_zero_percent_is_noop():
    gw = Grid.empty(4, 4)
    assert scatter_walls(gw, 0) == 0
    assert gw.count(NodeKind.WALL) == 0


def test_controller_generation_clears_old_walls_and_keeps_endpoints():
    gw = Grid.parse("S###\n####\n###E")
    ctl = SearchController(gw, RunConfig(obstacle_percent=25, seed=4))
    placed = ctl.generate_obstacles()
    assert placed == 3
    assert gw.count(NodeKind.WALL) == 3
    assert (gw.start, gw.end) == ((0, 0), (2, 3))


def test_obstacles_are_seeded():
    a, b = Grid.empty(8, 8), Grid.empty(8, 8)
    scatter_walls(a, 25, random.Random(9))
    scatter_walls(b, 25, random.Random(9))
    assert a.to_text() == b.to_text()


@pytest.mark.parametrize("seed", range(6))
@pytest.mark.parametrize("shape", [(11, 15), (10, 12), (5, 5)])
def test_maze_is_fully_connected(seed, shape):
    gw = Grid.empty(*shape)
    carve_maze(gw, random.Random(seed))
    assert gw.node((1, 1)).kind is NodeKind.EMPTY
    empties = {n.coord for n in gw if n.kind is NodeKind.EMPTY}
    assert reachable(gw, (1, 1)) == empties


def test_maze_on_odd_grid_is_a_perfect_maze():
    gw = Grid.empty(11, 15)
    carve_maze(gw, random.Random(3))
    cells = [(r, c) for r in range(1, 11, 2) for c in range(1, 15, 2)]
    assert all(gw.node(s).kind is NodeKind.EMPTY for s in cells)
    # a spanning tree over 35 cells has 34 carved connectors
    assert gw.count(NodeKind.EMPTY) == len(cells) + len(cells) - 1
    border = [n for n in gw if n.row in (0, 10) or n.col in (0, 14)]
    assert all(n.kind is NodeKind.WALL for n in border)


def test_maze_drops_endpoints():
    gw = Grid.parse("S....\n.....\n....E")
    carve_maze(gw, random.Random(0))
    assert gw.start is None and gw.end is None
    assert gw.count(NodeKind.START) == 0


def test_maze_needs_room():
    with pytest.raises(ValueError):
        carve_maze(Grid.empty(2, 8))


def test_generated_maze_is_solvable_corner_to_corner():
    gw = Grid.empty(9, 13)
    ctl = SearchController(gw, RunConfig(seed=21))
    ctl.generate_maze()
    ctl.paint((1, 1), "start")
    ctl.paint((7, 11), "end")
    for alg in ("bfs", "astar", "dijkstra", "bidirectional"):
        assert ctl.run(alg).found, alg
