import random

import pytest

from pathviz import ALGORITHMS, Grid, NodeKind, RunConfig, SearchController, astar, manhattan
from pathviz.types import FOUND, NOT_FOUND

OPEN_5X5 = """
S....
.....
.....
.....
....E
"""

SPLIT = """
S.#..
..#..
..#..
..#.E
"""

DETOUR = """
S5E
...
"""


def solve(text, alg, **cfg):
    gw = Grid.parse(text)
    result = SearchController(gw, RunConfig(algorithm=alg, **cfg)).run()
    return result, gw


def random_grid(seed, rows=12, cols=16, wall_p=0.25, max_weight=1, open_border=False):
    """open_border keeps the top row and right column free of walls, so a route always exists."""
    rng = random.Random(seed)
    gw = Grid.empty(rows, cols)
    for n in gw:
        roll = rng.random()
        on_border = n.row == 0 or n.col == cols - 1
        if roll < wall_p and not (open_border and on_border):
            gw.set_kind(n.coord, NodeKind.WALL)
        elif max_weight > 1 and roll < wall_p + 0.3:
            gw.set_kind(n.coord, NodeKind.WEIGHT, rng.randint(2, max_weight))
    gw.set_start((0, 0))
    gw.set_end((rows - 1, cols - 1))
    return gw


def run_on(gw, alg):
    return SearchController(gw, RunConfig(algorithm=alg)).run(alg)


@pytest.mark.parametrize("alg", ["bfs", "astar", "dijkstra"])
def test_open_grid_shortest_path(alg):
    result, _ = solve(OPEN_5X5, alg)
    assert result.found
    assert result.path_length == 8
    assert result.path_cost == 8
    assert len(result.path) == 7


def test_bidirectional_matches_on_open_grid():
    result, _ = solve(OPEN_5X5, "bidirectional")
    assert result.found
    assert (result.path_length, result.path_cost) == (8, 8)


@pytest.mark.parametrize("alg", sorted(ALGORITHMS))
def test_every_algorithm_reaches_the_end(alg):
    result, gw = solve(OPEN_5X5, alg)
    assert result.status == FOUND
    coords = [gw.start] + [(p.row, p.col) for p in result.path] + [gw.end]
    for a, b in zip(coords, coords[1:]):
        assert manhattan(a, b) == 1
    assert len(set(coords)) == len(coords)


@pytest.mark.parametrize("alg", sorted(ALGORITHMS))
def test_wall_separating_start_and_end(alg):
    result, gw = solve(SPLIT, alg)
    assert result.status == NOT_FOUND
    assert not result.found
    assert result.path == []
    assert result.path_cost == 0
    assert gw.count(NodeKind.PATH) == 0


@pytest.mark.parametrize("alg", ["astar", "dijkstra"])
def test_cost_based_search_takes_the_detour(alg):
    result, _ = solve(DETOUR, alg)
    assert [(p.row, p.col) for p in result.path] == [(1, 0), (1, 1), (1, 2)]
    assert (result.path_length, result.path_cost) == (4, 4)
    assert result.visited_count == 5


def test_bfs_ignores_weights():
    result, _ = solve(DETOUR, "bfs")
    assert [(p.row, p.col, p.weight) for p in result.path] == [(0, 1, 5)]
    assert (result.path_length, result.path_cost) == (2, 6)


def test_greedy_variants():
    plain, _ = solve(DETOUR, "greedy")
    assert (plain.path_length, plain.path_cost) == (2, 6)
    weighted, _ = solve(DETOUR, "greedy", greedy_priority="h+weight")
    assert (weighted.path_length, weighted.path_cost) == (4, 4)


def test_adjacent_endpoints():
    for alg in ALGORITHMS:
        result, _ = solve("SE", alg)
        assert result.found, alg
        assert result.path == []
        assert (result.path_length, result.path_cost) == (1, 1)


def test_dfs_fixed_order_trace():
    result, _ = solve("S..\n...\n..E", "dfs")
    assert [(p.row, p.col) for p in result.path] == [
        (0, 1), (0, 2), (1, 2), (1, 1), (1, 0), (2, 0), (2, 1),
    ]
    # start plus every cell on the path; the end is never reported
    assert result.visited_count == 8


def test_dfs_order_flag_changes_first_branch():
    def first_visit(order):
        seen = []
        gw = Grid.parse("S..\n...\n..E")
        ctl = SearchController(gw, RunConfig(algorithm="dfs", dfs_order=order),
                               on_event=lambda e: seen.append(e))
        ctl.run()
        return (seen[0].row, seen[0].col)

    assert first_visit("fixed") == (0, 1)
    assert first_visit("reversed") == (1, 0)


def test_dfs_random_order_is_reproducible_with_seed():
    gw = random_grid(5, wall_p=0.2)
    a = SearchController(gw, RunConfig(algorithm="dfs", dfs_order="random", seed=11)).run()
    b = SearchController(gw, RunConfig(algorithm="dfs", dfs_order="random", seed=11)).run()
    assert a.path == b.path
    assert a.visited_count == b.visited_count


@pytest.mark.parametrize("seed", range(12))
def test_astar_cost_matches_dijkstra(seed):
    gw = random_grid(seed, max_weight=9)
    a = run_on(gw, "astar")
    d = run_on(gw, "dijkstra")
    assert a.found == d.found
    assert a.path_cost == d.path_cost


@pytest.mark.parametrize("seed", range(12))
def test_bfs_length_matches_dijkstra_on_unit_weights(seed):
    gw = random_grid(seed)
    b = run_on(gw, "bfs")
    d = run_on(gw, "dijkstra")
    assert b.found == d.found
    assert b.path_length == d.path_length
    assert b.path_cost == d.path_cost


@pytest.mark.parametrize("seed", range(12))
def test_bidirectional_never_beats_dijkstra(seed):
    gw = random_grid(seed, max_weight=6)
    bi = run_on(gw, "bidirectional")
    d = run_on(gw, "dijkstra")
    assert bi.found == d.found
    if d.found:
        assert bi.path_cost >= d.path_cost


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("alg", ["astar", "dijkstra"])
def test_path_cost_equals_recorded_g(seed, alg):
    gw = random_grid(seed, max_weight=9, open_border=True)
    result = run_on(gw, alg)
    assert result.found
    replay = sum(p.weight for p in result.path) + gw.node(gw.end).weight
    assert replay == result.path_cost == gw.node(gw.end).g


def test_generator_protocol():
    gw = Grid.parse("S.E")
    steps = astar(gw, gw.start, gw.end)
    items = []
    with pytest.raises(StopIteration) as stop:
        while True:
            items.append(next(steps))
    assert [n.coord for n in items if n is not None] == [(0, 1), (0, 2)]
    assert stop.value.value.terminal == (0, 2)
