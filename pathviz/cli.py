# pathviz/cli.py
from __future__ import annotations
import argparse, csv, json, logging
from typing import List, Optional, Tuple

from .algorithms import ALGORITHMS, LABELS
from .config import ALGORITHM_NAMES, DFS_ORDERS, GREEDY_PRIORITIES, RunConfig
from .controller import RunResult, SearchController
from .errors import PathvizError
from .grid import Grid
from .types import Coord
from .viz import draw_grid_png

log = logging.getLogger("pathviz")


def parse_coord(text: str) -> Coord:
    try:
        r, c = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected ROW,COL but got {text!r}") from None
    return (r, c)


def format_stats(name: str, s: RunResult) -> str:
    return (f"{name:18s} | found={s.found!s:5s} | length={s.path_length:4d} | "
            f"cost={s.path_cost:5d} | visited={s.visited_count:6d} | "
            f"time={s.elapsed_ms:7.1f} ms")


def _load(args: argparse.Namespace) -> Grid:
    gw = Grid.load(args.grid)
    if getattr(args, "start", None) is not None:
        gw.set_start(args.start)
    if getattr(args, "end", None) is not None:
        gw.set_end(args.end)
    return gw


def run_all_algs(gw: Grid, config: RunConfig) -> List[Tuple[str, RunResult]]:
    results: List[Tuple[str, RunResult]] = []
    ctl = SearchController(gw, config)
    for name in ALGORITHMS:
        results.append((name, ctl.run(name)))
    return results

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    gw = Grid.empty(args.rows, args.cols)
    ctl = SearchController(gw, RunConfig(obstacle_percent=args.density, seed=args.seed))
    if args.kind == "maze":
        ctl.generate_maze()
    else:
        ctl.generate_obstacles()
    if args.start is not None:
        gw.set_start(args.start)
    if args.end is not None:
        gw.set_end(args.end)
    gw.save(args.out)
    print("wrote", args.out)

def cmd_run(args: argparse.Namespace) -> None:
    gw = _load(args)
    config = RunConfig(algorithm=args.alg, delay_ms=args.delay, dfs_order=args.dfs_order,
                       greedy_priority=args.greedy_priority, seed=args.seed)
    result = SearchController(gw, config).run()
    print(format_stats(LABELS[args.alg], result))
    if not result.found:
        print("no path found")
    if args.png:
        draw_grid_png(gw, args.png, cell=args.cell, heatmap=args.heatmap)
        print("wrote", args.png)
    if args.save:
        gw.save(args.save)
        print("wrote", args.save)
    if args.json:
        print(json.dumps(result.as_dict()))

def cmd_bench(args: argparse.Namespace) -> None:
    gw = _load(args)
    config = RunConfig(dfs_order=args.dfs_order, greedy_priority=args.greedy_priority, seed=args.seed)
    rows = []
    for name, st in run_all_algs(gw, config):
        print(format_stats(LABELS[name], st))
        rows.append({
            "alg": name,
            "found": st.found,
            "length": st.path_length,
            "cost": st.path_cost,
            "visited": st.visited_count,
            "time_ms": round(st.elapsed_ms, 3),
        })
    if args.csv:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def _add_variant_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--dfs-order", choices=DFS_ORDERS, default="fixed")
    p.add_argument("--greedy-priority", choices=GREEDY_PRIORITIES, default="h")
    p.add_argument("--seed", type=int, default=None)

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Weighted grid search visualizer engine")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate a grid snapshot")
    g.add_argument("--kind", choices=("obstacles", "maze"), default="obstacles")
    g.add_argument("--rows", type=int, default=25)
    g.add_argument("--cols", type=int, default=41)
    g.add_argument("--density", type=int, default=20, help="wall percent for obstacles")
    g.add_argument("--seed", type=int, default=None)
    g.add_argument("--start", type=parse_coord, default=None, help="ROW,COL to place the start on")
    g.add_argument("--end", type=parse_coord, default=None, help="ROW,COL to place the end on")
    g.add_argument("--out", type=str, default="grids/grid.json")
    g.set_defaults(func=cmd_gen)

    r = sub.add_parser("run", help="run one algorithm on a snapshot")
    r.add_argument("--grid", type=str, required=True)
    r.add_argument("--alg", choices=ALGORITHM_NAMES, default="astar")
    r.add_argument("--start", type=parse_coord, default=None, help="ROW,COL (overrides the snapshot)")
    r.add_argument("--end", type=parse_coord, default=None, help="ROW,COL (overrides the snapshot)")
    r.add_argument("--delay", type=float, default=0.0, help="ms to pause after each visit")
    r.add_argument("--png", type=str, default="")
    r.add_argument("--cell", type=int, default=10)
    r.add_argument("--heatmap", action="store_true")
    r.add_argument("--save", type=str, default="", help="write the searched grid back out")
    r.add_argument("--json", action="store_true", help="print the run result as JSON")
    _add_variant_flags(r)
    r.set_defaults(func=cmd_run)

    b = sub.add_parser("bench", help="run every algorithm on a snapshot")
    b.add_argument("--grid", type=str, required=True)
    b.add_argument("--start", type=parse_coord, default=None)
    b.add_argument("--end", type=parse_coord, default=None)
    b.add_argument("--csv", type=str, default="")
    _add_variant_flags(b)
    b.set_defaults(func=cmd_bench)

    return p

def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except (PathvizError, OSError) as exc:
        log.error("%s", exc)
        return 1
    return 0
