# pathviz/controller.py
"""
Execution control for search runs.

A SearchController owns one Grid and allows one active SearchRun at a
time. The run drives an algorithm generator (see astar.py) and, between
steps, honours pause/cancel, paints visited cells, and forwards
NodeEvent / RunComplete notifications to the caller's handler.

Two ways to drive a run:
- run.step(): one suspension point per call, for callers that own a loop
  (GUI frame ticks, tests). A paused run makes no progress.
- run.run() / run.spawn(): to completion on the current / a background
  thread. Pause blocks on an Event; cancel wakes it.
"""
from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union
import logging, random, threading, time

from .algorithms import LABELS, get_algorithm
from .astar import SearchSteps
from .config import RunConfig
from .errors import ConfigError, RunRejected
from .generators import carve_maze, scatter_walls
from .grid import Grid, Node
from .paths import reconstruct
from .types import Coord, NodeKind, Outcome

log = logging.getLogger(__name__)

DRAW_MODES = ("start", "end", "wall", "weight", "erase")


class PathStep(NamedTuple):
    row: int
    col: int
    weight: int


@dataclass
class RunResult:
    algorithm: str
    status: str                # "found" | "not_found" | "aborted"
    path: List[PathStep]
    path_cost: int
    path_length: int
    visited_count: int
    elapsed_ms: float

    @property
    def found(self) -> bool:
        return self.status == "found"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "algorithm": self.algorithm,
            "status": self.status,
            "found": self.found,
            "path": [p._asdict() for p in self.path],
            "path_cost": self.path_cost,
            "path_length": self.path_length,
            "visited_count": self.visited_count,
            "elapsed_ms": self.elapsed_ms,
        }


@dataclass(frozen=True)
class NodeEvent:
    row: int
    col: int
    kind: NodeKind


@dataclass(frozen=True)
class RunComplete:
    result: RunResult


Event = Union[NodeEvent, RunComplete]
EventHandler = Callable[[Event], None]


class SearchRun:
    """Per-run context: the algorithm generator plus pause/cancel flags and counters."""

    def __init__(self, controller: "SearchController", config: RunConfig, steps: SearchSteps):
        self.config = config
        self.algorithm = config.algorithm
        self.visited_count = 0
        self.result: Optional[RunResult] = None
        self.error: Optional[BaseException] = None
        self._controller = controller
        self._steps = steps
        self._resume = threading.Event()
        self._resume.set()
        self._cancel = threading.Event()
        self._done = threading.Event()
        # held by whoever is advancing the generator
        self._lock = threading.Lock()
        self._t0 = time.perf_counter()

    # ----------------- flags -----------------

    @property
    def paused(self) -> bool:
        return not self._resume.is_set()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    @property
    def finished(self) -> bool:
        return self.result is not None or self.error is not None

    def pause(self) -> None:
        if not self.finished and not self.cancelled:
            self._resume.clear()
            log.info("%s paused after %d visits", self.algorithm, self.visited_count)

    def resume(self) -> None:
        if self.paused:
            log.info("%s resumed", self.algorithm)
        self._resume.set()

    def cancel(self) -> None:
        """Abort the run: completes here when idle, else at the driver's next suspension point."""
        self._cancel.set()
        self._resume.set()
        if self._lock.acquire(blocking=False):
            try:
                self._advance()
            finally:
                self._lock.release()

    # ----------------- driving -----------------

    def step(self) -> bool:
        """Advance one suspension point unless paused. Returns True while the run is live."""
        if not self.paused:
            with self._lock:
                self._advance()
        return not self.finished

    def run(self) -> Optional[RunResult]:
        delay = self.config.delay_sec
        while not self.finished:
            self._resume.wait()
            with self._lock:
                visited = self._advance()
            if visited and delay > 0:
                self._cancel.wait(delay)
        return self.result

    def spawn(self) -> threading.Thread:
        t = threading.Thread(target=self.run, name=f"pathviz-{self.algorithm}", daemon=True)
        t.start()
        return t

    def wait(self, timeout: Optional[float] = None) -> Optional[RunResult]:
        self._done.wait(timeout)
        return self.result

    def _advance(self) -> bool:
        if self.finished:
            return False
        if self.cancelled:
            self._steps.close()
            self._complete(Outcome.aborted())
            return False
        try:
            node = next(self._steps)
        except StopIteration as stop:
            self._complete(stop.value)
            return False
        except Exception as exc:
            self.error = exc
            log.error("%s failed after %d visits: %s", self.algorithm, self.visited_count, exc)
            self._controller._release(self)
            self._done.set()
            raise
        if node is None:
            return False
        self._visit(node)
        return True

    def _visit(self, node: Node) -> None:
        self.visited_count += 1
        if node.kind.is_endpoint:
            return
        node.kind = NodeKind.VISITED
        node.visit_count += 1
        self._controller._emit(NodeEvent(node.row, node.col, NodeKind.VISITED))

    def _complete(self, outcome: Outcome) -> None:
        if self.finished:
            return
        elapsed_ms = (time.perf_counter() - self._t0) * 1000.0
        grid = self._controller.grid
        steps: List[PathStep] = []
        cost = length = 0
        if outcome.found:
            path = reconstruct(grid, outcome)
            for n in path.nodes:
                n.kind = NodeKind.PATH
                steps.append(PathStep(n.row, n.col, n.weight))
                self._controller._emit(NodeEvent(n.row, n.col, NodeKind.PATH))
            cost, length = path.cost, path.length

        self.result = RunResult(self.algorithm, outcome.status, steps, cost, length,
                                self.visited_count, elapsed_ms)
        self._controller._release(self)
        self._done.set()
        if outcome.found:
            log.info("%s found a path: length=%d cost=%d visited=%d in %.1f ms",
                     LABELS[self.algorithm], length, cost, self.visited_count, elapsed_ms)
        else:
            log.info("%s finished without a path (%s) after %d visits",
                     LABELS[self.algorithm], outcome.status, self.visited_count)
        self._controller._emit(RunComplete(self.result))


class SearchController:
    """Sole mutator of a Grid: edits, generation and runs all go through here."""

    def __init__(self, grid: Grid, config: Optional[RunConfig] = None,
                 on_event: Optional[EventHandler] = None):
        self.grid = grid
        self.config = config or RunConfig()
        self.on_event = on_event
        self._lock = threading.Lock()
        self._active: Optional[SearchRun] = None

    @property
    def active_run(self) -> Optional[SearchRun]:
        return self._active

    @property
    def is_running(self) -> bool:
        return self._active is not None

    # ----------------- runs -----------------

    def start(self, algorithm: Optional[str] = None) -> SearchRun:
        cfg = self.config if algorithm is None else self.config.replace(algorithm=algorithm)
        with self._lock:
            if self._active is not None:
                log.warning("run request rejected: %s is still active", self._active.algorithm)
                raise RunRejected("a run is already active on this grid")
            if self.grid.start is None or self.grid.end is None:
                log.warning("run request rejected: start or end missing")
                raise RunRejected("place both a start and an end before running")
            self.grid.clear_search()
            algo = get_algorithm(cfg.algorithm)
            run = SearchRun(self, cfg, algo(self.grid, self.grid.start, self.grid.end, cfg))
            self._active = run
        log.info("starting %s from %s to %s", LABELS[cfg.algorithm], self.grid.start, self.grid.end)
        return run

    def run(self, algorithm: Optional[str] = None) -> RunResult:
        return self.start(algorithm).run()

    def _release(self, run: SearchRun) -> None:
        with self._lock:
            if self._active is run:
                self._active = None

    def _emit(self, event: Event) -> None:
        if self.on_event is not None:
            self.on_event(event)

    # ----------------- grid edits -----------------

    @contextmanager
    def _idle(self, what: str):
        with self._lock:
            if self._active is not None:
                log.warning("%s rejected: a run is active", what)
                raise RunRejected(f"cannot {what} while a run is active")
            yield

    def paint(self, s: Coord, mode: str) -> Node:
        if mode not in DRAW_MODES:
            raise ConfigError(f"unknown draw mode {mode!r}")
        with self._idle("edit the grid"):
            if mode == "start":
                return self.grid.set_start(s)
            if mode == "end":
                return self.grid.set_end(s)
            if mode == "wall":
                return self.grid.set_kind(s, NodeKind.WALL)
            if mode == "weight":
                return self.grid.set_kind(s, NodeKind.WEIGHT, self.config.weight)
            return self.grid.set_kind(s, NodeKind.EMPTY)

    def reset(self, keep_endpoints: bool = False) -> None:
        with self._idle("reset the grid"):
            self.grid.reset(keep_endpoints=keep_endpoints)
        log.info("grid reset")

    def generate_obstacles(self, percent: Optional[int] = None) -> int:
        """Clear the grid (endpoints stay) and scatter walls; returns the number placed."""
        if percent is None:
            percent = self.config.obstacle_percent
        elif not 0 <= percent <= 100:
            raise ConfigError("obstacle percent must be within 0..100")
        with self._idle("generate obstacles"):
            self.grid.reset(keep_endpoints=True)
            placed = scatter_walls(self.grid, percent, random.Random(self.config.seed))
        log.info("placed %d walls (%d%%)", placed, percent)
        return placed

    def generate_maze(self) -> None:
        with self._idle("generate a maze"):
            carve_maze(self.grid, random.Random(self.config.seed))
        log.info("maze generated on %dx%d grid", self.grid.rows, self.grid.cols)

    def import_snapshot(self, data: Any) -> None:
        with self._idle("import a grid"):
            try:
                self.grid.restore(data)
            except ValueError as exc:
                log.warning("import rejected: %s", exc)
                raise

    def export_snapshot(self) -> List[List[Dict[str, Any]]]:
        return self.grid.snapshot()
