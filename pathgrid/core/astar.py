# pathgrid/core/astar.py
#!/usr/bin/env python3
"""
A* over an 8-connected Grid, one full solve per call.

The caller resets the grid (grid.reset_scratch(True)) before every solve();
solve() only writes the scratch fields of the cells it touches.

Step cost:
- "heuristic" (default): the cost of moving u -> v is heuristic(u, v).
  With Manhattan a straight step costs 1 and a diagonal step costs 2; with
  EuclideanSquared 1 and 2; with Zero every step is free. This also means
  EuclideanSquared can overestimate, so its results are not always minimal.
- "unit": every move costs 1.0 regardless of direction.

A budget (max_expansions) that runs out before the target is popped ends the
solve with status "budget_exhausted"; cell annotations are left as they were.

Tie-breaking in the PQ:
- (f, h, seq, index): lower f, then lower h, then FIFO by seq.
Duplicate entries are allowed; an entry whose cell is already visited is
dropped when it surfaces.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple
import heapq
import logging

from pathgrid.core.grid import Grid
from pathgrid.core.heuristics import DEFAULT_HEURISTIC, HeuristicKind, heuristic_fn, resolve_heuristic
from pathgrid.core.types import Coord, SolveResult

logger = logging.getLogger(__name__)

STEP_COSTS = ("heuristic", "unit")


def resolve_step_cost(mode: str) -> str:
    key = str(mode).strip().lower()
    if key not in STEP_COSTS:
        raise ValueError(f"Unknown step cost mode {mode!r} (choose from: {', '.join(STEP_COSTS)})")
    return key


@dataclass
class AStarAlgo:
    heuristic: HeuristicKind = DEFAULT_HEURISTIC
    step_cost: str = "heuristic"
    max_expansions: Optional[int] = None   # None = run until the frontier is empty
    stop_at_target: bool = True            # False floods every reachable cell
    name: str = "A*"

    # Per-solve bookkeeping
    open_pq: List[Tuple[float, float, int, int]] = field(default_factory=list)  # (f, h, seq, index)
    seq: int = 0
    popped_count: int = 0
    pushed_count: int = 0
    stale_count: int = 0
    closed_count: int = 0

    def __post_init__(self) -> None:
        self.heuristic = resolve_heuristic(self.heuristic)
        self.step_cost = resolve_step_cost(self.step_cost)
        if self.max_expansions is not None and self.max_expansions < 0:
            raise ValueError("max_expansions must be >= 0")

    # -------------------- helpers --------------------

    def _bump(self) -> int:
        self.seq += 1
        return self.seq

    def _clear(self) -> None:
        self.open_pq.clear()
        self.seq = 0
        self.popped_count = 0
        self.pushed_count = 0
        self.stale_count = 0
        self.closed_count = 0

    def _push(self, f: float, h: float, index: int) -> None:
        heapq.heappush(self.open_pq, (f, h, self._bump(), index))
        self.pushed_count += 1

    # -------------------- main solve --------------------

    def solve(self, grid: Grid) -> SolveResult:
        """Run one search from grid.start to grid.target and annotate the cells."""
        self._clear()
        h_fn = heuristic_fn(self.heuristic)
        cells = grid.cells
        target_idx = grid.target_index
        target = cells[target_idx]

        start = grid.start
        start.cost_so_far = 0.0
        h0 = h_fn(start, target)
        start.estimated_total = h0
        self._push(h0, h0, grid.start_index)

        status = "no_path"
        reached = False
        while self.open_pq:
            _, _, _, u_idx = heapq.heappop(self.open_pq)
            u = cells[u_idx]

            # Ignore stale pops
            if u.is_visited:
                self.stale_count += 1
                continue
            self.popped_count += 1

            if u_idx == target_idx:
                reached = True
                if self.stop_at_target:
                    break

            if self.max_expansions is not None and self.closed_count >= self.max_expansions:
                status = "budget_exhausted"
                break

            u.is_visited = True
            self.closed_count += 1

            for v_idx in u.neighbors:
                v = cells[v_idx]
                if v.is_visited:
                    continue
                step = 1.0 if self.step_cost == "unit" else h_fn(u, v)
                alt = u.cost_so_far + step
                if alt < v.cost_so_far:
                    v.predecessor = u_idx
                    v.cost_so_far = alt
                    h_v = h_fn(v, target)
                    v.estimated_total = alt + h_v
                    self._push(v.estimated_total, h_v, v_idx)

        if reached:
            status = "done"
        path = list(iter_path(grid)) if status == "done" else []
        result = SolveResult(status=status, path=path, metrics=self._metrics(grid, path))
        logger.debug(
            "%s/%s %s -> %s: %s (popped=%d, pushed=%d, cost=%s)",
            self.name, self.heuristic.value, start.coord, target.coord, status,
            self.popped_count, self.pushed_count, result.metrics["total_cost"],
        )
        return result

    # -------------------- metrics --------------------

    def _metrics(self, grid: Grid, path: List[Coord]) -> Dict[str, object]:
        target = grid.target
        return {
            "algo": self.name,
            "heuristic": self.heuristic.value,
            "step_cost": self.step_cost,
            "popped": self.popped_count,
            "pushed": self.pushed_count,
            "stale_skipped": self.stale_count,
            "open_size": len(self.open_pq),
            "closed_count": self.closed_count,
            "path_len": len(path),
            "total_cost": target.cost_so_far if path else None,
        }


def iter_path(grid: Grid) -> Iterator[Coord]:
    """
    Walk predecessor links from target back to start, yielding (x, y).

    Yields nothing when the target was never reached, and just the start when
    start and target coincide.
    """
    cells = grid.cells
    idx = grid.target_index
    if idx != grid.start_index and cells[idx].predecessor is None:
        return
    seen = set()
    while idx is not None:
        if idx in seen:
            raise RuntimeError(f"Predecessor cycle at {cells[idx].coord}")
        seen.add(idx)
        yield cells[idx].coord
        if idx == grid.start_index:
            return
        idx = cells[idx].predecessor


def solve(grid: Grid, heuristic=DEFAULT_HEURISTIC, **options) -> SolveResult:
    """One-shot helper: reset scratch state, then run a fresh AStarAlgo."""
    grid.reset_scratch(preserve_obstacles=True)
    return AStarAlgo(heuristic=heuristic, **options).solve(grid)
