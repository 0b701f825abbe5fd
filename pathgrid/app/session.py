# pathgrid/app/session.py
#!/usr/bin/env python3
"""
Session driver: the single owner of a Grid between edit/solve cycles.

Every edit command (start, target, obstacle, heuristic) validates its input,
applies it, then re-solves atomically:  grid.reset_scratch(True) -> solve().
A presentation layer only ever reads cells(), path() and connections().
"""

import logging
from typing import Iterator, List, Optional, Tuple

from pathgrid.app.config import PathgridConfig
from pathgrid.core.astar import AStarAlgo, iter_path
from pathgrid.core.grid import Grid
from pathgrid.core.heuristics import DEFAULT_HEURISTIC, resolve_heuristic
from pathgrid.core.types import CellView, Coord, SolveResult

logger = logging.getLogger(__name__)


def configure_logging(level: str = "WARNING") -> None:
    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the host has handlers; the package level still applies
    logging.getLogger("pathgrid").setLevel(numeric_level)


class Session:
    def __init__(self, grid: Grid, heuristic=DEFAULT_HEURISTIC, step_cost: str = "heuristic",
                 max_expansions: Optional[int] = None, stop_at_target: bool = True):
        self.grid = grid
        self.algo = AStarAlgo(
            heuristic=heuristic,
            step_cost=step_cost,
            max_expansions=max_expansions,
            stop_at_target=stop_at_target,
        )
        self.last_result: Optional[SolveResult] = None
        self.solve()

    @classmethod
    def from_config(cls, cfg: PathgridConfig) -> "Session":
        configure_logging(cfg.log_level)
        grid = Grid(cfg.width, cfg.height, start=cfg.start, target=cfg.resolved_target)
        return cls(
            grid,
            heuristic=cfg.heuristic,
            step_cost=cfg.step_cost,
            max_expansions=cfg.max_expansions,
            stop_at_target=cfg.stop_at_target,
        )

    # -------------------- inbound commands --------------------

    def solve(self) -> SolveResult:
        self.grid.reset_scratch(preserve_obstacles=True)
        self.last_result = self.algo.solve(self.grid)
        return self.last_result

    def set_start(self, x: int, y: int) -> SolveResult:
        self.grid.set_start(x, y)
        logger.debug("Start -> (%d, %d)", x, y)
        return self.solve()

    def set_target(self, x: int, y: int) -> SolveResult:
        self.grid.set_target(x, y)
        logger.debug("Target -> (%d, %d)", x, y)
        return self.solve()

    def toggle_obstacle(self, x: int, y: int) -> SolveResult:
        self.grid.toggle_obstacle(x, y)
        return self.solve()

    def set_obstacle(self, x: int, y: int, flag: bool = True) -> SolveResult:
        if not self.grid.set_obstacle(x, y, flag) and self.last_result is not None:
            return self.last_result
        return self.solve()

    def clear_obstacles(self) -> SolveResult:
        self.grid.clear_obstacles()
        return self.solve()

    def set_heuristic(self, name) -> SolveResult:
        self.algo.heuristic = resolve_heuristic(name)
        logger.debug("Heuristic -> %s", self.algo.heuristic.value)
        return self.solve()

    # -------------------- outbound state --------------------

    @property
    def heuristic(self) -> str:
        return self.algo.heuristic.value

    @property
    def has_path(self) -> bool:
        return self.last_result is not None and self.last_result.found

    def cells(self) -> List[CellView]:
        return self.grid.cell_views()

    def path(self) -> Iterator[Coord]:
        # a budget-cut solve can leave a tentative chain on the target
        if not self.has_path:
            return iter(())
        return iter_path(self.grid)

    def connections(self) -> List[Tuple[Coord, Coord]]:
        return list(self.grid.connections())
