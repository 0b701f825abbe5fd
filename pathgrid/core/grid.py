# pathgrid/core/grid.py
#!/usr/bin/env python3
"""
Grid storage + connectivity.

Cells live in one flat row-major list (index = y * width + x). Every
back-reference (start, target, predecessor, neighbors) is an index into that
list, so nothing outside the Grid owns a Cell.

Connectivity is 8-connected and always rebuilt for the whole grid whenever
any obstacle flag changes.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from pathgrid.core.types import Cell, CellView, Coord, OutOfBounds

logger = logging.getLogger(__name__)

# E, S, W, N, SE, SW, NW, NE -- order feeds tie-breaking in the search
DIR8: List[Tuple[int, int]] = [
    (1, 0), (0, 1), (-1, 0), (0, -1),
    (1, 1), (-1, 1), (-1, -1), (1, -1),
]


def _pair(coord, label: str) -> Coord:
    try:
        x, y = coord
    except (TypeError, ValueError) as ex:
        raise ValueError(f"{label} must be an (x, y) pair, got {coord!r}") from ex
    return (x, y)


class Grid:
    def __init__(self, width: int, height: int, start: Coord = (0, 0), target: Optional[Coord] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.cells: List[Cell] = [Cell(x, y) for y in range(height) for x in range(width)]

        if target is None:
            target = (width - 1, height - 1)
        self.start_index = self._checked_index(*_pair(start, "start"))
        self.target_index = self._checked_index(*_pair(target, "target"))

        self.reset_scratch(preserve_obstacles=False)

    # -------------------- addressing --------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index_of(self, x: int, y: int) -> int:
        return y * self.width + x

    def _checked_index(self, x: int, y: int) -> int:
        if not self.in_bounds(x, y):
            raise OutOfBounds(x, y, self.width, self.height)
        return self.index_of(x, y)

    def cell_at(self, x: int, y: int) -> Cell:
        return self.cells[self._checked_index(x, y)]

    @property
    def start(self) -> Cell:
        return self.cells[self.start_index]

    @property
    def target(self) -> Cell:
        return self.cells[self.target_index]

    # -------------------- mutation --------------------

    def reset_scratch(self, preserve_obstacles: bool = True) -> None:
        """Clear search state on every cell, then rebuild connectivity."""
        for cell in self.cells:
            cell.reset_scratch()
            if not preserve_obstacles:
                cell.is_obstacle = False
        self.rebuild_connectivity()

    def toggle_obstacle(self, x: int, y: int) -> bool:
        """Flip the obstacle flag at (x, y); returns the new value."""
        cell = self.cell_at(x, y)
        cell.is_obstacle = not cell.is_obstacle
        logger.debug("Obstacle at (%d, %d) -> %s", x, y, cell.is_obstacle)
        self.rebuild_connectivity()
        return cell.is_obstacle

    def set_obstacle(self, x: int, y: int, flag: bool) -> bool:
        """Force the obstacle flag; returns True if it actually changed."""
        cell = self.cell_at(x, y)
        if cell.is_obstacle == bool(flag):
            return False
        cell.is_obstacle = bool(flag)
        logger.debug("Obstacle at (%d, %d) -> %s", x, y, cell.is_obstacle)
        self.rebuild_connectivity()
        return True

    def clear_obstacles(self) -> None:
        for cell in self.cells:
            cell.is_obstacle = False
        self.rebuild_connectivity()

    def set_start(self, x: int, y: int) -> None:
        self.start_index = self._checked_index(x, y)

    def set_target(self, x: int, y: int) -> None:
        self.target_index = self._checked_index(x, y)

    def rebuild_connectivity(self) -> None:
        """Recompute every cell's neighbor list from scratch."""
        for cell in self.cells:
            out: List[int] = []
            for dx, dy in DIR8:
                nx, ny = cell.x + dx, cell.y + dy
                if not self.in_bounds(nx, ny):
                    continue
                n_idx = self.index_of(nx, ny)
                if not self.cells[n_idx].is_obstacle:
                    out.append(n_idx)
            cell.neighbors = out

    # -------------------- queries --------------------

    def neighbors_of(self, x: int, y: int) -> List[Coord]:
        return [self.cells[i].coord for i in self.cell_at(x, y).neighbors]

    def obstacle_count(self) -> int:
        return sum(1 for c in self.cells if c.is_obstacle)

    def cell_views(self) -> List[CellView]:
        return [
            CellView(
                x=c.x,
                y=c.y,
                is_obstacle=c.is_obstacle,
                is_visited=c.is_visited,
                is_start=(i == self.start_index),
                is_target=(i == self.target_index),
            )
            for i, c in enumerate(self.cells)
        ]

    def connections(self) -> Iterator[Tuple[Coord, Coord]]:
        """Every directed (from, to) edge of the current connectivity graph."""
        for cell in self.cells:
            for n_idx in cell.neighbors:
                yield cell.coord, self.cells[n_idx].coord
