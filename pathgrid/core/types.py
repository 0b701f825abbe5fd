# pathgrid/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from math import inf
from typing import List, Tuple, Optional, Dict, Any

Coord = Tuple[int, int]  # (x, y) == (col, row)


class OutOfBounds(IndexError):
    """Raised when a coordinate falls outside the grid extent."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"({x}, {y}) is outside the {width}x{height} grid")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


@dataclass
class Cell:
    x: int
    y: int
    is_obstacle: bool = False
    is_visited: bool = False
    cost_so_far: float = inf           # local goal
    estimated_total: float = inf       # global goal = local goal + h(cell, target)
    predecessor: Optional[int] = None  # index into Grid.cells, never an owning ref
    neighbors: List[int] = field(default_factory=list)

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    def reset_scratch(self) -> None:
        self.is_visited = False
        self.predecessor = None
        self.cost_so_far = inf
        self.estimated_total = inf


@dataclass(frozen=True)
class CellView:
    """Read-only per-cell state handed to the presentation layer."""
    x: int
    y: int
    is_obstacle: bool
    is_visited: bool
    is_start: bool
    is_target: bool


@dataclass
class SolveResult:
    status: str                   # "done" | "no_path" | "budget_exhausted"
    path: List[Coord] = field(default_factory=list)   # target -> start
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.status == "done"
