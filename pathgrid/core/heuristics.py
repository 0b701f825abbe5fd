# pathgrid/core/heuristics.py
#!/usr/bin/env python3
"""
Heuristic registry: a closed set of distance estimates between two cells.

- MANHATTAN          |dx| + |dy|          (default)
- EUCLIDEAN_SQUARED  dx^2 + dy^2          (no sqrt; not additive, see astar.py)
- ZERO               0                    (search degenerates to uniform cost)

Each heuristic is a pure function (Cell, Cell) -> float. The same function is
also used as the per-step cost in the default step-cost mode.
"""

from enum import Enum
from typing import Callable, Dict

from pathgrid.core.types import Cell

HeuristicFn = Callable[[Cell, Cell], float]


class HeuristicKind(Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN_SQUARED = "euclidean_squared"
    ZERO = "zero"


def manhattan(a: Cell, b: Cell) -> float:
    return float(abs(a.x - b.x) + abs(a.y - b.y))


def euclidean_squared(a: Cell, b: Cell) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return float(dx * dx + dy * dy)


def zero(a: Cell, b: Cell) -> float:
    return 0.0


HEURISTICS: Dict[HeuristicKind, HeuristicFn] = {
    HeuristicKind.MANHATTAN: manhattan,
    HeuristicKind.EUCLIDEAN_SQUARED: euclidean_squared,
    HeuristicKind.ZERO: zero,
}

DEFAULT_HEURISTIC = HeuristicKind.MANHATTAN

_ALIASES = {
    "pythagorean": HeuristicKind.EUCLIDEAN_SQUARED,
    "euclidean": HeuristicKind.EUCLIDEAN_SQUARED,
    "dijkstra": HeuristicKind.ZERO,
    "none": HeuristicKind.ZERO,
}


def resolve_heuristic(name) -> HeuristicKind:
    """Map a user-facing name (or an existing kind) onto a HeuristicKind."""
    if isinstance(name, HeuristicKind):
        return name
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    for kind in HeuristicKind:
        if kind.value == key:
            return kind
    if key in _ALIASES:
        return _ALIASES[key]
    choices = ", ".join(k.value for k in HeuristicKind)
    raise ValueError(f"Unknown heuristic {name!r} (choose from: {choices})")


def heuristic_fn(kind) -> HeuristicFn:
    return HEURISTICS[resolve_heuristic(kind)]
