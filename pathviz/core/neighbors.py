# pathviz/core/neighbors.py
#!/usr/bin/env python3
from typing import List, Tuple

from pathviz.core.grid import Grid
from pathviz.core.types import Cell

# up, down, left, right -- this order decides tie-breaks, keep it fixed
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(grid: Grid, cell: Cell) -> List[Cell]:
    """Return the in-bounds, non-obstacle 4-neighbors of `cell`."""
    r, c = cell.row, cell.col
    out: List[Cell] = []
    for dr, dc in DIRECTIONS:
        n = (r + dr, c + dc)
        if grid.in_bounds(n) and not grid.is_obstacle(n):
            out.append(grid.cell(n))
    return out
