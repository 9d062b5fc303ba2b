# pathviz/core/search.py
#!/usr/bin/env python3
"""
Shared plumbing for the grid search engines.

Every engine implements the same small API:
- init(grid, source=None, target=None)  - take a working snapshot and reset
- reset()                               - seed the frontier with the source
- step() -> StepResult                  - process ONE cell
- solve(grid, ...) -> SearchResult      - step() until done / no_path

The caller's grid is never touched; all metadata lives on the snapshot.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from pathviz.core.errors import InvalidPlacement
from pathviz.core.grid import Grid
from pathviz.core.path import reconstruct
from pathviz.core.types import Cell, Pos, SearchResult, StepResult

logger = logging.getLogger(__name__)

FINAL = ("done", "no_path")


@dataclass
class SearchAlgo:
    name: str = "search"

    grid: Optional[Grid] = None            # working snapshot, never the caller's grid
    source: Optional[Pos] = None
    target: Optional[Pos] = None
    visited_order: List[Pos] = field(default_factory=list)
    path: List[Pos] = field(default_factory=list)
    popped_count: int = 0
    done: bool = False
    no_path: bool = False

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, source: Optional[Pos] = None, target: Optional[Pos] = None) -> None:
        """Snapshot `grid` and reset. Source/Target default to the grid's own."""
        source = tuple(source) if source is not None else grid.source
        target = tuple(target) if target is not None else grid.target
        for label, p in (("source", source), ("target", target)):
            if not grid.in_bounds(p):
                raise InvalidPlacement(f"{label} {p} outside {grid.rows}x{grid.cols} grid")
        if grid.is_obstacle(source):
            raise InvalidPlacement(f"source {source} is an obstacle")
        self.grid = grid.snapshot()
        self.source, self.target = source, target
        self.reset()

    def reset(self) -> None:
        if self.grid is None:
            return
        self.grid.reset_metadata()
        self.visited_order = []
        self.path = []
        self.popped_count = 0
        self.done = False
        self.no_path = False
        self.grid.cell(self.source).distance = 0
        self._seed()
        if self.source == self.target:
            self.done = True
            self.path = [self.source]

    def _seed(self) -> None:
        raise NotImplementedError

    def step(self) -> StepResult:
        raise NotImplementedError

    # -------------------- helpers --------------------

    @property
    def source_cell(self) -> Cell:
        return self.grid.cell(self.source)

    @property
    def target_cell(self) -> Cell:
        return self.grid.cell(self.target)

    def _terminal(self) -> Optional[StepResult]:
        """StepResult for idle/finished engines, None while work remains."""
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})
        if self.done:
            return StepResult(status="done", path=list(self.path),
                              metrics=self._metrics())
        if self.no_path:
            return StepResult(status="no_path", path=[], metrics=self._metrics())
        return None

    def _close(self, u: Cell) -> None:
        self.popped_count += 1
        u.visited = True
        self.visited_order.append(u.pos)

    def _finish(self, u: Cell) -> StepResult:
        self.done = True
        self.path = [c.pos for c in reconstruct(u)]
        return StepResult(status="done", closed=[u.pos], current=u.pos,
                          path=list(self.path), metrics=self._metrics())

    def _give_up(self) -> StepResult:
        self.no_path = True
        return StepResult(status="no_path", path=[], metrics=self._metrics())

    def _frontier_size(self) -> int:
        return 0

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "frontier_size": self._frontier_size(),
            "visited_count": len(self.visited_order),
            "path_len": len(self.path),
        }

    # -------------------- batch run --------------------

    def solve(self, grid: Grid, source: Optional[Pos] = None,
              target: Optional[Pos] = None) -> SearchResult:
        """Run to completion and return (visited_order, path_order)."""
        self.init(grid, source, target)
        res = self.step()
        while res.status not in FINAL:
            res = self.step()
        logger.debug("%s: %d visited, path length %d (%s -> %s)",
                     self.name, len(self.visited_order), len(self.path),
                     self.source, self.target)
        return SearchResult(visited_order=tuple(self.visited_order),
                            path_order=tuple(self.path),
                            metrics=dict(res.metrics))
