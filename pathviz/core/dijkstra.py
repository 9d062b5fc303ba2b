# pathviz/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra (uniform cost) — one selection per step() for animation.

Selection is a linear scan over the unvisited cells, not a heap. The
unvisited list is kept in row-major order and the scan only replaces its
candidate on a strictly smaller distance, so equidistant cells come out in
row-major order. O(V^2) on purpose; grids are a few hundred cells.
"""

from dataclasses import dataclass, field
from math import inf
from typing import List, Optional

from pathviz.core.neighbors import neighbors
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Cell, StepResult


@dataclass
class DijkstraAlgo(SearchAlgo):
    name: str = "Dijkstra"

    unvisited: List[Cell] = field(default_factory=list)
    relaxed_count: int = 0

    def _seed(self) -> None:
        # obstacles are never selected, so they never enter the unvisited set
        self.unvisited = [c for c in self.grid.iter_cells() if c.traversable]
        self.relaxed_count = 0

    def _select(self) -> Optional[Cell]:
        best: Optional[Cell] = None
        for c in self.unvisited:
            if best is None or c.distance < best.distance:
                best = c
        return best

    def step(self) -> StepResult:
        finished = self._terminal()
        if finished is not None:
            return finished

        u = self._select()
        if u is None or u.distance == inf:
            return self._give_up()

        self.unvisited.remove(u)
        self._close(u)

        if u.pos == self.target:
            return self._finish(u)

        for v in neighbors(self.grid, u):
            if v.visited:
                continue
            alt = u.distance + 1
            if alt < v.distance:
                v.distance = alt
                v.predecessor = u
                self.relaxed_count += 1

        return StepResult(status="running", closed=[u.pos], current=u.pos,
                          metrics=self._metrics())

    def _frontier_size(self) -> int:
        return sum(1 for c in self.unvisited if c.distance != inf)

    def _metrics(self) -> dict:
        m = super()._metrics()
        m["relaxed"] = self.relaxed_count
        return m
