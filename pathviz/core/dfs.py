# pathviz/core/dfs.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List

from pathviz.core.neighbors import neighbors
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Cell, StepResult


@dataclass
class DFSAlgo(SearchAlgo):
    """
    Depth-first traversal, one pop per step().

    A cell is marked visited when popped, so it may sit on the stack more than
    once; repeats are dropped on pop. Neighbors are pushed up, down, left,
    right, so the right-hand branch is explored first. The path found is
    valid but not necessarily shortest.
    """
    name: str = "DFS"

    stack: List[Cell] = field(default_factory=list)

    def _seed(self) -> None:
        self.stack = [self.source_cell]

    def step(self) -> StepResult:
        finished = self._terminal()
        if finished is not None:
            return finished

        if not self.stack:
            return self._give_up()

        u = self.stack.pop()
        if u.visited:
            # stale duplicate
            return StepResult(status="running", current=u.pos, metrics=self._metrics())

        if u.predecessor is not None:
            u.distance = u.predecessor.distance + 1
        self._close(u)

        if u.pos == self.target:
            return self._finish(u)

        for v in neighbors(self.grid, u):
            if not v.visited:
                v.predecessor = u
                self.stack.append(v)

        return StepResult(status="running", closed=[u.pos], current=u.pos,
                          metrics=self._metrics())

    def _frontier_size(self) -> int:
        return len(self.stack)
