# pathviz/core/bfs.py
#!/usr/bin/env python3
from collections import deque
from dataclasses import dataclass, field
from typing import Deque

from pathviz.core.neighbors import neighbors
from pathviz.core.search import SearchAlgo
from pathviz.core.types import Cell, StepResult


@dataclass
class BFSAlgo(SearchAlgo):
    """
    Breadth-first traversal, one dequeue per step().

    Cells are marked visited when enqueued so none is queued twice, and are
    appended to visited_order when dequeued. The first path to the target is
    shortest in edge count.
    """
    name: str = "BFS"

    queue: Deque[Cell] = field(default_factory=deque)

    def _seed(self) -> None:
        src = self.source_cell
        src.visited = True
        self.queue = deque([src])

    def _close(self, u: Cell) -> None:
        # already flagged visited at enqueue time
        self.popped_count += 1
        self.visited_order.append(u.pos)

    def step(self) -> StepResult:
        finished = self._terminal()
        if finished is not None:
            return finished

        if not self.queue:
            return self._give_up()

        u = self.queue.popleft()
        self._close(u)

        if u.pos == self.target:
            return self._finish(u)

        for v in neighbors(self.grid, u):
            if not v.visited:
                v.visited = True
                v.distance = u.distance + 1
                v.predecessor = u
                self.queue.append(v)

        return StepResult(status="running", closed=[u.pos], current=u.pos,
                          metrics=self._metrics())

    def _frontier_size(self) -> int:
        return len(self.queue)
