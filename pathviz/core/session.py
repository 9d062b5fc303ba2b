# pathviz/core/session.py
#!/usr/bin/env python3
"""
Session — the single entry point the viewer (or any other front end) talks to.

Owns the editable Grid and at most one active TracePlayer. While a trace is
active the grid is locked: edits raise GridLocked and new runs raise
AlreadyRunning until stop() is called.
"""

import logging
from typing import Optional, Union

from pathviz.core.algorithms import Algorithm, make_algo, resolve
from pathviz.core.errors import AlreadyRunning
from pathviz.core.grid import Grid
from pathviz.core.trace import RunTrace, TracePlayer
from pathviz.core.types import CellState, Pos, TraceCursor

logger = logging.getLogger(__name__)


class Session:
    def __init__(self, grid: Optional[Grid] = None):
        self.grid = grid if grid is not None else Grid()
        self.player: Optional[TracePlayer] = None

    # -------------------- state --------------------

    @property
    def running(self) -> bool:
        return self.player is not None

    @property
    def trace(self) -> Optional[RunTrace]:
        return self.player.trace if self.player else None

    @property
    def cursor(self) -> Optional[TraceCursor]:
        return self.player.cursor if self.player else None

    # -------------------- grid edits --------------------

    def set_obstacle(self, p: Pos) -> None:
        self.grid.set_obstacle(p)

    def place_obstacle(self, p: Pos) -> None:
        self.grid.place_obstacle(p)

    def erase(self, p: Pos) -> None:
        self.grid.erase(p)

    def move_source(self, p: Pos) -> None:
        self.grid.move_source(p)

    def move_target(self, p: Pos) -> None:
        self.grid.move_target(p)

    def clear_obstacles(self) -> None:
        self.grid.clear_obstacles()

    def reset_metadata(self) -> None:
        self.grid.reset_metadata()

    # -------------------- runs --------------------

    def run(self, algorithm: Union[str, Algorithm]) -> RunTrace:
        """Compute a full run synchronously and lock the grid until stop()."""
        if self.running:
            raise AlreadyRunning("a run is still active; stop it before starting another")
        algo = make_algo(resolve(algorithm))
        result = algo.solve(self.grid)
        self.player = TracePlayer.from_result(result, self.grid.source, self.grid.target,
                                              algorithm=algo.name)
        self.grid.locked = True
        logger.info("%s run: %d explored, %s", algo.name, len(result.visited_order),
                    f"path of {len(result.path_order)} cells" if result.found else "target unreachable")
        return self.player.trace

    def stop(self) -> None:
        """Discard the active trace and unlock the grid."""
        if self.player is not None:
            logger.info("stopping %s run at step %d/%d", self.player.trace.algorithm,
                        self.player.position, len(self.player.trace))
        self.player = None
        self.grid.locked = False

    # -------------------- playback --------------------

    def step(self) -> Optional[CellState]:
        return self.player.step() if self.player else None

    def play(self, interval_policy=None) -> Optional[TraceCursor]:
        return self.player.play(interval_policy) if self.player else None

    def pause(self) -> Optional[TraceCursor]:
        return self.player.pause() if self.player else None

    def resume(self) -> Optional[TraceCursor]:
        return self.player.resume() if self.player else None

    def reset(self) -> Optional[TraceCursor]:
        return self.player.reset() if self.player else None
