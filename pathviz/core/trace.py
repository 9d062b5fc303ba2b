# pathviz/core/trace.py
#!/usr/bin/env python3
"""
Run traces and the cursor-driven player that replays them.

A RunTrace is the full, materialized record of one search run: every explored
cell, then every path cell, Source and Target left out. The player never
sleeps or schedules anything. Callers pull one CellState at a time with
step() and decide themselves when to call it again (next_delay() suggests a
cadence).

    player = TracePlayer.from_result(result, grid.source, grid.target)
    player.play()
    while (state := player.step()) is not None:
        paint(state)
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from pathviz.config import EXPLORED_STEP_DELAY, PATH_STEP_DELAY
from pathviz.core.types import (
    CellState, CursorState, Display, Pos, SearchResult, TraceCursor, TraceEvent, TraceKind,
)

IntervalPolicy = Callable[[TraceEvent], float]

_DISPLAY = {
    TraceKind.EXPLORED: Display.EXPLORED,
    TraceKind.PATH_STEP: Display.PATH,
}


def default_interval(event: TraceEvent) -> float:
    if event.kind is TraceKind.PATH_STEP:
        return PATH_STEP_DELAY
    return EXPLORED_STEP_DELAY


@dataclass(frozen=True)
class RunTrace:
    algorithm: str
    source: Pos
    target: Pos
    events: Tuple[TraceEvent, ...]
    visited_order: Tuple[Pos, ...] = ()
    path_order: Tuple[Pos, ...] = ()
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def build(cls, result: SearchResult, source: Pos, target: Pos,
              algorithm: str = "") -> "RunTrace":
        special = {tuple(source), tuple(target)}
        events = [TraceEvent(TraceKind.EXPLORED, p)
                  for p in result.visited_order if p not in special]
        events += [TraceEvent(TraceKind.PATH_STEP, p)
                   for p in result.path_order if p not in special]
        return cls(algorithm=algorithm, source=tuple(source), target=tuple(target),
                   events=tuple(events), visited_order=tuple(result.visited_order),
                   path_order=tuple(result.path_order), metrics=dict(result.metrics))

    @property
    def found(self) -> bool:
        return len(self.path_order) > 0

    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, index: int) -> TraceEvent:
        return self.events[index]


class TracePlayer:
    def __init__(self, trace: RunTrace, interval_policy: Optional[IntervalPolicy] = None):
        self.trace = trace
        self.interval_policy: IntervalPolicy = interval_policy or default_interval
        self.position = 0
        self.state = CursorState.IDLE

    @classmethod
    def from_result(cls, result: SearchResult, source: Pos, target: Pos,
                    algorithm: str = "") -> "TracePlayer":
        return cls(RunTrace.build(result, source, target, algorithm))

    # -------------------- cursor --------------------

    @property
    def cursor(self) -> TraceCursor:
        return TraceCursor(position=self.position, state=self.state)

    @property
    def remaining(self) -> int:
        return len(self.trace) - self.position

    @property
    def is_complete(self) -> bool:
        return self.state is CursorState.COMPLETE

    def step(self) -> Optional[CellState]:
        """
        Advance one position and return the CellState there.

        Returns None when paused, or when there is nothing left (the cursor
        is then COMPLETE).
        """
        if self.state in (CursorState.PAUSED, CursorState.COMPLETE):
            return None
        if self.position >= len(self.trace):
            self.state = CursorState.COMPLETE
            return None

        index = self.position
        event = self.trace[index]
        self.position += 1
        self.state = CursorState.COMPLETE if self.position >= len(self.trace) else CursorState.PLAYING
        return CellState(pos=event.pos, display=_DISPLAY[event.kind], index=index)

    def play(self, interval_policy: Optional[IntervalPolicy] = None) -> TraceCursor:
        if self.state is CursorState.IDLE:
            self.state = CursorState.PLAYING
            if self.position >= len(self.trace):
                self.state = CursorState.COMPLETE
        if interval_policy is not None and self.state is CursorState.PLAYING:
            self.interval_policy = interval_policy
        return self.cursor

    def pause(self) -> TraceCursor:
        if self.state in (CursorState.IDLE, CursorState.PLAYING):
            self.state = CursorState.PAUSED
        return self.cursor

    def resume(self) -> TraceCursor:
        if self.state is CursorState.PAUSED:
            done = self.position >= len(self.trace)
            self.state = CursorState.COMPLETE if done else CursorState.PLAYING
        return self.cursor

    def reset(self) -> TraceCursor:
        """Rewind to the start; the trace itself is kept."""
        self.position = 0
        self.state = CursorState.IDLE
        return self.cursor

    # -------------------- helpers for callers --------------------

    def next_delay(self) -> Optional[float]:
        """Seconds the caller should wait before the next step(), None at the end."""
        if self.position >= len(self.trace):
            return None
        return self.interval_policy(self.trace[self.position])

    def run_to_end(self) -> List[CellState]:
        out: List[CellState] = []
        state = self.step()
        while state is not None:
            out.append(state)
            state = self.step()
        return out

    def states_so_far(self) -> Dict[Pos, Display]:
        """Display of every cell touched by the first `position` events."""
        shown: Dict[Pos, Display] = {}
        for event in self.trace.events[:self.position]:
            shown[event.pos] = _DISPLAY[event.kind]
        return shown
