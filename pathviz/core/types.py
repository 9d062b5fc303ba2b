# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from math import inf
from typing import List, Tuple, Optional, Dict, Any

Pos = Tuple[int, int]  # (row, col)


class CellRole(Enum):
    EMPTY = "empty"
    OBSTACLE = "obstacle"
    SOURCE = "source"
    TARGET = "target"


class TraceKind(Enum):
    EXPLORED = "explored"
    PATH_STEP = "path_step"


class CursorState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETE = "complete"


class Display(Enum):
    """What the renderer paints for a cell."""
    EMPTY = "empty"
    OBSTACLE = "obstacle"
    SOURCE = "source"
    TARGET = "target"
    EXPLORED = "explored"
    PATH = "path"


@dataclass(eq=False)
class Cell:
    row: int
    col: int
    role: CellRole = CellRole.EMPTY
    distance: float = inf              # int once relaxed
    visited: bool = False
    predecessor: Optional["Cell"] = None

    @property
    def pos(self) -> Pos:
        return (self.row, self.col)

    @property
    def traversable(self) -> bool:
        return self.role is not CellRole.OBSTACLE

    def clear_metadata(self) -> None:
        self.distance = inf
        self.visited = False
        self.predecessor = None

    def __repr__(self) -> str:
        return f"Cell({self.row}, {self.col}, {self.role.name})"


@dataclass(frozen=True)
class SearchResult:
    visited_order: Tuple[Pos, ...] = ()
    path_order: Tuple[Pos, ...] = ()
    # counters from the final step (popped, frontier_size, ...); not part of equality
    metrics: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def found(self) -> bool:
        return len(self.path_order) > 0


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    closed: List[Pos] = field(default_factory=list)
    current: Optional[Pos] = None
    path: Optional[List[Pos]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TraceEvent:
    kind: TraceKind
    pos: Pos


@dataclass(frozen=True)
class CellState:
    pos: Pos
    display: Display
    index: int = -1               # trace index that produced it; -1 for layout


@dataclass(frozen=True)
class TraceCursor:
    position: int = 0
    state: CursorState = CursorState.IDLE
