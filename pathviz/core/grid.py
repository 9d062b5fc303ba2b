# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Editable grid model.

The grid owns the cell layout (roles) plus the per-cell search metadata.
Engines never search the caller's grid directly; they take a snapshot()
so a run cannot leave half-relaxed distances behind in the editable grid.

Text layout accepted by Grid.from_rows() / produced by to_rows():
    '.' empty   '#' obstacle   'S' source   'T' target
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence

from pathviz.config import DEFAULT_COLS, DEFAULT_ROWS, DEFAULT_SOURCE, DEFAULT_TARGET
from pathviz.core.errors import GridLocked, InvalidPlacement, OccupiedBySpecial
from pathviz.core.types import Cell, CellRole, Pos

ROLE_CHARS = {
    CellRole.EMPTY: ".",
    CellRole.OBSTACLE: "#",
    CellRole.SOURCE: "S",
    CellRole.TARGET: "T",
}
CHAR_ROLES = {ch: role for role, ch in ROLE_CHARS.items()}


def _default_specials(rows: int, cols: int):
    (sr, sc), (tr, tc) = DEFAULT_SOURCE, DEFAULT_TARGET
    if sr < rows and sc < cols and tr < rows and tc < cols:
        return DEFAULT_SOURCE, DEFAULT_TARGET
    return (0, 0), (rows - 1, cols - 1)


def _other_special(given: Pos, preferred: Pos, corners) -> Pos:
    """Default for the missing special cell, moved to a free corner if it collides."""
    given = tuple(given)
    for p in (tuple(preferred), *corners):
        if p != given:
            return p
    raise InvalidPlacement(f"no free cell left beside {given}")


@dataclass(eq=False)
class Grid:
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS
    source: Optional[Pos] = None
    target: Optional[Pos] = None
    cells: List[List[Cell]] = field(default_factory=list, init=False, repr=False)  # [row][col]
    locked: bool = field(default=False, init=False)  # True while a run's trace is active

    def __post_init__(self) -> None:
        if self.source is None or self.target is None:
            d_src, d_tgt = _default_specials(self.rows, self.cols)
            far = (self.rows - 1, self.cols - 1)
            if self.source is not None:
                src, tgt = self.source, _other_special(self.source, d_tgt, (far, (0, 0)))
            elif self.target is not None:
                src, tgt = _other_special(self.target, d_src, ((0, 0), far)), self.target
            else:
                src, tgt = d_src, d_tgt
        else:
            src, tgt = self.source, self.target
        self.initialize(self.rows, self.cols, src, tgt)

    # -------------------- construction --------------------

    def initialize(self, rows: int, cols: int, source: Pos, target: Pos) -> None:
        """Fill the grid with EMPTY cells and place Source/Target."""
        self._check_unlocked()
        if rows <= 0 or cols <= 0:
            raise InvalidPlacement(f"grid dimensions must be positive, got {rows}x{cols}")
        source, target = tuple(source), tuple(target)
        for name, p in (("source", source), ("target", target)):
            if not (0 <= p[0] < rows and 0 <= p[1] < cols):
                raise InvalidPlacement(f"{name} {p} outside {rows}x{cols} grid")
        if source == target:
            raise InvalidPlacement(f"source and target both at {source}")

        self.rows, self.cols = rows, cols
        self.cells = [[Cell(r, c) for c in range(cols)] for r in range(rows)]
        self.source, self.target = source, target
        self.cell(source).role = CellRole.SOURCE
        self.cell(target).role = CellRole.TARGET

    @classmethod
    def from_rows(cls, lines: Sequence[str]) -> "Grid":
        """Build a grid from a text layout (see module docstring)."""
        lines = [ln.strip() for ln in lines if ln.strip()]
        if not lines:
            raise InvalidPlacement("empty layout")
        width = len(lines[0])
        if any(len(ln) != width for ln in lines):
            raise InvalidPlacement("layout rows have different widths")

        found = {CellRole.SOURCE: [], CellRole.TARGET: []}
        for r, ln in enumerate(lines):
            for c, ch in enumerate(ln):
                if ch not in CHAR_ROLES:
                    raise InvalidPlacement(f"unknown layout character {ch!r} at {(r, c)}")
                role = CHAR_ROLES[ch]
                if role in found:
                    found[role].append((r, c))
        if len(found[CellRole.SOURCE]) != 1 or len(found[CellRole.TARGET]) != 1:
            raise InvalidPlacement("layout needs exactly one 'S' and one 'T'")

        grid = cls(len(lines), width, found[CellRole.SOURCE][0], found[CellRole.TARGET][0])
        for r, ln in enumerate(lines):
            for c, ch in enumerate(ln):
                if ch == "#":
                    grid.cells[r][c].role = CellRole.OBSTACLE
        return grid

    def snapshot(self) -> "Grid":
        """Working copy: same roles, default metadata, never locked."""
        copy = Grid(self.rows, self.cols, self.source, self.target)
        for cell in self.iter_cells():
            if cell.role is CellRole.OBSTACLE:
                copy.cells[cell.row][cell.col].role = CellRole.OBSTACLE
        return copy

    # -------------------- queries --------------------

    def in_bounds(self, p: Pos) -> bool:
        r, c = p
        return 0 <= r < self.rows and 0 <= c < self.cols

    def cell(self, p: Pos) -> Cell:
        r, c = p
        return self.cells[r][c]

    def is_obstacle(self, p: Pos) -> bool:
        return self.cell(p).role is CellRole.OBSTACLE

    def iter_cells(self) -> Iterator[Cell]:
        """All cells in row-major order."""
        for row in self.cells:
            yield from row

    def obstacles(self) -> List[Pos]:
        return [c.pos for c in self.iter_cells() if c.role is CellRole.OBSTACLE]

    def to_rows(self) -> List[str]:
        return ["".join(ROLE_CHARS[c.role] for c in row) for row in self.cells]

    # -------------------- edits --------------------

    def _check_unlocked(self) -> None:
        if self.locked:
            raise GridLocked("grid is locked while a run is active; stop it first")

    def _checked(self, p: Pos) -> Cell:
        p = tuple(p)
        if not self.in_bounds(p):
            raise InvalidPlacement(f"{p} outside {self.rows}x{self.cols} grid")
        return self.cell(p)

    def set_obstacle(self, p: Pos) -> None:
        """Toggle OBSTACLE/EMPTY. Source and Target are left alone."""
        self._check_unlocked()
        cell = self._checked(p)
        if cell.role is CellRole.EMPTY:
            cell.role = CellRole.OBSTACLE
            cell.clear_metadata()
        elif cell.role is CellRole.OBSTACLE:
            cell.role = CellRole.EMPTY

    def place_obstacle(self, p: Pos) -> None:
        """EMPTY -> OBSTACLE only (drag painting never toggles back)."""
        self._check_unlocked()
        cell = self._checked(p)
        if cell.role is CellRole.EMPTY:
            cell.role = CellRole.OBSTACLE
            cell.clear_metadata()

    def erase(self, p: Pos) -> None:
        """OBSTACLE -> EMPTY only."""
        self._check_unlocked()
        cell = self._checked(p)
        if cell.role is CellRole.OBSTACLE:
            cell.role = CellRole.EMPTY

    def move_source(self, p: Pos) -> None:
        self._move_special(p, CellRole.SOURCE)

    def move_target(self, p: Pos) -> None:
        self._move_special(p, CellRole.TARGET)

    def _move_special(self, p: Pos, role: CellRole) -> None:
        self._check_unlocked()
        cell = self._checked(p)
        other = CellRole.TARGET if role is CellRole.SOURCE else CellRole.SOURCE
        if cell.role is other:
            raise OccupiedBySpecial(f"{cell.pos} already holds the {other.value}")
        if cell.role is role:
            return

        old = self.source if role is CellRole.SOURCE else self.target
        self.cell(old).role = CellRole.EMPTY
        cell.role = role
        cell.clear_metadata()
        if role is CellRole.SOURCE:
            self.source = cell.pos
        else:
            self.target = cell.pos

    def clear_obstacles(self) -> None:
        self._check_unlocked()
        for cell in self.iter_cells():
            if cell.role is CellRole.OBSTACLE:
                cell.role = CellRole.EMPTY

    # -------------------- metadata --------------------

    def reset_metadata(self) -> None:
        """distance=inf, visited=False, predecessor=None everywhere; roles untouched."""
        for cell in self.iter_cells():
            cell.clear_metadata()
