# pathviz/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Viewer — editable grid + trace playback

- Mouse (left button, drag to paint):
    edit mode WALL  -> paint obstacles (click toggles)
    edit mode START -> move the source
    edit mode END   -> move the target
    edit mode ERASE -> remove obstacles
- Keyboard:
    [W]/[S]/[E]/[X] -> edit mode: wall / start / end / erase
    [B]/[D]/[F]     -> select algorithm (BFS / Dijkstra / DFS)
    [SPACE]         -> run / pause / resume
    [N]             -> single step
    [R]             -> stop + reset (unlocks the grid)
    [C]             -> clear walls
    [+]/[-]         -> steps/sec
    [Q]/[ESC]       -> quit

Config:
- ENV: PATHVIZ_ROWS, PATHVIZ_COLS, PATHVIZ_ALGORITHM, PATHVIZ_STEPS_PER_SEC, LOG_LEVEL
- CLI: --rows=N --cols=N --algo=bfs|dijkstra|dfs
"""

import logging
import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from pathviz import config
from pathviz.core.algorithms import Algorithm, resolve
from pathviz.core.errors import GridLocked, PathvizError
from pathviz.core.grid import Grid
from pathviz.core.session import Session
from pathviz.core.types import CellRole, CursorState, Display, Pos, TraceEvent, TraceKind

logger = logging.getLogger(__name__)

FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
GRID_LINE   = (209,213,219)
SOURCE_GREEN= ( 34,197, 94)
TARGET_RED  = (239, 68, 68)
WALL_GRAY   = ( 31, 41, 55)
EXPLORED_BLUE=(191,219,254)
PATH_PURPLE = (168, 85,247)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
TEXT_WARN   = (255,170, 90)
ACCENT_GOLD = (255,210,0)

CELL_COLORS = {
    Display.EMPTY:    WHITE,
    Display.OBSTACLE: WALL_GRAY,
    Display.SOURCE:   SOURCE_GREEN,
    Display.TARGET:   TARGET_RED,
    Display.EXPLORED: EXPLORED_BLUE,
    Display.PATH:     PATH_PURPLE,
}

ROLE_DISPLAY = {
    CellRole.EMPTY:    Display.EMPTY,
    CellRole.OBSTACLE: Display.OBSTACLE,
    CellRole.SOURCE:   Display.SOURCE,
    CellRole.TARGET:   Display.TARGET,
}

EDIT_MODES = ("wall", "start", "end", "erase")
ALGO_LABELS = {
    Algorithm.BFS: "BFS",
    Algorithm.DIJKSTRA: "Dijkstra",
    Algorithm.DFS: "DFS",
}


# ---------- pure helpers ----------
def cell_color(display: Display) -> Tuple[int, int, int]:
    return CELL_COLORS[display]


def pick_cell(origin: Tuple[int, int], cell_size: int, rows: int, cols: int,
              pixel: Tuple[int, int]) -> Optional[Pos]:
    """Map a window pixel to a (row, col) cell, None outside the grid."""
    ox, oy = origin
    px, py = pixel
    if cell_size <= 0 or px < ox or py < oy:
        return None
    col = (px - ox) // cell_size
    row = (py - oy) // cell_size
    if row >= rows or col >= cols:
        return None
    return (int(row), int(col))


def parse_args(argv: List[str]) -> Dict[str, str]:
    """Collect --key=value flags (unknown flags are kept, ignored later)."""
    out: Dict[str, str] = {}
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            out[key.lower()] = value
    return out


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, session: Session, algorithm: Algorithm = Algorithm.BFS):
        pygame.init()

        self.session = session
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid = session.grid
        cs = self._auto_cell_size(grid)
        win_w = config.GRID_MARGIN*2 + grid.cols*cs + config.PANEL_W
        win_h = max(config.GRID_MARGIN*2 + grid.rows*cs, config.WINDOW_MIN_H)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding — Grid Search")

        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

        self.clock = pygame.time.Clock()
        self.steps_per_sec = config.STEPS_PER_SEC
        self.selected_algo = algorithm
        self.edit_mode = "wall"
        self.shown: Dict[Pos, Display] = {}
        self.message = ""
        self._painting = False
        self._next_step_t = 0.0
        self._refresh_active_states()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        grid = self.session.grid
        avail_w = max(1, win_w - config.PANEL_W - 2 * config.GRID_MARGIN)
        avail_h = max(1, win_h - 2 * config.GRID_MARGIN)
        self.cell_size = int(max(config.CELL_SIZE_MIN, min(avail_w // grid.cols, avail_h // grid.rows)))

        plate_w = grid.cols * self.cell_size + 2 * config.GRID_MARGIN
        plate_h = grid.rows * self.cell_size + 2 * config.GRID_MARGIN
        left_x = max(0, (win_w - (plate_w + config.PANEL_W)) // 2)
        top_y  = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + config.GRID_MARGIN,
                             self.canvas_rect.y + config.GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(config.PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - config.GRID_MARGIN*2
        return max(config.CELL_SIZE_MIN, min(config.CELL_SIZE_DEFAULT, target_h // grid.rows))

    # ---------- state ----------
    @property
    def state(self) -> str:
        cursor = self.session.cursor
        if cursor is None:
            return "Editing"
        if cursor.state is CursorState.COMPLETE:
            return "Done" if self.session.trace.found else "No path"
        if cursor.state is CursorState.PAUSED:
            return "Paused"
        if cursor.state is CursorState.IDLE:
            return "Ready"
        return "Running"

    def _interval(self, event: TraceEvent) -> float:
        base = 1.0 / max(1, self.steps_per_sec)
        if event.kind is TraceKind.PATH_STEP:
            return base * (config.PATH_STEP_DELAY / config.EXPLORED_STEP_DELAY)
        return base

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._tick_playback()
            self._draw()
            self.clock.tick(60)

    def _tick_playback(self):
        cursor = self.session.cursor
        if cursor is None or cursor.state is not CursorState.PLAYING:
            return
        now = time.time()
        if now < self._next_step_t:
            return
        self._apply(self.session.step())
        delay = self.session.player.next_delay()
        self._next_step_t = now + (delay or 0.0)

    def _apply(self, cell_state):
        if cell_state is not None:
            self.shown[cell_state.pos] = cell_state.display

    def _start_run(self) -> bool:
        try:
            self.session.run(self.selected_algo)
        except PathvizError as ex:
            self._warn(str(ex))
            return False
        self.shown.clear()
        self.session.play(self._interval)
        self._next_step_t = 0.0
        self.message = ""
        return True

    def _toggle_run(self):
        cursor = self.session.cursor
        if cursor is None:
            self._start_run()
        elif cursor.state is CursorState.PAUSED:
            self.session.resume()
        elif cursor.state in (CursorState.PLAYING, CursorState.IDLE):
            self.session.pause()
        self._refresh_active_states()

    def _do_step(self):
        cursor = self.session.cursor
        if cursor is None:
            if not self._start_run():
                return
            self.session.pause()
            cursor = self.session.cursor
        if cursor.state is CursorState.PAUSED:
            self.session.resume()
            self._apply(self.session.step())
            self.session.pause()
        else:
            self._apply(self.session.step())
        self._refresh_active_states()

    def _reset(self):
        self.session.stop()
        self.shown.clear()
        self.message = ""
        self._refresh_active_states()

    def _clear_walls(self):
        self._edit(self.session.clear_obstacles)

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(config.STEPS_PER_SEC_MIN,
                                     min(config.STEPS_PER_SEC_MAX, self.steps_per_sec + dv)))

    def _switch_algo(self, algo: Algorithm):
        if self.session.running:
            self._warn("Stop the current run first [R]")
            return
        self.selected_algo = algo
        self._refresh_active_states()

    def _set_mode(self, mode: str):
        self.edit_mode = mode
        self._refresh_active_states()

    # ---------- editing ----------
    def _warn(self, text: str):
        logger.warning(text)
        self.message = text

    def _edit(self, fn, *args) -> bool:
        try:
            fn(*args)
        except GridLocked:
            self._warn("Grid is locked during a run; press [R] to stop")
            return False
        except PathvizError as ex:
            self._warn(str(ex))
            return False
        return True

    def _edit_at(self, pixel: Tuple[int, int], dragging: bool):
        grid = self.session.grid
        p = pick_cell(self._grid_origin, self.cell_size, grid.rows, grid.cols, pixel)
        if p is None:
            return
        if self.edit_mode == "wall":
            fn = self.session.place_obstacle if dragging else self.session.set_obstacle
        elif self.edit_mode == "erase":
            fn = self.session.erase
        elif self.edit_mode == "start":
            fn = self.session.move_source
        else:
            fn = self.session.move_target
        if not self._edit(fn, p):
            self._painting = False

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
                self._handle_mouse(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self._do_step()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self._clear_walls()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key == pygame.K_b:
            self._switch_algo(Algorithm.BFS)
        elif key == pygame.K_d:
            self._switch_algo(Algorithm.DIJKSTRA)
        elif key == pygame.K_f:
            self._switch_algo(Algorithm.DFS)
        elif key == pygame.K_w:
            self._set_mode("wall")
        elif key == pygame.K_s:
            self._set_mode("start")
        elif key == pygame.K_e:
            self._set_mode("end")
        elif key == pygame.K_x:
            self._set_mode("erase")

    def _handle_mouse(self, e: pygame.event.Event):
        for b in self._buttons:
            if b.handle_mouse(e):
                return
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            self._painting = self.canvas_rect.collidepoint(e.pos)
            if self._painting:
                self._edit_at(e.pos, dragging=False)
        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            self._painting = False
        elif e.type == pygame.MOUSEMOTION and self._painting and self.edit_mode in ("wall", "erase"):
            self._edit_at(e.pos, dragging=True)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        grid = self.session.grid

        for cell in grid.iter_cells():
            rect = pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)
            display = ROLE_DISPLAY[cell.role]
            if cell.role is CellRole.EMPTY:
                display = self.shown.get(cell.pos, display)
            pygame.draw.rect(self.screen, cell_color(display), rect)
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        for p, label in ((grid.source, "S"), (grid.target, "T")):
            r, c = p
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=(ox + c*cs + cs//2, oy + r*cs + cs//2)))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 290  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: str | None = None):
            rect = pygame.Rect(x, y, w, h)
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step); y += h + gap
        add("Reset", self._reset);       y += h + gap
        add("Clear Walls", self._clear_walls); y += h + gap

        half = (w - 8) // 2
        self._buttons.append(UIButton("Speed −", pygame.Rect(x, y, half, h), lambda: self._bump_speed(-5)))
        self._buttons.append(UIButton("Speed +", pygame.Rect(x + half + 8, y, half, h), lambda: self._bump_speed(+5)))
        y += h + gap

        for algo, label in ALGO_LABELS.items():
            add(f"Algo: {label}", lambda a=algo: self._switch_algo(a), togglable=True,
                store_as=f"btn_algo_{algo.value}")
            y += h + gap

        quarter = (w - 3 * 6) // 4
        for i, mode in enumerate(EDIT_MODES):
            rect = pygame.Rect(x + i * (quarter + 6), y, quarter, h)
            btn = UIButton(mode.title(), rect, lambda m=mode: self._set_mode(m), togglable=True)
            self._buttons.append(btn)
            setattr(self, f"btn_mode_{mode}", btn)

        if hasattr(self, "selected_algo"):
            self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            cursor = self.session.cursor
            self.btn_run.set_active(cursor is not None and cursor.state is CursorState.PLAYING)
        for algo in ALGO_LABELS:
            btn = getattr(self, f"btn_algo_{algo.value}", None)
            if btn is not None:
                btn.set_active(self.selected_algo is algo)
        for mode in EDIT_MODES:
            btn = getattr(self, f"btn_mode_{mode}", None)
            if btn is not None:
                btn.set_active(self.edit_mode == mode)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 270
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        trace = self.session.trace
        cursor = self.session.cursor
        if trace is not None:
            line(f"Explored: {len(trace.visited_order)}")
            line(f"Path Len: {len(trace.path_order)}")
            line(f"Step: {cursor.position}/{len(trace)}")
            m = trace.metrics
            line(f"Popped: {m.get('popped', 0)}   Frontier: {m.get('frontier_size', 0)}")
            if "relaxed" in m:
                line(f"Relaxed: {m['relaxed']}")
        else:
            line(f"Walls: {len(self.session.grid.obstacles())}")
        line("-" * 26)
        line(f"State: {self.state}")
        line(f"Algo: {ALGO_LABELS[self.selected_algo]}   Mode: {self.edit_mode}")
        line(f"Speed: {self.steps_per_sec} steps/s")
        if self.message:
            line(self.message, color=TEXT_WARN)

        for b in self._buttons:
            b.draw(self.screen, self.font_small)


# ---------- main ----------
def main():
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(sys.argv[1:])
    try:
        rows = int(args.get("rows", config.DEFAULT_ROWS))
        cols = int(args.get("cols", config.DEFAULT_COLS))
        algo = resolve(args.get("algo", config.DEFAULT_ALGORITHM))
        grid = Grid(rows, cols)
    except (ValueError, PathvizError) as ex:
        logger.error("Bad startup options: %s", ex)
        sys.exit(2)
    Viewer(Session(grid), algorithm=algo).run()


if __name__ == "__main__":
    main()
