"""
Configuration constants for the pathfinding visualizer.

Grid defaults, playback cadence and viewer geometry live here. A few of them
can be overridden from the environment (see the names passed to _env_int and _env_level).
"""

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_level(name: str, default: str) -> str:
    raw = (os.environ.get(name) or "").strip().upper()
    return raw if raw in LOG_LEVELS else default


# =============================================================================
# Grid Configuration
# =============================================================================

# Default dimensions of a fresh grid
DEFAULT_ROWS = _env_int("PATHVIZ_ROWS", 20)
DEFAULT_COLS = _env_int("PATHVIZ_COLS", 20)

# Default special cells, (row, col). Clamped into smaller grids.
DEFAULT_SOURCE = (5, 5)
DEFAULT_TARGET = (15, 15)

# =============================================================================
# Search Configuration
# =============================================================================

# Algorithm selected when the viewer starts (dijkstra | bfs | dfs)
DEFAULT_ALGORITHM = os.environ.get("PATHVIZ_ALGORITHM", "bfs").lower()

# =============================================================================
# Playback Configuration
# =============================================================================

# Seconds between explored-cell steps and between path steps.
# Path cells animate at a fixed, slightly slower pace.
EXPLORED_STEP_DELAY = 0.02
PATH_STEP_DELAY = 0.05

# Steps per second the viewer starts with, and its bounds
STEPS_PER_SEC = _env_int("PATHVIZ_STEPS_PER_SEC", 30)
STEPS_PER_SEC_MIN = 1
STEPS_PER_SEC_MAX = 120

# =============================================================================
# Viewer Configuration
# =============================================================================

PANEL_W = 320
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 28
CELL_SIZE_MIN = 8
WINDOW_MIN_H = 680

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level, one of LOG_LEVELS; anything else falls back to INFO
LOG_LEVEL = _env_level("LOG_LEVEL", "INFO")
