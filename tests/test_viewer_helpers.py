"""
Tests for the viewer's pure helpers (no window is opened).
"""

import pytest

pytest.importorskip("pygame")

from pathviz.app.viewer import CELL_COLORS, cell_color, parse_args, pick_cell  # noqa: E402
from pathviz.core.types import Display  # noqa: E402


class TestPickCell:
    """Pixel to (row, col) mapping."""

    @pytest.mark.parametrize("pixel,expected", [
        ((16, 16), (0, 0)),
        ((43, 16), (0, 0)),
        ((44, 16), (0, 1)),
        ((16, 72), (2, 0)),
        ((16 + 28 * 5 - 1, 16 + 28 * 4 - 1), (3, 4)),
    ])
    def test_inside(self, pixel, expected):
        """Pixels inside the grid map to their cell."""
        assert pick_cell((16, 16), 28, 4, 5, pixel) == expected

    @pytest.mark.parametrize("pixel", [(15, 20), (20, 15), (16 + 28 * 5, 20), (20, 16 + 28 * 4)])
    def test_outside(self, pixel):
        """Pixels left of, above, right of or below the grid give None."""
        assert pick_cell((16, 16), 28, 4, 5, pixel) is None


class TestColors:
    """Display to color mapping."""

    def test_every_display_has_a_color(self):
        """No display value is left without a color."""
        assert set(CELL_COLORS) == set(Display)

    def test_path_differs_from_explored(self):
        """Path and explored cells are distinguishable."""
        assert cell_color(Display.PATH) != cell_color(Display.EXPLORED)


class TestArgs:
    """--key=value flag parsing."""

    def test_parse(self):
        """Flags are collected, keys lower-cased, other args ignored."""
        args = parse_args(["--rows=12", "--ALGO=dfs", "-v", "--cols"])
        assert args == {"rows": "12", "algo": "dfs"}
