"""
Pytest configuration and shared fixtures.

Grid layouts use the text format of Grid.from_rows():
'.' empty, '#' obstacle, 'S' source, 'T' target.
"""

import pytest

from pathviz.core.bfs import BFSAlgo
from pathviz.core.dfs import DFSAlgo
from pathviz.core.dijkstra import DijkstraAlgo
from pathviz.core.grid import Grid

ENGINES = [DijkstraAlgo, BFSAlgo, DFSAlgo]


@pytest.fixture
def layout():
    """Factory: build a Grid from text rows."""
    def _make(*rows: str) -> Grid:
        return Grid.from_rows(rows)
    return _make


@pytest.fixture
def open_5x5() -> Grid:
    """5x5 grid, Source (0,0), Target (4,4), no obstacles."""
    return Grid(5, 5, (0, 0), (4, 4))


@pytest.fixture
def walled(layout) -> Grid:
    """A full obstacle row separates Source from Target."""
    return layout(
        "S....",
        ".....",
        "#####",
        ".....",
        "....T",
    )


@pytest.fixture(params=ENGINES, ids=lambda cls: cls.__name__)
def engine(request):
    """A fresh instance of each search engine."""
    return request.param()


def metadata(grid: Grid):
    """Comparable view of every cell's search metadata."""
    return [
        (c.pos, c.distance, c.visited, c.predecessor.pos if c.predecessor else None)
        for c in grid.iter_cells()
    ]


def assert_valid_path(grid: Grid, path, source, target):
    """Consecutive cells adjacent, no obstacles, endpoints correct."""
    assert path[0] == source
    assert path[-1] == target
    for (r1, c1), (r2, c2) in zip(path, path[1:]):
        assert abs(r1 - r2) + abs(c1 - c2) == 1
    for p in path:
        assert not grid.is_obstacle(p)
