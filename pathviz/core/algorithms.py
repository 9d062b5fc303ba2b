# pathviz/core/algorithms.py
#!/usr/bin/env python3
from enum import Enum
from typing import Union

from pathviz.core.bfs import BFSAlgo
from pathviz.core.dfs import DFSAlgo
from pathviz.core.dijkstra import DijkstraAlgo
from pathviz.core.errors import UnknownAlgorithm
from pathviz.core.search import SearchAlgo


class Algorithm(Enum):
    DIJKSTRA = "dijkstra"
    BFS = "bfs"
    DFS = "dfs"


_IMPLS = {
    Algorithm.DIJKSTRA: DijkstraAlgo,
    Algorithm.BFS: BFSAlgo,
    Algorithm.DFS: DFSAlgo,
}


def resolve(algorithm: Union[str, Algorithm]) -> Algorithm:
    if isinstance(algorithm, Algorithm):
        return algorithm
    try:
        return Algorithm(str(algorithm).strip().lower())
    except ValueError:
        names = ", ".join(a.value for a in Algorithm)
        raise UnknownAlgorithm(f"unknown algorithm {algorithm!r} (expected one of: {names})") from None


def make_algo(algorithm: Union[str, Algorithm]) -> SearchAlgo:
    return _IMPLS[resolve(algorithm)]()
