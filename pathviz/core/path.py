# pathviz/core/path.py
#!/usr/bin/env python3
from typing import List

from pathviz.core.types import Cell, CellRole


def reconstruct(end: Cell) -> List[Cell]:
    """
    Walk predecessor links back from `end` and return the path Source -> end.

    Returns [] when `end` was never reached (no predecessor and not the Source).
    """
    if end.predecessor is None and end.role is not CellRole.SOURCE:
        return []

    path: List[Cell] = []
    seen = set()
    cur = end
    while cur is not None:
        if id(cur) in seen:
            raise RuntimeError(f"predecessor cycle through {cur!r}")
        seen.add(id(cur))
        path.append(cur)
        cur = cur.predecessor
    path.reverse()
    return path
