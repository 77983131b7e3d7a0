from __future__ import annotations

from typing import Callable, Sequence

import pytest

from flow_search.graph import Grid
from flow_search.puzzle import parse_board


@pytest.fixture
def board() -> Callable[[str], Grid]:
    return parse_board


@pytest.fixture
def check_path() -> Callable[[Grid, Sequence[int]], None]:
    """Assert a path is simple, steps between neighbors, and never touches itself."""

    def check(grid: Grid, path: Sequence[int]) -> None:
        assert len(set(path)) == len(path), f"repeated cell in {path}"
        for a, b in zip(path, path[1:]):
            assert b in grid.neighbors(a), f"{a} -> {b} is not a grid step"
        index = {node: i for i, node in enumerate(path)}
        for i, node in enumerate(path):
            for nb in grid.neighbors(node):
                if nb in index:
                    assert abs(index[nb] - i) == 1, f"{node} touches non-consecutive {nb}"

    return check
