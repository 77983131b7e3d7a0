from __future__ import annotations

import logging
import time
from typing import Dict, List, Sequence, Tuple

from ..errors import SolveTimeoutError
from ..graph import Color, Endpoint, Grid, NodeId
from ..paths import has_valid_path
from .types import SolveResult

logger = logging.getLogger(__name__)


def solve(grid: Grid, *, timeout_ms: int | None = None) -> bool:
    """Solve `grid` in place and report whether a full assignment was found.

    On success the grid's claims are the solution. On failure (or timeout) the
    grid is left with only its endpoints claimed.
    """
    return solve_with_backtracking(grid, timeout_ms=timeout_ms).solved


def solve_with_backtracking(grid: Grid, *, timeout_ms: int | None = None) -> SolveResult:
    """Depth-first search over colors, trying each color's paths shortest first."""

    grid.require_ready()
    start_time = time.monotonic()
    steps = 0
    chosen: Dict[Color, Tuple[NodeId, ...]] = {}

    def check_timeout() -> None:
        if timeout_ms is None:
            return
        elapsed_ms = (time.monotonic() - start_time) * 1000.0
        if elapsed_ms > timeout_ms:
            raise SolveTimeoutError(f"Backtracking solver timed out after {timeout_ms}ms")

    def search(remaining: Sequence[Endpoint]) -> bool:
        nonlocal steps
        if not remaining:
            return True

        # Cheap dead-end check: only the first candidate of each pair is pulled.
        if not all(has_valid_path(grid, ep.start, ep.end) for ep in remaining):
            return False

        ep, rest = remaining[0], remaining[1:]
        for path in grid.enumerate_valid_paths(ep.start, ep.end):
            steps += 1
            check_timeout()
            logger.debug("trying %s path of length %d (depth %d)", ep.color, len(path), len(grid.endpoints) - len(remaining))

            solved = False
            try:
                grid.apply_path(ep.color, path)
                solved = search(rest)
            finally:
                if not solved:
                    # apply_path may have stopped partway; only undo what it claimed
                    grid.remove_path([n for n in path if grid.color_of(n) == ep.color])
            if solved:
                chosen[ep.color] = path
                return True

        return False

    logger.info("solving %dx%d grid with %d colors", grid.n, grid.n, len(grid.endpoints))
    solved = search(grid.endpoints)
    elapsed_ms = (time.monotonic() - start_time) * 1000.0
    logger.info("%s after %d steps in %.1fms", "solved" if solved else "no solution", steps, elapsed_ms)

    paths: Dict[Color, List[NodeId]] = {}
    if solved:
        paths = {ep.color: list(chosen[ep.color]) for ep in grid.endpoints}
    return SolveResult(solved=solved, node_color=grid.claims(), paths=paths, steps=steps, elapsed_ms=elapsed_ms)
