from __future__ import annotations

import logging
import time
from typing import Dict, List, Optional

from ..errors import SolveTimeoutError
from ..graph import Color, Grid, NodeId
from .types import SolveResult

logger = logging.getLogger(__name__)


def solve_with_z3(grid: Grid, *, timeout_ms: int | None = 30_000, fill: bool = False) -> SolveResult:
    """Solve using Z3.

    Same contract as the backtracking solver: on success the paths are applied
    to `grid`, on UNSAT the grid is left untouched.

    Every cell of a color must see exactly as many same-colored neighbors as it
    has path neighbors (1 for endpoints, 2 otherwise). Counting *all*
    same-colored neighbors forbids a path from touching itself, which is the
    same no-wrap rule the path enumerator applies.
    """

    try:
        import z3  # type: ignore
    except Exception as e:  # pragma: no cover
        raise RuntimeError("z3-solver is required. Install with: pip install z3-solver") from e

    grid.require_ready()
    start_time = time.monotonic()

    endpoints = grid.endpoints
    color_to_idx = {ep.color: i for i, ep in enumerate(endpoints)}
    idx_to_color = {i: c for c, i in color_to_idx.items()}
    terminals: Dict[NodeId, Color] = {}
    for ep in endpoints:
        terminals[ep.start] = ep.color
        terminals[ep.end] = ep.color

    nodes = [cell.id for cell in grid]

    # One Int var per cell: -1 (unused) or 0..k-1 (color index)
    col = {n: z3.Int(f"col_{n}") for n in nodes}

    s = z3.Solver()
    if timeout_ms is not None:
        s.set(timeout=timeout_ms)

    k = len(endpoints)
    for n in nodes:
        s.add(z3.And(col[n] >= -1, col[n] < k))
        if fill:
            s.add(col[n] != -1)

    for n, color in terminals.items():
        s.add(col[n] == color_to_idx[color])

    # Non-terminal cells already claimed on the grid are obstacles to everyone.
    for n in nodes:
        if n not in terminals and grid.is_claimed(n):
            s.add(col[n] == -1)

    for n in nodes:
        nbs = grid.neighbors(n)
        same_deg = z3.Sum([z3.If(col[m] == col[n], 1, 0) for m in nbs]) if nbs else z3.IntVal(0)
        if n in terminals:
            s.add(same_deg == 1)
        else:
            s.add(z3.Implies(col[n] != -1, same_deg == 2))

    # Connectivity via a "distance to start terminal" witness, per color.
    for ep in endpoints:
        ci = color_to_idx[ep.color]
        dist = {n: z3.Int(f"dist_{ci}_{n}") for n in nodes}

        for n in nodes:
            s.add(z3.Implies(col[n] == ci, dist[n] >= 0))
            s.add(z3.Implies(col[n] != ci, dist[n] == -1))

        s.add(dist[ep.start] == 0)

        for n in nodes:
            if n == ep.start:
                continue
            preds = [z3.And(col[m] == ci, dist[m] == dist[n] - 1) for m in grid.neighbors(n)]
            if preds:
                s.add(z3.Implies(col[n] == ci, z3.And(dist[n] >= 1, z3.Or(preds))))
            else:
                s.add(col[n] != ci)

    chk = s.check()
    elapsed_ms = (time.monotonic() - start_time) * 1000.0
    if chk == z3.unknown:
        reason = s.reason_unknown()
        if "timeout" in reason or "canceled" in reason:
            raise SolveTimeoutError(f"Z3 solver timed out after {timeout_ms}ms")
        raise RuntimeError(f"Z3 returned UNKNOWN. Reason: {reason}")
    if chk != z3.sat:
        logger.info("z3: no solution (%s) in %.1fms", chk, elapsed_ms)
        return SolveResult(solved=False, node_color=grid.claims(), elapsed_ms=elapsed_ms)

    model = s.model()
    node_color: Dict[NodeId, Optional[Color]] = {}
    for n in nodes:
        idx = model.eval(col[n], model_completion=True).as_long()
        node_color[n] = None if idx == -1 else idx_to_color[idx]

    paths: Dict[Color, List[NodeId]] = {}
    for ep in endpoints:
        paths[ep.color] = _walk_path(grid, node_color, start=ep.start, goal=ep.end)
    for ep in endpoints:
        grid.apply_path(ep.color, paths[ep.color])

    logger.info("z3: solved in %.1fms", elapsed_ms)
    return SolveResult(solved=True, node_color=grid.claims(), paths=paths, elapsed_ms=elapsed_ms)


def _walk_path(grid: Grid, node_color: Dict[NodeId, Optional[Color]], *, start: NodeId, goal: NodeId) -> List[NodeId]:
    color = node_color[start]
    if color is None or node_color[goal] != color:
        raise ValueError("Terminal colors mismatch (solver bug)")

    path: List[NodeId] = [start]
    prev: Optional[NodeId] = None
    cur: NodeId = start

    # Degree constraints make the next step unique.
    while cur != goal:
        nexts = [nb for nb in grid.neighbors(cur) if nb != prev and node_color.get(nb) == color]
        if len(nexts) != 1:
            raise ValueError(
                f"Cannot uniquely reconstruct path for {color!r} at cell {cur!r} (candidates={nexts})."
            )
        nxt = nexts[0]
        path.append(nxt)
        prev, cur = cur, nxt

    return path
