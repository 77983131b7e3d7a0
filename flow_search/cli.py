from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from .errors import InvalidOperation, InvalidPuzzle, SolveTimeoutError
from .graph import Grid
from .problems import PROBLEMS, problem_puzzle
from .puzzle import Puzzle
from .solver import SOLVER_CHOICES, solve_puzzle

logger = logging.getLogger("flow_search")


def _trace_observer(grid: Grid):
    def on_change(node_id: int) -> None:
        cell = grid.cell(node_id)
        logger.debug("cell (%d, %d) -> %s", cell.row, cell.col, cell.color or ".")

    return on_change


def _load(args: argparse.Namespace) -> tuple[Puzzle, str]:
    if args.problem is not None:
        return problem_puzzle(args.problem), f"problem {args.problem}"
    if args.puzzle is None:
        raise InvalidPuzzle("Give a puzzle file or --problem INDEX")
    return Puzzle.from_file(args.puzzle), Path(args.puzzle).name


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="flow_search", description="Flow puzzle path-search solver")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_solve = sub.add_parser("solve", help="Solve a puzzle and print the filled board")
    p_solve.add_argument("puzzle", type=str, nargs="?", help="Path to a text or .json puzzle file")
    p_solve.add_argument("--problem", type=int, default=None, help="Solve a built-in problem by index instead")
    p_solve.add_argument("--solver", choices=SOLVER_CHOICES, default="backtracking", help="Solver backend")
    p_solve.add_argument("--timeout-ms", type=int, default=None, help="Give up after this many milliseconds")
    p_solve.add_argument("--out", type=str, default=None, help="Also render the result to this HTML path")
    p_solve.add_argument("--trace", action="store_true", help="Log every claim/unclaim (implies --log-level DEBUG)")

    p_viz = sub.add_parser("visualize", help="Render an unsolved puzzle to an HTML file")
    p_viz.add_argument("puzzle", type=str, nargs="?", help="Path to a text or .json puzzle file")
    p_viz.add_argument("--problem", type=int, default=None, help="Render a built-in problem by index instead")
    p_viz.add_argument("--out", type=str, default="out/puzzle.html", help="Output HTML path")

    sub.add_parser("problems", help="List the built-in problems")

    args = parser.parse_args(list(argv) if argv is not None else None)

    level = "DEBUG" if getattr(args, "trace", False) else args.log_level.upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.cmd == "problems":
        for i in range(len(PROBLEMS)):
            puzzle = problem_puzzle(i)
            print(f"[{i}] {puzzle.size}x{puzzle.size}, colors={len(puzzle.endpoints)}")
            print(puzzle.to_text())
            print()
        return 0

    try:
        puzzle, name = _load(args)
        grid = puzzle.to_grid()
    except (InvalidPuzzle, IndexError, OSError) as e:
        print(f"error: {e}")
        return 2

    if args.cmd == "visualize":
        from .viz import write_plotly_html

        out = write_plotly_html(grid, out_path=args.out, title=f"Puzzle: {name}")
        print(f"Wrote puzzle visualization: {out}")
        return 0

    if args.cmd == "solve":
        print(grid)
        print()
        if args.trace:
            grid.add_observer(_trace_observer(grid))
        try:
            res = solve_puzzle(grid, solver=args.solver, timeout_ms=args.timeout_ms)
        except (SolveTimeoutError, InvalidOperation) as e:
            print(f"error: {e}")
            return 2

        print("Solved!" if res.solved else "Has no solution.")
        print(grid)
        print(f"{name}: colors={len(grid.endpoints)}, steps={res.steps}, elapsed={res.elapsed_ms:.1f}ms, filled={res.filled}")
        for c, path in res.paths.items():
            print(f"  {c}: path_len={len(path)}")

        if args.out:
            from .viz import write_plotly_html

            out = write_plotly_html(grid, out_path=args.out, title=f"Solution: {name}")
            print(f"Wrote solution visualization: {out}")
        return 0 if res.solved else 1

    raise AssertionError("unreachable")
