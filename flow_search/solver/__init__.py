from ..graph import Grid
from .backtracking import solve, solve_with_backtracking
from .types import SolveResult, SolverName
from .z3_solver import solve_with_z3

SOLVER_CHOICES: tuple[SolverName, ...] = ("backtracking", "z3")


def solve_puzzle(grid: Grid, *, solver: SolverName = "backtracking", timeout_ms: int | None = None) -> SolveResult:
    if solver == "backtracking":
        return solve_with_backtracking(grid, timeout_ms=timeout_ms)
    if solver == "z3":
        return solve_with_z3(grid, timeout_ms=timeout_ms)
    raise ValueError(f"Unknown solver {solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")


__all__ = [
    "SolveResult",
    "SolverName",
    "SOLVER_CHOICES",
    "solve",
    "solve_puzzle",
    "solve_with_backtracking",
    "solve_with_z3",
]
