from .errors import InvalidOperation, InvalidPuzzle, SolveTimeoutError
from .graph import Cell, Endpoint, Grid
from .paths import enumerate_valid_paths, has_valid_path
from .puzzle import Puzzle, load_puzzle, parse_board
from .solver import SolveResult, solve, solve_puzzle

__all__ = [
    "Cell",
    "Endpoint",
    "Grid",
    "InvalidOperation",
    "InvalidPuzzle",
    "Puzzle",
    "SolveResult",
    "SolveTimeoutError",
    "enumerate_valid_paths",
    "has_valid_path",
    "load_puzzle",
    "parse_board",
    "solve",
    "solve_puzzle",
]
