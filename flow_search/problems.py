"""Reference boards used for debugging and demos."""

from __future__ import annotations

from typing import List

from .graph import Grid
from .puzzle import Puzzle

PROBLEMS: List[str] = [
    """
    A . . . .
    C . . . .
    . . B . .
    . . C . .
    . . B . A
    """,
    """
    . . A . . .
    . B C . D .
    A . . . . C
    . . . . . .
    D E . . B .
    E . . . . .
    """,
    """
    A . . . . . . E
    . . . . . . . .
    . . . B . C . .
    . . . . . . D E
    . . . . C . . .
    . . D . . . A .
    B . . . F . F .
    . . . . . . . .
    """,
    """
    A C B . D F . . .
    . . . . . E . . .
    . B C . . . D E .
    A . . . . . . . .
    . . . . . G . J .
    . J . . H . . . .
    . . . . . . F G .
    . . . I . . . . .
    I . . . . . . . H
    """,
    """
    A . . . . . . . . B
    . . . . . . . . . .
    . . . . . . . . . .
    . . . . . . . . . .
    C C D D E E F F G G
    . . . . . . . . . .
    . . . . . . . . . .
    . . . . . . . . . .
    . . . . . . . . . .
    B . . . . . . . . A
    """,
    """
    . . . . . . . . B
    . A . A . . F . .
    . . . C . . . . B
    E F . . . . G . G
    . . . . . . . . H
    . . . . . . . . I
    . . . . . . . . C
    . . H I . . . . .
    E . . . . D . . D
    """,
    """
    . . . . . . . . .
    A . B . C . D E .
    . . G . . . . . .
    . . . . . E . F .
    . . . . D . . . A
    . . . . . . H G .
    . . . . H . . F .
    . . C . . . . . .
    B . . . . . . . .
    """,
    """
    . . . . . . . . B
    . H . . . . . A I
    . . C . . . . I .
    A D G H C . . . .
    . . . . B . E F .
    . . . . . G . . .
    . F . . D E . . .
    . . . . . . . . .
    . . . . . . . . .
    """,
]


def problem_puzzle(index: int) -> Puzzle:
    if not 0 <= index < len(PROBLEMS):
        raise IndexError(f"Unknown problem {index} (have 0..{len(PROBLEMS) - 1})")
    return Puzzle.from_flow_text(PROBLEMS[index], source_name=f"problem-{index}")


def load_problem(index: int) -> Grid:
    return problem_puzzle(index).to_grid()
