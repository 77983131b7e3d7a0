from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional

from ..graph import Color, NodeId

SolverName = Literal["backtracking", "z3"]


@dataclass
class SolveResult:
    solved: bool
    node_color: Dict[NodeId, Optional[Color]]  # None => unused
    paths: Dict[Color, List[NodeId]] = field(default_factory=dict)  # ordered start->end; empty when unsolved
    steps: int = 0
    elapsed_ms: float = 0.0

    @property
    def filled(self) -> bool:
        return self.solved and all(c is not None for c in self.node_color.values())
