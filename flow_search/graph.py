from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .errors import InvalidOperation, InvalidPuzzle

NodeId = int
Color = str
Observer = Callable[[NodeId], None]

# up, left, down, right
_DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (0, -1), (1, 0), (0, 1))


@dataclass
class Cell:
    id: NodeId
    row: int
    col: int
    neighbors: Tuple[NodeId, ...] = ()
    color: Optional[Color] = None

    @property
    def claimed(self) -> bool:
        return self.color is not None


@dataclass(frozen=True)
class Endpoint:
    color: Color
    start: NodeId
    end: NodeId


class Grid:
    """An N×N lattice of cells with per-cell claim state.

    Topology is fixed at construction. The only mutable state is each cell's
    color, changed through `claim`/`unclaim` (or the path helpers built on
    them). Once `finalize()` has run, the claimed cells are frozen into the
    endpoint list the solver works from.
    """

    def __init__(self, n: int) -> None:
        if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
            raise InvalidPuzzle(f"Grid side length must be a positive integer (got {n!r})")
        self.n = n
        self.cells: List[Cell] = [Cell(id=r * n + c, row=r, col=c) for r in range(n) for c in range(n)]
        for cell in self.cells:
            cell.neighbors = tuple(
                (cell.row + dr) * n + (cell.col + dc)
                for dr, dc in _DIRECTIONS
                if 0 <= cell.row + dr < n and 0 <= cell.col + dc < n
            )

        self._ready = False
        self._endpoints: Tuple[Endpoint, ...] = ()
        self._endpoint_nodes: FrozenSet[NodeId] = frozenset()
        self._observers: List[Observer] = []

    @classmethod
    def build(cls, n: int) -> "Grid":
        return cls(n)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    # -- lookup ---------------------------------------------------------------

    def node_id(self, r: int, c: int) -> NodeId:
        if not (0 <= r < self.n and 0 <= c < self.n):
            raise IndexError(f"Cell ({r}, {c}) is outside a {self.n}x{self.n} grid")
        return r * self.n + c

    def get_cell(self, r: int, c: int) -> Cell:
        return self.cells[self.node_id(r, c)]

    def cell(self, node_id: NodeId) -> Cell:
        if not 0 <= node_id < len(self.cells):
            raise IndexError(f"Unknown cell id: {node_id!r}")
        return self.cells[node_id]

    def neighbors(self, node_id: NodeId) -> Tuple[NodeId, ...]:
        return self.cell(node_id).neighbors

    def color_of(self, node_id: NodeId) -> Optional[Color]:
        return self.cell(node_id).color

    def is_claimed(self, node_id: NodeId) -> bool:
        return self.cell(node_id).color is not None

    # -- claim state ----------------------------------------------------------

    def add_observer(self, callback: Observer) -> None:
        self._observers.append(callback)

    def remove_observer(self, callback: Observer) -> None:
        self._observers.remove(callback)

    def _notify(self, node_id: NodeId) -> None:
        for callback in list(self._observers):
            callback(node_id)

    def claim(self, node_id: NodeId, color: Color) -> None:
        cell = self.cell(node_id)
        if cell.color is not None:
            raise InvalidOperation(f"Cell {node_id} is already claimed by {cell.color!r}")
        cell.color = color
        self._notify(node_id)

    def unclaim(self, node_id: NodeId) -> None:
        cell = self.cell(node_id)
        if cell.color is None:
            raise InvalidOperation(f"Cell {node_id} is not claimed")
        cell.color = None
        self._notify(node_id)

    def finalize(self) -> None:
        """Freeze the currently claimed cells into endpoint pairs."""
        groups: Dict[Color, List[NodeId]] = {}
        for cell in self.cells:
            if cell.color is not None:
                groups.setdefault(cell.color, []).append(cell.id)

        if not groups:
            raise InvalidPuzzle("No endpoints claimed (need at least one color pair)")
        for color, ids in groups.items():
            if len(ids) != 2:
                raise InvalidPuzzle(f"Color {color!r} must claim exactly two cells (found {len(ids)})")

        self._endpoints = tuple(Endpoint(color=c, start=ids[0], end=ids[1]) for c, ids in groups.items())
        self._endpoint_nodes = frozenset(n for ep in self._endpoints for n in (ep.start, ep.end))
        self._ready = True

    def is_ready(self) -> bool:
        return self._ready

    @property
    def endpoints(self) -> Tuple[Endpoint, ...]:
        return self._endpoints

    @property
    def endpoint_nodes(self) -> FrozenSet[NodeId]:
        return self._endpoint_nodes

    def require_ready(self) -> None:
        if not self._ready:
            raise InvalidOperation("Grid not in a valid state to begin solving (call finalize() first)")

    def apply_path(self, color: Color, path: Iterable[NodeId]) -> None:
        for node_id in path:
            if self.cell(node_id).color != color:
                self.claim(node_id, color)

    def remove_path(self, path: Iterable[NodeId]) -> None:
        for node_id in path:
            if node_id not in self._endpoint_nodes:
                self.unclaim(node_id)

    def enumerate_valid_paths(self, start: NodeId, target: NodeId) -> Iterator[Tuple[NodeId, ...]]:
        from .paths import enumerate_valid_paths

        self.require_ready()
        self.cell(start)
        self.cell(target)
        return enumerate_valid_paths(self, start, target)

    # -- views ----------------------------------------------------------------

    def claims(self) -> Dict[NodeId, Optional[Color]]:
        return {cell.id: cell.color for cell in self.cells}

    def unclaimed(self) -> List[NodeId]:
        return [cell.id for cell in self.cells if cell.color is None]

    def is_filled(self) -> bool:
        return all(cell.color is not None for cell in self.cells)

    def rows(self) -> List[List[str]]:
        return [[self.cells[r * self.n + c].color or "." for c in range(self.n)] for r in range(self.n)]

    def __str__(self) -> str:
        return "\n".join(" ".join(row) for row in self.rows())
