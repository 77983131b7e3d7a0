from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .errors import InvalidPuzzle
from .graph import Color, Grid

Coord = Tuple[int, int]

EMPTY = "."


@dataclass
class Puzzle:
    """A square Flow puzzle before it is turned into a solvable grid.

    - `size` is the side length N.
    - `endpoints` maps color labels -> ((r, c), (r, c)).
    """

    size: int
    endpoints: Dict[Color, Tuple[Coord, Coord]]
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.size, bool) or not isinstance(self.size, int) or self.size <= 0:
            raise InvalidPuzzle(f"Puzzle size must be a positive integer (got {self.size!r})")
        if not self.endpoints:
            raise InvalidPuzzle("Expected at least one pair of points to solve")
        seen: Dict[Coord, Color] = {}
        for color, pair in self.endpoints.items():
            if len(pair) != 2:
                raise InvalidPuzzle(f"Endpoint {color!r} must have exactly two cells (found {len(pair)})")
            for r, c in pair:
                if not (0 <= r < self.size and 0 <= c < self.size):
                    raise InvalidPuzzle(f"Endpoint {color!r} at ({r}, {c}) is outside a {self.size}x{self.size} grid")
                if (r, c) in seen:
                    raise InvalidPuzzle(f"Cell ({r}, {c}) is used by both {seen[(r, c)]!r} and {color!r}")
                seen[(r, c)] = color

    def to_grid(self) -> Grid:
        """Build a grid with every endpoint claimed, then finalize it."""
        grid = Grid(self.size)
        for color, pair in self.endpoints.items():
            for r, c in pair:
                grid.claim(grid.node_id(r, c), color)
        grid.finalize()
        return grid

    def to_text(self) -> str:
        rows = [[EMPTY] * self.size for _ in range(self.size)]
        for color, pair in self.endpoints.items():
            for r, c in pair:
                rows[r][c] = color
        return "\n".join(" ".join(row) for row in rows)

    @staticmethod
    def from_file(path: str | Path) -> "Puzzle":
        path = Path(path)
        if path.suffix.lower() == ".json":
            return Puzzle.from_json(path.read_text(encoding="utf-8"))
        return Puzzle.from_flow_text(path.read_text(encoding="utf-8"), source_name=str(path))

    @staticmethod
    def from_json(text: str) -> "Puzzle":
        """Accept either `{"board": [...rows...]}` or `{"size": N, "endpoints": {...}}`."""
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidPuzzle(f"Invalid puzzle JSON: {e}") from e
        if not isinstance(obj, dict):
            raise InvalidPuzzle("Puzzle JSON must be an object")
        meta = obj.get("meta", {})
        if not isinstance(meta, dict):
            raise InvalidPuzzle("Puzzle JSON 'meta' must be an object")

        if "board" in obj:
            board = obj["board"]
            if isinstance(board, str):
                return Puzzle.from_flow_text(board, source_name="<json>")
            if not isinstance(board, list):
                raise InvalidPuzzle("Puzzle JSON 'board' must be a string or a list of rows")
            token_rows: List[List[str]] = []
            for row in board:
                if isinstance(row, str):
                    token_rows.append(row.split())
                elif isinstance(row, list):
                    token_rows.append([str(t) for t in row])
                else:
                    raise InvalidPuzzle(f"Board row must be a string or a list of labels: {row!r}")
            return Puzzle.from_token_rows(token_rows, meta=dict(meta))

        if "size" in obj and "endpoints" in obj:
            return Puzzle.from_endpoints(obj["size"], obj["endpoints"], meta=dict(meta))

        raise InvalidPuzzle("Puzzle JSON needs either 'board' or 'size' + 'endpoints'")

    @staticmethod
    def from_endpoints(
        size: int,
        endpoints: Mapping[str, Sequence[Sequence[int]]],
        *,
        meta: Dict[str, Any] | None = None,
    ) -> "Puzzle":
        if not isinstance(endpoints, Mapping):
            raise InvalidPuzzle("Endpoints must map each label to its two cells")
        pairs: Dict[Color, Tuple[Coord, Coord]] = {}
        for color, cells in endpoints.items():
            if not isinstance(cells, (list, tuple)):
                raise InvalidPuzzle(f"Endpoint {color!r} must be a list of cells (got {cells!r})")
            coords: List[Coord] = []
            for cell in cells:
                if not isinstance(cell, (list, tuple)) or len(cell) != 2:
                    raise InvalidPuzzle(f"Endpoint {color!r} has a malformed coordinate: {cell!r}")
                coords.append((_as_index(color, cell[0]), _as_index(color, cell[1])))
            if len(coords) != 2:
                raise InvalidPuzzle(f"Endpoint {color!r} must have exactly two cells (found {len(coords)})")
            pairs[str(color)] = (coords[0], coords[1])
        return Puzzle(size=size, endpoints=pairs, meta=meta or {})

    @staticmethod
    def from_flow_text(text: str, *, source_name: str = "<text>") -> "Puzzle":
        meta: Dict[str, Any] = {"source": source_name}
        grid_lines: List[str] = []

        for ln in text.splitlines():
            raw = ln.strip()
            if not raw:
                continue
            # "# key: value" lines are metadata; any other line is a grid row.
            if raw.startswith("#") and ":" in raw:
                k, v = [x.strip() for x in raw[1:].split(":", 1)]
                meta[k.lower()] = v
                continue
            grid_lines.append(raw)

        # whitespace-separated tokens if the row has any, else one token per character
        token_rows = [row.split() if any(ch.isspace() for ch in row) else list(row) for row in grid_lines]
        return Puzzle.from_token_rows(token_rows, meta=meta)

    @staticmethod
    def from_token_rows(token_rows: Sequence[Sequence[str]], *, meta: Dict[str, Any] | None = None) -> "Puzzle":
        if not token_rows:
            raise InvalidPuzzle("No grid found in puzzle text")

        width = len(token_rows[0])
        if any(len(r) != width for r in token_rows):
            raise InvalidPuzzle("Expected grid to have uniform row lengths")
        if width != len(token_rows):
            raise InvalidPuzzle(f"Only square grids are supported (got {len(token_rows)}x{width})")

        points: Dict[Color, List[Coord]] = {}
        for r, row in enumerate(token_rows):
            for c, tok in enumerate(row):
                if len(tok) != 1:
                    raise InvalidPuzzle(f"Cell ({r}, {c}) has an unparseable label {tok!r}")
                if tok == EMPTY:
                    continue
                points.setdefault(tok, []).append((r, c))

        if not points:
            raise InvalidPuzzle("Expected at least one pair of points to solve")
        for color, locs in points.items():
            if len(locs) != 2:
                raise InvalidPuzzle(f"Label {color!r} must appear exactly twice (found {len(locs)})")

        return Puzzle(size=width, endpoints={c: (p[0], p[1]) for c, p in points.items()}, meta=meta or {})


def parse_board(text: str) -> Grid:
    """Parse a text board straight into a finalized grid."""
    return Puzzle.from_flow_text(text).to_grid()


def load_puzzle(path: str | Path) -> Grid:
    return Puzzle.from_file(path).to_grid()


def _as_index(color: Color, value: Any) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise InvalidPuzzle(f"Endpoint {color!r} has a non-integer coordinate: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise InvalidPuzzle(f"Endpoint {color!r} has a non-integer coordinate: {value!r}") from e
