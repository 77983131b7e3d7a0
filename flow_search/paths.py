from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, FrozenSet, Iterator, Optional, Tuple

if TYPE_CHECKING:
    from .graph import Grid, NodeId

CellPath = Tuple["NodeId", ...]


def enumerate_valid_paths(grid: "Grid", start: "NodeId", target: "NodeId") -> Iterator[CellPath]:
    """Lazily yield simple paths from `start` to `target`, shortest first.

    Breadth-first over partial paths. A neighbor `nxt` of the current head is
    explored only if:
    - it is unclaimed, or it is `target` itself
    - it is not the cell we just came from
    - it does not wrap back onto the path, i.e. no neighbor of `nxt` other than
      the head is already on the path

    Claim state is read as the generator is pulled, so a generator should be
    consumed against the grid state it was created for.
    """

    queue: Deque[Tuple[Optional["NodeId"], "NodeId", CellPath, FrozenSet["NodeId"]]] = deque()
    queue.append((None, start, (start,), frozenset((start,))))

    while queue:
        prev, head, path, members = queue.popleft()
        if head == target:
            yield path
            continue

        for nxt in grid.neighbors(head):
            if nxt != target and grid.is_claimed(nxt):
                continue
            if nxt == prev:
                continue
            if _wraps_back(grid, head, nxt, members):
                continue
            queue.append((head, nxt, path + (nxt,), members | {nxt}))


def _wraps_back(grid: "Grid", head: "NodeId", nxt: "NodeId", members: FrozenSet["NodeId"]) -> bool:
    return any(m != head and m in members for m in grid.neighbors(nxt))


def has_valid_path(grid: "Grid", start: "NodeId", target: "NodeId") -> bool:
    return next(enumerate_valid_paths(grid, start, target), None) is not None
