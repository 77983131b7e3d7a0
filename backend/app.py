from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from flow_search.errors import InvalidOperation, InvalidPuzzle, SolveTimeoutError
from flow_search.problems import PROBLEMS, problem_puzzle
from flow_search.puzzle import Puzzle
from flow_search.solver import SOLVER_CHOICES, solve_puzzle

logger = logging.getLogger(__name__)

MAX_TIMEOUT_MS = 1_000_000


class ParseRequest(BaseModel):
    text: str


class SolveRequest(BaseModel):
    # Either a text board, or the size + endpoint pairs an interactive editor builds up.
    text: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=1)
    endpoints: Optional[Dict[str, List[List[int]]]] = None
    solver: str = Field(default="backtracking")
    timeout_ms: Optional[int] = Field(default=30_000, ge=1, le=MAX_TIMEOUT_MS)


def _puzzle_from_request(req: SolveRequest) -> Puzzle:
    if req.text is not None:
        return Puzzle.from_flow_text(req.text, source_name="<request>")
    if req.size is not None and req.endpoints is not None:
        return Puzzle.from_endpoints(req.size, req.endpoints)
    raise InvalidPuzzle("Provide either 'text' or 'size' + 'endpoints'")


def _puzzle_payload(puzzle: Puzzle) -> Dict[str, Any]:
    return {
        "size": puzzle.size,
        "colors": len(puzzle.endpoints),
        "endpoints": {c: [list(a), list(b)] for c, (a, b) in puzzle.endpoints.items()},
        "text": puzzle.to_text(),
    }


app = FastAPI(title="Flow Search API", version="0.1.0")

cors_raw = os.environ.get("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173")
cors_list = [c.strip() for c in cors_raw.split(",") if c.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_list or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/problems")
def list_problems() -> Dict[str, Any]:
    entries = []
    for i in range(len(PROBLEMS)):
        entry = _puzzle_payload(problem_puzzle(i))
        entry["index"] = i
        entries.append(entry)
    return {"entries": entries}


@app.get("/problems/{index}")
def get_problem(index: int) -> Dict[str, Any]:
    try:
        puzzle = problem_puzzle(index)
    except IndexError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return {"index": index, **_puzzle_payload(puzzle)}


@app.post("/parse")
def parse_puzzle(req: ParseRequest) -> Dict[str, Any]:
    try:
        puzzle = Puzzle.from_flow_text(req.text, source_name="<request>")
    except InvalidPuzzle as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return _puzzle_payload(puzzle)


@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    if req.solver not in SOLVER_CHOICES:
        raise HTTPException(status_code=400, detail=f"Unknown solver {req.solver!r}. Choose one of: {', '.join(SOLVER_CHOICES)}")
    try:
        grid = _puzzle_from_request(req).to_grid()
        res = solve_puzzle(grid, solver=req.solver, timeout_ms=req.timeout_ms)  # type: ignore[arg-type]
    except InvalidPuzzle as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except SolveTimeoutError as e:
        raise HTTPException(status_code=408, detail=str(e)) from e
    except InvalidOperation as e:
        logger.exception("solver misuse while handling request")
        raise HTTPException(status_code=500, detail=str(e)) from e

    return {
        "solved": res.solved,
        "rows": grid.rows(),
        "text": str(grid),
        "paths": res.paths,
        "filled": res.filled,
        "steps": res.steps,
        "elapsed_ms": res.elapsed_ms,
    }
