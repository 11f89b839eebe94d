"""
REST API for the squares pool engine.
Thin wrappers around the service invocations; no persistence, no auth.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from squares.config import configure_logging, get_settings
from squares.engine import PayoutTable
from squares.errors import InvalidInputError, UnexpectedError
from squares.models import round_metadata
from squares.schemas import (
    AssignmentCheckEvent,
    AssignmentEvent,
    ProgressEvent,
    ResolutionEvent,
    ScoringTableEvent,
)
from squares.services import (
    run_assignment,
    run_assignment_validation,
    run_progress,
    run_resolution,
    run_scoring_table,
)
from squares.services.boundary import failure


# ---------- Lifespan ----------
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging()
    yield


# ---------- FastAPI app ----------
app = FastAPI(
    title="Squares Pool API",
    description="Square assignment, winner resolution and tournament progress",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same structured failure as the invocations, as a 400."""
    locs = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        locs.append(".".join(loc) or "body")
    error = InvalidInputError(f"Invalid input: {', '.join(locs) or 'body'}")
    return JSONResponse(status_code=400, content={"detail": failure(error)})


def _unwrap(result: dict[str, Any]) -> dict[str, Any]:
    """Failures become 400 (validation) or 500 (unexpected) with the structured result as detail."""
    if result.get("success"):
        return result
    status = 500 if result.get("errorType") == UnexpectedError.code else 400
    raise HTTPException(status_code=status, detail=result)


# ---------- Endpoints ----------


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/rounds")
def list_rounds() -> dict[str, Any]:
    """Rounds in tournament order with the default payout per game."""
    payouts = PayoutTable.default().to_dict()
    return {"rounds": [{**r, "defaultPayout": payouts[r["round"]]} for r in round_metadata()]}


@app.post("/assignments")
def create_assignments(req: AssignmentEvent) -> dict[str, Any]:
    """Assign grid positions and digit labels to every claimed square of a board."""
    return _unwrap(run_assignment(req))


@app.post("/assignments/validate")
def validate_board_assignments(req: AssignmentCheckEvent) -> dict[str, Any]:
    return _unwrap(run_assignment_validation(req))


@app.post("/resolutions")
def resolve_game(req: ResolutionEvent) -> dict[str, Any]:
    """Resolve the winning square and payout of one completed game."""
    return _unwrap(run_resolution(req))


@app.post("/scoring-table")
def scoring_table(req: ScoringTableEvent) -> dict[str, Any]:
    return _unwrap(run_scoring_table(req))


@app.post("/progress")
def tournament_progress(req: ProgressEvent) -> dict[str, Any]:
    """Round stats, current round, completed and upcoming rounds."""
    return _unwrap(run_progress(req))


# ---------- Run with: uvicorn squares.api:app --reload ----------
