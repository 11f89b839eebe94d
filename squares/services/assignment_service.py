"""
Assignment invocation: event dict in, structured result out.
No persistence; the caller stores the assignments and guarantees at most one
run per board.
"""
from __future__ import annotations

import logging
from typing import Any

from squares.engine import SeededRNG, assign_squares, validate_assignments
from squares.engine.rng import RandomSource
from squares.models import Assignment
from squares.schemas import AssignmentCheckEvent, AssignmentEvent, parse_event

from .boundary import structured_result

logger = logging.getLogger(__name__)


@structured_result("assignment")
def run_assignment(event: Any = None, rng: RandomSource | None = None) -> dict[str, Any]:
    """
    Input {boardId, squares: [{id, userId, claimOrder}], seed?}.
    Output {success, assignments?, error?}. An explicit rng wins over the event seed.
    """
    req = parse_event(AssignmentEvent, event)
    logger.info("Assignment triggered for board: %s", req.board_id)
    squares = [s.to_square() for s in req.squares] if req.squares else None
    if rng is None and req.seed is not None:
        rng = SeededRNG(req.seed)
    assignments = assign_squares(req.board_id, squares, rng=rng)
    return {"assignments": [a.to_dict() for a in assignments]}


@structured_result("assignment validation")
def run_assignment_validation(event: Any = None) -> dict[str, Any]:
    """Input {assignments: [...]}; output {success, valid, errors, stats?}."""
    req = parse_event(AssignmentCheckEvent, event)
    assignments = [
        Assignment(
            square_id=a.square_id,
            grid_position=a.grid_position,
            winning_team_number=a.winning_team_number,
            losing_team_number=a.losing_team_number,
        )
        for a in req.assignments
    ]
    return validate_assignments(assignments).to_dict()
