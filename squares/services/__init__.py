"""
Service layer: invocation boundary around the engine.
Every operation returns a structured result and never raises.
"""
from .boundary import failure, structured_result
from .assignment_service import run_assignment, run_assignment_validation
from .scoring_service import (
    payout_table_from,
    run_progress,
    run_resolution,
    run_scoring_table,
)

__all__ = [
    "failure",
    "structured_result",
    "run_assignment",
    "run_assignment_validation",
    "payout_table_from",
    "run_progress",
    "run_resolution",
    "run_scoring_table",
]
