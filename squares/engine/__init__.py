"""
Squares engine: assignment of claimed squares to the grid, winner resolution
for completed games, payout lookup by round and tournament progress.
Pure and synchronous; persistence belongs to the callers.
"""
from .rng import RandomSource, SeededRNG
from .assignment import (
    MAX_SQUARES,
    AssignmentReport,
    BoardShuffle,
    assign_squares,
    fisher_yates,
    sort_by_claim_order,
    validate_assignments,
)
from .payouts import ROUND_MULTIPLIERS, PayoutTable
from .resolution import (
    TEAM1_AXIS,
    ScoringRow,
    ScoringTable,
    build_scoring_table,
    find_winning_square,
    resolve_winner,
    target_position,
    validate_score,
    winning_digits,
)
from .progress import TournamentProgress, compute_progress, count_by_round

__all__ = [
    "RandomSource",
    "SeededRNG",
    "MAX_SQUARES",
    "AssignmentReport",
    "BoardShuffle",
    "assign_squares",
    "fisher_yates",
    "sort_by_claim_order",
    "validate_assignments",
    "ROUND_MULTIPLIERS",
    "PayoutTable",
    "TEAM1_AXIS",
    "ScoringRow",
    "ScoringTable",
    "build_scoring_table",
    "find_winning_square",
    "resolve_winner",
    "target_position",
    "validate_score",
    "winning_digits",
    "TournamentProgress",
    "compute_progress",
    "count_by_round",
]
