"""
Scoring invocations: winner resolution for one completed game, the board
scoring table, and tournament progress. Stateless and deterministic.
"""
from __future__ import annotations

import logging
from typing import Any

from squares.engine import (
    PayoutTable,
    build_scoring_table,
    compute_progress,
    resolve_winner,
    target_position,
    validate_score,
    winning_digits,
)
from squares.models import GRID_SIZE
from squares.schemas import (
    PayoutConfig,
    ProgressEvent,
    ResolutionEvent,
    ScoringTableEvent,
    parse_event,
)

from .boundary import structured_result

logger = logging.getLogger(__name__)


def payout_table_from(config: PayoutConfig) -> PayoutTable:
    """Explicit per-round amounts, else price-based multipliers, else the configured default."""
    if config.payouts:
        return PayoutTable.from_dict(config.payouts)
    if config.price_per_square is not None:
        return PayoutTable.from_price_per_square(config.price_per_square)
    return PayoutTable.default()


@structured_result("winner resolution")
def run_resolution(event: Any = None) -> dict[str, Any]:
    """
    Input {gameId, round, team1Score, team2Score, status, boardAssignments,
    payouts? | pricePerSquare?}. A cell nobody owns yields winner=False; its
    gridPosition is the digit cell, or None on a board with digit labels.
    """
    req = parse_event(ResolutionEvent, event)
    game = req.to_game()
    logger.info("Resolving game %s (%s): %r vs %r", game.id, game.round.value, game.team1_score, game.team2_score)
    table = payout_table_from(req)
    assignments = [a.to_board_assignment() for a in req.board_assignments]
    winner = resolve_winner(game, assignments, table)
    if winner is not None:
        return {"winner": True, **winner.to_dict()}

    team1 = validate_score(game.team1_score, "team1Score")
    team2 = validate_score(game.team2_score, "team2Score")
    col, row = winning_digits(team1, team2)
    # On a labelled board the digit cell is not a grid position.
    labelled = any(a.has_labels for a in assignments)
    return {
        "winner": False,
        "gameId": game.id,
        "winnerSquareId": None,
        "winnerUserId": None,
        "gridPosition": None if labelled else target_position(col, row),
        "payoutAmount": 0,
        "round": game.round.value,
        "winningNumbers": {"team1LastDigit": team1 % GRID_SIZE, "team2LastDigit": team2 % GRID_SIZE},
    }


@structured_result("scoring table")
def run_scoring_table(event: Any = None) -> dict[str, Any]:
    """Input {boardId?, games, boardAssignments, payouts? | pricePerSquare?}."""
    req = parse_event(ScoringTableEvent, event)
    games = [g.to_game(i) for i, g in enumerate(req.games)]
    assignments = [a.to_board_assignment() for a in req.board_assignments]
    table = build_scoring_table(games, assignments, payout_table_from(req))
    logger.info(
        "Scoring table for board %s: %d games, %d winners", req.board_id, len(games), len(table.winners)
    )
    return table.to_dict()


@structured_result("tournament progress")
def run_progress(event: Any = None) -> dict[str, Any]:
    """Input {games: [{round, status}]} or the bare list of games."""
    if isinstance(event, list):
        event = {"games": event}
    req = parse_event(ProgressEvent, event)
    games = [g.to_game(i) for i, g in enumerate(req.games)]
    return compute_progress(games).to_dict()
