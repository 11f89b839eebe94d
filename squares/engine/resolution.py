"""
Winner resolution: the ones digit of each team's final score selects one grid
axis, and the square on that cell wins the round's payout.

Team 1 selects the column (matched against winning_team_number) and team 2
selects the row (matched against losing_team_number). The assignment engine
labels columns with winning digits and rows with losing digits, so this
mapping must not change on one side only.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from squares.errors import IncompleteGameError, InvalidInputError, InvalidScoreError
from squares.models import GRID_SIZE, BoardAssignment, Game, GameStatus, Winner

from .payouts import PayoutTable

logger = logging.getLogger(__name__)

# Which axis the team1 score selects. Team 2 always selects the other one.
TEAM1_AXIS = "column"


def validate_score(score: Any, label: str = "score") -> int:
    """Scores must be non-negative ints. bools, floats and None are non-numeric."""
    if isinstance(score, bool) or not isinstance(score, int):
        raise InvalidScoreError(f"Scores must be integers ({label}={score!r})")
    if score < 0:
        raise InvalidScoreError("Scores cannot be negative")
    return score


def winning_digits(team1_score: int, team2_score: int) -> tuple[int, int]:
    """(col, row) selected by the trailing digits of the two scores."""
    d1 = team1_score % GRID_SIZE
    d2 = team2_score % GRID_SIZE
    if TEAM1_AXIS == "column":
        return d1, d2
    return d2, d1


def target_position(col: int, row: int) -> int:
    return row * GRID_SIZE + col


def find_winning_square(
    col: int, row: int, assignments: Sequence[BoardAssignment]
) -> BoardAssignment | None:
    """
    Labelled squares match on (winning_team_number, losing_team_number);
    squares persisted without labels match on grid position.
    """
    target = target_position(col, row)
    for a in assignments:
        if a.has_labels:
            if a.winning_team_number == col and a.losing_team_number == row:
                return a
        elif a.grid_position == target:
            return a
    return None


def _check_game(game: Game) -> tuple[int, int]:
    if not game.id:
        raise InvalidInputError("Invalid input: gameId is required")
    if game.status != GameStatus.COMPLETED:
        status = getattr(game.status, "value", game.status)
        raise IncompleteGameError(f"Game {game.id} is not completed (status: {status})")
    return validate_score(game.team1_score, "team1Score"), validate_score(game.team2_score, "team2Score")


def resolve_winner(
    game: Game,
    assignments: Sequence[BoardAssignment],
    payout_table: PayoutTable,
) -> Winner | None:
    """
    Resolve the winner of one completed game. None means no square sits on the
    selected cell. Deterministic: re-running on the same inputs gives the same result.
    """
    team1_score, team2_score = _check_game(game)
    col, row = winning_digits(team1_score, team2_score)
    square = find_winning_square(col, row, assignments)
    if square is None:
        logger.info(
            "No winning square for game %s (digits %d-%d, position %d)",
            game.id, team1_score % GRID_SIZE, team2_score % GRID_SIZE, target_position(col, row),
        )
        return None

    payout = payout_table.payout_for(game.round)
    grid_position = square.grid_position if square.grid_position is not None else target_position(col, row)
    logger.info("Game %s won by user %s (square %s), payout %.2f", game.id, square.user_id, square.square_id, payout)
    return Winner(
        game_id=game.id,
        square_id=square.square_id,
        user_id=square.user_id,
        grid_position=grid_position,
        payout_amount=payout,
        round=game.round,
        team1_digit=team1_score % GRID_SIZE,
        team2_digit=team2_score % GRID_SIZE,
    )


# ---------- Scoring table ----------


@dataclass
class ScoringRow:
    game: Game
    winner: Winner | None = None

    def to_dict(self) -> dict[str, Any]:
        d = self.game.to_dict()
        if self.winner is not None:
            d["winner"] = self.winner.to_dict()
            d["payout"] = self.winner.payout_amount
        return d


@dataclass
class ScoringTable:
    """Every game of a board with its resolved winner, plus totals per user."""
    rows: list[ScoringRow] = field(default_factory=list)

    @property
    def winners(self) -> list[Winner]:
        return [r.winner for r in self.rows if r.winner is not None]

    @property
    def total_paid(self) -> float:
        return sum(w.payout_amount for w in self.winners)

    def winnings_by_user(self) -> dict[str, float]:
        totals: dict[str, float] = {}
        for w in self.winners:
            totals[w.user_id] = totals.get(w.user_id, 0.0) + w.payout_amount
        return dict(sorted(totals.items(), key=lambda kv: (-kv[1], kv[0])))

    def to_dict(self) -> dict[str, Any]:
        return {
            "games": [r.to_dict() for r in self.rows],
            "totalPaid": self.total_paid,
            "winningsByUser": self.winnings_by_user(),
        }


def build_scoring_table(
    games: Sequence[Game],
    assignments: Sequence[BoardAssignment],
    payout_table: PayoutTable,
) -> ScoringTable:
    """
    Games ordered by game number (then round order); only completed games are
    resolved. A completed game with an invalid score raises like resolve_winner.
    """
    ordered = sorted(
        games,
        key=lambda g: (g.game_number if g.game_number is not None else float("inf"), g.round.position),
    )
    rows = []
    for game in ordered:
        winner = None
        if game.status == GameStatus.COMPLETED:
            winner = resolve_winner(game, assignments, payout_table)
        rows.append(ScoringRow(game=game, winner=winner))
    return ScoringTable(rows=rows)
