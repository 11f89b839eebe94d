"""
Data models for the squares pool backend.
Domain objects only: no persistence, transport or randomness.

A board is a 10x10 grid. Users claim squares; one assignment run binds every
claimed square to a grid position and the row/column digit labels. Completed
tournament games then select a winning cell by the trailing digits of the scores.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from squares.errors import InvalidInputError

GRID_SIZE = 10
GRID_CELLS = GRID_SIZE * GRID_SIZE


# ---------- Round (fixed tournament order) ----------
class Round(str, Enum):
    """Tournament stages, opening round through championship."""
    ROUND1 = "ROUND1"
    ROUND2 = "ROUND2"
    SWEET16 = "SWEET16"
    ELITE8 = "ELITE8"
    FINAL4 = "FINAL4"
    CHAMPIONSHIP = "CHAMPIONSHIP"

    @property
    def display_name(self) -> str:
        return ROUND_DISPLAY_NAMES[self]

    @property
    def expected_games(self) -> int:
        return ROUND_GAME_COUNTS[self]

    @property
    def position(self) -> int:
        return ROUND_ORDER.index(self)


ROUND_ORDER: tuple[Round, ...] = (
    Round.ROUND1,
    Round.ROUND2,
    Round.SWEET16,
    Round.ELITE8,
    Round.FINAL4,
    Round.CHAMPIONSHIP,
)

ROUND_DISPLAY_NAMES: dict[Round, str] = {
    Round.ROUND1: "Round 1",
    Round.ROUND2: "Round 2",
    Round.SWEET16: "Sweet 16",
    Round.ELITE8: "Elite 8",
    Round.FINAL4: "Final 4",
    Round.CHAMPIONSHIP: "Championship",
}

# 64-team bracket: 32 + 16 + 8 + 4 + 2 + 1 = 63 games
ROUND_GAME_COUNTS: dict[Round, int] = {
    Round.ROUND1: 32,
    Round.ROUND2: 16,
    Round.SWEET16: 8,
    Round.ELITE8: 4,
    Round.FINAL4: 2,
    Round.CHAMPIONSHIP: 1,
}


def parse_round(value: Round | str | None) -> Round:
    """
    Accept a Round, its enum value ("SWEET16") or its display name ("Sweet 16").
    Matching is case-insensitive. Unknown values raise InvalidInputError.
    """
    if isinstance(value, Round):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Unknown round: {value!r}")
    key = value.strip().upper()
    for r in ROUND_ORDER:
        if key == r.value or key == r.display_name.upper():
            return r
    raise InvalidInputError(f"Unknown round: {value!r}")


def round_metadata() -> list[dict[str, Any]]:
    """All rounds in tournament order with display name and expected game count."""
    return [
        {"round": r.value, "name": r.display_name, "expectedGames": r.expected_games, "order": i + 1}
        for i, r in enumerate(ROUND_ORDER)
    ]


# ---------- Game status ----------
class GameStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


def parse_game_status(value: GameStatus | str | None) -> GameStatus:
    """Case-insensitive; "in-progress" and "in progress" are accepted for IN_PROGRESS."""
    if isinstance(value, GameStatus):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"Unknown game status: {value!r}")
    key = value.strip().upper().replace("-", "_").replace(" ", "_")
    try:
        return GameStatus(key)
    except ValueError:
        raise InvalidInputError(f"Unknown game status: {value!r}") from None


# ---------- Payment status (pass-through) ----------
class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"


# ---------- Square ----------
@dataclass
class Square:
    """
    One purchased cell claim. claim_order is strictly increasing per board and
    only orders the assignment run. Grid position and labels stay None until
    the board is assigned; they are never reassigned afterwards.
    """
    id: str
    user_id: str
    claim_order: int
    payment_status: str = PaymentStatus.PAID
    grid_position: int | None = None
    winning_team_number: int | None = None
    losing_team_number: int | None = None

    @property
    def is_assigned(self) -> bool:
        return self.grid_position is not None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "claimOrder": self.claim_order,
            "paymentStatus": str(getattr(self.payment_status, "value", self.payment_status)),
        }
        if self.grid_position is not None:
            d["gridPosition"] = self.grid_position
            d["winningTeamNumber"] = self.winning_team_number
            d["losingTeamNumber"] = self.losing_team_number
        return d


# ---------- Assignment ----------
@dataclass(frozen=True)
class Assignment:
    """Output of one assignment run for one square."""
    square_id: str
    grid_position: int  # 0-99
    winning_team_number: int  # column label, 0-9
    losing_team_number: int  # row label, 0-9

    @property
    def row(self) -> int:
        return self.grid_position // GRID_SIZE

    @property
    def col(self) -> int:
        return self.grid_position % GRID_SIZE

    def to_dict(self) -> dict[str, Any]:
        return {
            "squareId": self.square_id,
            "gridPosition": self.grid_position,
            "winningTeamNumber": self.winning_team_number,
            "losingTeamNumber": self.losing_team_number,
        }


# ---------- BoardAssignment (persisted view read by resolution) ----------
@dataclass(frozen=True)
class BoardAssignment:
    """
    An assigned square as the collaborators persist it. Labels are optional:
    when present they decide the match, otherwise the grid position does.
    """
    square_id: str
    user_id: str
    grid_position: int | None
    winning_team_number: int | None = None
    losing_team_number: int | None = None

    @property
    def has_labels(self) -> bool:
        return self.winning_team_number is not None and self.losing_team_number is not None


# ---------- Game ----------
@dataclass
class Game:
    """One tournament matchup. Scores are None until reported."""
    id: str
    round: Round
    team1: str = ""
    team2: str = ""
    team1_score: Any = None
    team2_score: Any = None
    status: GameStatus = GameStatus.SCHEDULED
    game_number: int | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "round": self.round.value,
            "team1": self.team1,
            "team2": self.team2,
            "team1Score": self.team1_score,
            "team2Score": self.team2_score,
            "status": self.status.value,
        }
        if self.game_number is not None:
            d["gameNumber"] = self.game_number
        return d


# ---------- Winner ----------
@dataclass(frozen=True)
class Winner:
    """Resolved winner of one completed game."""
    game_id: str
    square_id: str
    user_id: str
    grid_position: int | None
    payout_amount: float
    round: Round
    team1_digit: int
    team2_digit: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "gameId": self.game_id,
            "winnerSquareId": self.square_id,
            "winnerUserId": self.user_id,
            "gridPosition": self.grid_position,
            "payoutAmount": self.payout_amount,
            "round": self.round.value,
            "winningNumbers": {"team1LastDigit": self.team1_digit, "team2LastDigit": self.team2_digit},
        }


# ---------- RoundStats ----------
@dataclass
class RoundStats:
    """Derived per-round game counts; never persisted."""
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    scheduled: int = 0

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.completed == self.total

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "completed": self.completed,
            "inProgress": self.in_progress,
            "scheduled": self.scheduled,
        }
