"""
Invocation payloads exchanged with the collaborators (camelCase on the wire).

Fields are deliberately optional: missing or empty values are reported by the
engines with their contract messages, not by pydantic.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from squares.errors import InvalidInputError
from squares.models import (
    BoardAssignment,
    Game,
    GameStatus,
    Square,
    parse_game_status,
    parse_round,
)


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class SquareIn(_Payload):
    id: str | None = None
    user_id: str | None = Field(None, alias="userId")
    claim_order: int | None = Field(None, alias="claimOrder")
    payment_status: str | None = Field(None, alias="paymentStatus")

    def to_square(self) -> Square:
        sq = Square(id=self.id or "", user_id=self.user_id or "", claim_order=self.claim_order)
        if self.payment_status:
            sq.payment_status = self.payment_status
        return sq


class AssignmentEvent(_Payload):
    board_id: str | None = Field(None, alias="boardId")
    squares: list[SquareIn] | None = None
    seed: int | None = Field(None, description="RNG seed for a reproducible run")


class AssignmentIn(_Payload):
    square_id: str = Field(..., alias="squareId")
    grid_position: int = Field(..., alias="gridPosition")
    winning_team_number: int = Field(..., alias="winningTeamNumber")
    losing_team_number: int = Field(..., alias="losingTeamNumber")


class AssignmentCheckEvent(_Payload):
    assignments: list[AssignmentIn] = Field(default_factory=list)


class BoardAssignmentIn(_Payload):
    square_id: str = Field(..., alias="squareId")
    user_id: str = Field(..., alias="userId")
    grid_position: int | None = Field(None, alias="gridPosition")
    winning_team_number: int | None = Field(None, alias="winningTeamNumber")
    losing_team_number: int | None = Field(None, alias="losingTeamNumber")

    def to_board_assignment(self) -> BoardAssignment:
        return BoardAssignment(
            square_id=self.square_id,
            user_id=self.user_id,
            grid_position=self.grid_position,
            winning_team_number=self.winning_team_number,
            losing_team_number=self.losing_team_number,
        )


class PayoutConfig(_Payload):
    payouts: dict[str, float] | None = Field(None, description="Round -> amount; omitted rounds are an error")
    price_per_square: float | None = Field(None, alias="pricePerSquare")


class ResolutionEvent(PayoutConfig):
    game_id: str | None = Field(None, alias="gameId")
    round: str | None = None
    team1_score: Any = Field(None, alias="team1Score")
    team2_score: Any = Field(None, alias="team2Score")
    status: str | None = None
    board_assignments: list[BoardAssignmentIn] = Field(default_factory=list, alias="boardAssignments")

    def to_game(self) -> Game:
        return Game(
            id=self.game_id or "",
            round=parse_round(self.round),
            team1_score=self.team1_score,
            team2_score=self.team2_score,
            status=parse_game_status(self.status) if self.status else GameStatus.SCHEDULED,
        )


class GameIn(_Payload):
    id: str | None = None
    round: str | None = None
    status: str | None = None
    team1: str = ""
    team2: str = ""
    team1_score: Any = Field(None, alias="team1Score")
    team2_score: Any = Field(None, alias="team2Score")
    game_number: int | None = Field(None, alias="gameNumber")

    def to_game(self, index: int = 0) -> Game:
        return Game(
            id=self.id or f"game-{index + 1}",
            round=parse_round(self.round),
            team1=self.team1,
            team2=self.team2,
            team1_score=self.team1_score,
            team2_score=self.team2_score,
            status=parse_game_status(self.status) if self.status else GameStatus.SCHEDULED,
            game_number=self.game_number,
        )


class ProgressEvent(_Payload):
    games: list[GameIn] = Field(default_factory=list)


class ScoringTableEvent(PayoutConfig):
    board_id: str | None = Field(None, alias="boardId")
    games: list[GameIn] = Field(default_factory=list)
    board_assignments: list[BoardAssignmentIn] = Field(default_factory=list, alias="boardAssignments")


def parse_event(model: type[_Payload], event: Any) -> Any:
    """Validate a raw event dict; shape errors become InvalidInputError."""
    if event is None:
        event = {}
    if isinstance(event, BaseModel):
        event = event.model_dump(by_alias=True)
    try:
        return model.model_validate(event)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors()) or "payload"
        raise InvalidInputError(f"Invalid input: {fields}") from e
