"""
Assignment engine: binds every claimed square of a board to a unique grid
position and to the row/column digit labels of that board.

One run draws three independent Fisher-Yates shuffles (positions 0-99,
column digits 0-9, row digits 0-9) into a BoardShuffle. Squares are walked in
claim order; square k takes positions[k], and its labels are read from the
shared digit sequences by column and row, so every square in a column carries
the same winning digit and every square in a row the same losing digit.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, MutableSequence, Sequence

from squares.errors import InvalidInputError, TooManySquaresError
from squares.models import GRID_CELLS, GRID_SIZE, Assignment, Square

from .rng import RandomSource, SeededRNG

logger = logging.getLogger(__name__)

MAX_SQUARES = GRID_CELLS
INVALID_INPUT_MESSAGE = "Invalid input: boardId and squares are required"
TOO_MANY_SQUARES_MESSAGE = f"Cannot assign more than {MAX_SQUARES} squares"


def fisher_yates(values: MutableSequence[Any], rng: RandomSource) -> MutableSequence[Any]:
    """
    Unbiased in-place shuffle. i runs from the last index down to 1 and swaps
    values[i] with values[j], j uniform in [0, i]. Returns the same sequence.
    """
    for i in range(len(values) - 1, 0, -1):
        j = int(rng.random() * (i + 1))
        values[i], values[j] = values[j], values[i]
    return values


@dataclass(frozen=True)
class BoardShuffle:
    """
    The shuffled sequences of one assignment run.
    winning_digits[col] labels a column, losing_digits[row] labels a row.
    """
    positions: tuple[int, ...]
    winning_digits: tuple[int, ...]
    losing_digits: tuple[int, ...]

    @classmethod
    def draw(cls, rng: RandomSource) -> BoardShuffle:
        positions = fisher_yates(list(range(GRID_CELLS)), rng)
        winning = fisher_yates(list(range(GRID_SIZE)), rng)
        losing = fisher_yates(list(range(GRID_SIZE)), rng)
        return cls(tuple(positions), tuple(winning), tuple(losing))

    @property
    def column_labels(self) -> tuple[int, ...]:
        return self.winning_digits

    @property
    def row_labels(self) -> tuple[int, ...]:
        return self.losing_digits

    def assign(self, square: Square, index: int) -> Assignment:
        """Assignment for the square at position index of the claim-ordered walk."""
        pos = self.positions[index]
        row, col = divmod(pos, GRID_SIZE)
        return Assignment(
            square_id=square.id,
            grid_position=pos,
            winning_team_number=self.winning_digits[col],
            losing_team_number=self.losing_digits[row],
        )


def _validate_squares(board_id: str | None, squares: Sequence[Square] | None) -> None:
    if not board_id or not squares:
        raise InvalidInputError(INVALID_INPUT_MESSAGE)
    if len(squares) > MAX_SQUARES:
        raise TooManySquaresError(TOO_MANY_SQUARES_MESSAGE)
    seen: set[str] = set()
    for i, sq in enumerate(squares):
        if not getattr(sq, "id", None):
            raise InvalidInputError(f"Square at index {i} is missing an id")
        claim_order = getattr(sq, "claim_order", None)
        if isinstance(claim_order, bool) or not isinstance(claim_order, int):
            raise InvalidInputError(f"Square {sq.id} has no integer claim order")
        if sq.id in seen:
            raise InvalidInputError(f"Duplicate square id: {sq.id}")
        seen.add(sq.id)


def sort_by_claim_order(squares: Sequence[Square]) -> list[Square]:
    """Ascending claim order; ties keep their input order."""
    return sorted(squares, key=lambda s: s.claim_order)


def assign_squares(
    board_id: str | None,
    squares: Sequence[Square] | None,
    rng: RandomSource | None = None,
) -> list[Assignment]:
    """
    Run the assignment for one board. Returns one Assignment per square in
    claim order. Raises InvalidInputError or TooManySquaresError before any
    randomness is drawn; no partial result is ever returned.
    """
    _validate_squares(board_id, squares)
    rng = rng if rng is not None else SeededRNG()
    logger.info("Assigning %d squares for board %s", len(squares), board_id)

    ordered = sort_by_claim_order(squares)
    shuffle = BoardShuffle.draw(rng)
    assignments = [shuffle.assign(sq, k) for k, sq in enumerate(ordered)]

    logger.debug(
        "Board %s labels: columns=%s rows=%s", board_id, shuffle.column_labels, shuffle.row_labels
    )
    logger.info("Generated %d assignments for board %s", len(assignments), board_id)
    return assignments


# ---------- Post-run validation ----------


@dataclass
class AssignmentReport:
    """Result of checking a board's assignment set."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    stats: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"valid": self.valid, "errors": list(self.errors)}
        if self.stats is not None:
            d["stats"] = self.stats
        return d


def validate_assignments(assignments: Sequence[Assignment]) -> AssignmentReport:
    """
    Check an assignment set: unique positions in [0, 99], labels in [0, 9],
    one winning digit per column and one losing digit per row.
    """
    errors: list[str] = []
    positions = [a.grid_position for a in assignments]
    unique = set(positions)
    if len(unique) != len(positions):
        errors.append("Found duplicate grid positions")
    out_of_range = [p for p in positions if not 0 <= p < GRID_CELLS]
    if out_of_range:
        errors.append(f"Found {len(out_of_range)} grid positions outside valid range (0-99)")

    winning = [a.winning_team_number for a in assignments]
    losing = [a.losing_team_number for a in assignments]
    bad_winning = [n for n in winning if not 0 <= n < GRID_SIZE]
    bad_losing = [n for n in losing if not 0 <= n < GRID_SIZE]
    if bad_winning:
        errors.append(f"Found {len(bad_winning)} winning numbers outside valid range (0-9)")
    if bad_losing:
        errors.append(f"Found {len(bad_losing)} losing numbers outside valid range (0-9)")

    column_labels: dict[int, set[int]] = {}
    row_labels: dict[int, set[int]] = {}
    for a in assignments:
        column_labels.setdefault(a.col, set()).add(a.winning_team_number)
        row_labels.setdefault(a.row, set()).add(a.losing_team_number)
    if any(len(v) > 1 for v in column_labels.values()):
        errors.append("Columns with more than one winning number")
    if any(len(v) > 1 for v in row_labels.values()):
        errors.append("Rows with more than one losing number")
    # Distinct columns must carry distinct digits (a permutation of 0-9)
    col_digits = [next(iter(v)) for v in column_labels.values() if len(v) == 1]
    row_digits = [next(iter(v)) for v in row_labels.values() if len(v) == 1]
    if len(set(col_digits)) != len(col_digits):
        errors.append("Winning number reused across columns")
    if len(set(row_digits)) != len(row_digits):
        errors.append("Losing number reused across rows")

    if errors:
        return AssignmentReport(valid=False, errors=errors)
    return AssignmentReport(
        valid=True,
        stats={
            "assignedSquares": len(positions),
            "uniquePositions": len(unique),
            "winningNumberRange": [min(winning), max(winning)] if winning else None,
            "losingNumberRange": [min(losing), max(losing)] if losing else None,
        },
    )
