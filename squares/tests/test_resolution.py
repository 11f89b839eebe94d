"""
Tests for winner resolution: trailing-digit rule, cell lookup, payout by
round, validation, and the board scoring table.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from squares.engine.assignment import assign_squares
from squares.engine.payouts import PayoutTable
from squares.engine.resolution import (
    build_scoring_table,
    find_winning_square,
    resolve_winner,
    target_position,
    validate_score,
    winning_digits,
)
from squares.engine.rng import SeededRNG
from squares.errors import IncompleteGameError, InvalidInputError, InvalidScoreError
from squares.models import BoardAssignment, Game, GameStatus, Round, Square


@pytest.fixture
def payouts() -> PayoutTable:
    return PayoutTable.from_price_per_square(10)


def completed(team1: object, team2: object, round_: Round = Round.ROUND1, game_id: str = "g1", **kw) -> Game:
    return Game(id=game_id, round=round_, team1_score=team1, team2_score=team2, status=GameStatus.COMPLETED, **kw)


def position_only_board(positions: list[int]) -> list[BoardAssignment]:
    return [BoardAssignment(square_id=f"sq-{p}", user_id=f"user-{p}", grid_position=p) for p in positions]


def labelled_board(seed: int = 17) -> list[BoardAssignment]:
    squares = [Square(id=f"sq-{i}", user_id=f"user-{i}", claim_order=i) for i in range(100)]
    return [
        BoardAssignment(
            square_id=a.square_id,
            user_id=f"user-{a.square_id[3:]}",
            grid_position=a.grid_position,
            winning_team_number=a.winning_team_number,
            losing_team_number=a.losing_team_number,
        )
        for a in assign_squares("board-1", squares, rng=SeededRNG(seed))
    ]


class TestDigits:
    def test_trailing_digits_select_column_and_row(self):
        assert winning_digits(78, 74) == (8, 4)
        assert target_position(8, 4) == 48

    def test_zero_and_multiples_of_ten(self):
        assert winning_digits(0, 100) == (0, 0)
        assert winning_digits(110, 59) == (0, 9)
        assert target_position(0, 9) == 90

    def test_validate_score(self):
        assert validate_score(0) == 0
        assert validate_score(101) == 101
        for bad in (-1, -20):
            with pytest.raises(InvalidScoreError, match="negative"):
                validate_score(bad)
        for bad in (None, "78", 7.5, True):
            with pytest.raises(InvalidScoreError):
                validate_score(bad)


class TestResolveWinner:
    def test_square_on_target_cell_wins(self, payouts):
        board = position_only_board([0, 47, 48, 84, 99])
        winner = resolve_winner(completed(78, 74, Round.ROUND2), board, payouts)
        assert winner is not None
        assert winner.square_id == "sq-48"
        assert winner.user_id == "user-48"
        assert winner.grid_position == 48
        assert winner.payout_amount == payouts.payout_for(Round.ROUND2) == 50.0
        assert winner.round == Round.ROUND2
        assert (winner.team1_digit, winner.team2_digit) == (8, 4)

    def test_axes_are_not_swapped(self, payouts):
        board = position_only_board([84])
        assert resolve_winner(completed(78, 74), board, payouts) is None
        assert resolve_winner(completed(74, 78), board, payouts).square_id == "sq-84"

    def test_no_square_on_cell_is_no_winner(self, payouts):
        assert resolve_winner(completed(78, 74), position_only_board([1, 2, 3]), payouts) is None
        assert resolve_winner(completed(78, 74), [], payouts) is None

    def test_labelled_board_matches_on_digits(self, payouts):
        board = labelled_board()
        winner = resolve_winner(completed(63, 71, Round.CHAMPIONSHIP), board, payouts)
        assert winner is not None
        owner = next(a for a in board if a.square_id == winner.square_id)
        assert owner.winning_team_number == 3
        assert owner.losing_team_number == 1
        assert winner.grid_position == owner.grid_position
        assert winner.payout_amount == 500.0

    def test_full_labelled_board_always_has_a_winner(self, payouts):
        board = labelled_board(seed=99)
        winners = {
            resolve_winner(completed(t1, t2), board, payouts).square_id
            for t1 in range(10)
            for t2 in range(10)
        }
        assert len(winners) == 100

    def test_payout_follows_round_not_game_number(self, payouts):
        board = position_only_board([48])
        early = resolve_winner(completed(78, 74, Round.FINAL4, game_number=1), board, payouts)
        late = resolve_winner(completed(78, 74, Round.ROUND1, game_number=63), board, payouts)
        assert early.payout_amount == 350.0
        assert late.payout_amount == 25.0

    def test_deterministic_rerun(self, payouts):
        board = labelled_board()
        game = completed(21, 19, Round.ELITE8)
        assert resolve_winner(game, board, payouts) == resolve_winner(game, board, payouts)

    @pytest.mark.parametrize("status", [GameStatus.SCHEDULED, GameStatus.IN_PROGRESS])
    def test_non_completed_game_rejected(self, payouts, status):
        game = Game(id="g1", round=Round.ROUND1, team1_score=78, team2_score=74, status=status)
        with pytest.raises(IncompleteGameError):
            resolve_winner(game, position_only_board([48]), payouts)

    @pytest.mark.parametrize("t1, t2", [(-1, 74), (78, -4), (None, 74), ("78", 74), (78.0, 74)])
    def test_bad_scores_rejected(self, payouts, t1, t2):
        with pytest.raises(InvalidScoreError):
            resolve_winner(completed(t1, t2), position_only_board([48]), payouts)

    def test_missing_game_id_rejected(self, payouts):
        with pytest.raises(InvalidInputError):
            resolve_winner(completed(1, 2, game_id=""), [], payouts)


def test_find_winning_square_prefers_labels_over_position():
    labelled = BoardAssignment("a", "ua", grid_position=48, winning_team_number=1, losing_team_number=2)
    unlabelled = BoardAssignment("b", "ub", grid_position=48)
    assert find_winning_square(8, 4, [labelled, unlabelled]).square_id == "b"
    assert find_winning_square(1, 2, [labelled, unlabelled]).square_id == "a"


class TestScoringTable:
    def test_rows_ordered_and_totals(self, payouts):
        board = position_only_board([48, 11])
        games = [
            completed(78, 74, Round.ROUND2, game_id="g33", game_number=33),
            Game(id="g2", round=Round.ROUND1, status=GameStatus.SCHEDULED, game_number=2),
            completed(71, 61, Round.ROUND1, game_id="g1", game_number=1),
            completed(70, 60, Round.ROUND1, game_id="g3", game_number=3),
        ]
        table = build_scoring_table(games, board, payouts)
        assert [r.game.id for r in table.rows] == ["g1", "g2", "g3", "g33"]
        assert table.rows[0].winner.square_id == "sq-11"
        assert table.rows[1].winner is None
        assert table.rows[2].winner is None  # cell 0 unsold
        assert table.rows[3].winner.square_id == "sq-48"
        assert table.total_paid == 25.0 + 50.0
        assert table.winnings_by_user() == {"user-48": 50.0, "user-11": 25.0}

    def test_to_dict_shape(self, payouts):
        table = build_scoring_table([completed(78, 74, game_number=1)], position_only_board([48]), payouts)
        data = table.to_dict()
        assert data["totalPaid"] == 25.0
        assert data["games"][0]["winner"]["winnerUserId"] == "user-48"
        assert data["games"][0]["payout"] == 25.0
