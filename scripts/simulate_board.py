#!/usr/bin/env python3
"""
Offline demo: claim squares → assign grid → play bracket → resolve winners.
Run from project root: python3 scripts/simulate_board.py --seed 7 --through ELITE8
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

# Ensure project root on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from squares.config import configure_logging
from squares.engine import (
    PayoutTable,
    SeededRNG,
    assign_squares,
    build_scoring_table,
    compute_progress,
    validate_assignments,
)
from squares.models import ROUND_ORDER, BoardAssignment, Game, GameStatus, Square, parse_round


def build_bracket(rng: SeededRNG, through: int) -> list[Game]:
    """All 63 games; rounds up to index `through` are completed, the next one is half played."""
    games: list[Game] = []
    number = 1
    for i, r in enumerate(ROUND_ORDER):
        for k in range(r.expected_games):
            game = Game(id=f"game-{number}", round=r, team1=f"{r.value}-A{k}", team2=f"{r.value}-B{k}", game_number=number)
            if i <= through or (i == through + 1 and k < r.expected_games // 2):
                game.team1_score = rng.randint(45, 99)
                game.team2_score = rng.randint(45, 99)
                game.status = GameStatus.COMPLETED
            games.append(game)
            number += 1
    return games


def run(seed: int | None, squares_sold: int, users: int, through: str, price: float) -> None:
    rng = SeededRNG(seed)
    board_id = f"demo-board-{seed}"

    # 1. Claims, in purchase order
    squares = [Square(id=f"sq-{i}", user_id=f"user-{i % users}", claim_order=i + 1) for i in range(squares_sold)]

    # 2. Assignment run
    assignments = assign_squares(board_id, squares, rng=rng)
    report = validate_assignments(assignments)
    print(f"Assigned {len(assignments)} squares (valid={report.valid})")
    owners = {sq.id: sq.user_id for sq in squares}
    board = [
        BoardAssignment(
            square_id=a.square_id,
            user_id=owners[a.square_id],
            grid_position=a.grid_position,
            winning_team_number=a.winning_team_number,
            losing_team_number=a.losing_team_number,
        )
        for a in assignments
    ]

    # 3. Play the bracket and resolve every completed game
    games = build_bracket(rng, ROUND_ORDER.index(parse_round(through)))
    table = build_scoring_table(games, board, PayoutTable.from_price_per_square(price))
    progress = compute_progress(games)

    print(f"Current round: {progress.current_round.display_name if progress.current_round else 'not started'}")
    print(f"Winners: {len(table.winners)} of {sum(1 for g in games if g.status == GameStatus.COMPLETED)} completed games")
    print(f"Total paid: {table.total_paid:.2f}")
    print(json.dumps({"progress": progress.to_dict(), "winningsByUser": table.winnings_by_user()}, indent=2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a squares pool board through a tournament bracket.")
    parser.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    parser.add_argument("--squares", type=int, default=100, help="Number of squares sold (1-100)")
    parser.add_argument("--users", type=int, default=12, help="Number of distinct buyers")
    parser.add_argument("--through", default="ROUND2", help="Last fully completed round")
    parser.add_argument("--price", type=float, default=10.0, help="Price per square")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()
    configure_logging(args.log_level)
    run(seed=args.seed, squares_sold=args.squares, users=args.users, through=args.through, price=args.price)


if __name__ == "__main__":
    main()
