"""
Tournament progress: per-round game counts and the current round.
Pure aggregation over a board's games.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from squares.models import ROUND_ORDER, Game, GameStatus, Round, RoundStats


@dataclass
class TournamentProgress:
    """
    current_round is None when the tournament has not started.
    Rounds without games are neither completed nor upcoming.
    """
    current_round: Round | None
    completed_rounds: list[Round] = field(default_factory=list)
    upcoming_rounds: list[Round] = field(default_factory=list)
    round_stats: dict[Round, RoundStats] = field(default_factory=dict)

    @property
    def started(self) -> bool:
        return self.current_round is not None

    def completion_percent(self, round_: Round | None = None) -> int:
        """Completed share of a round's games (current round by default), rounded."""
        r = round_ if round_ is not None else self.current_round
        if r is None:
            return 0
        stats = self.round_stats.get(r)
        if stats is None or stats.total == 0:
            return 0
        return round(stats.completed / stats.total * 100)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentRound": self.current_round.value if self.current_round else None,
            "completedRounds": [r.value for r in self.completed_rounds],
            "upcomingRounds": [r.value for r in self.upcoming_rounds],
            "roundStats": {r.value: s.to_dict() for r, s in self.round_stats.items()},
        }


def count_by_round(games: Iterable[Game]) -> dict[Round, RoundStats]:
    """RoundStats for every round in tournament order; zeros where no games exist."""
    stats = {r: RoundStats() for r in ROUND_ORDER}
    for game in games:
        s = stats[game.round]
        s.total += 1
        if game.status == GameStatus.COMPLETED:
            s.completed += 1
        elif game.status == GameStatus.IN_PROGRESS:
            s.in_progress += 1
        else:
            s.scheduled += 1
    return stats


def compute_progress(games: Iterable[Game]) -> TournamentProgress:
    """
    Current round: earliest round with games and at least one non-completed
    game; the last round with games once everything is completed; None while
    no game has left SCHEDULED.
    """
    stats = count_by_round(games)
    played = [r for r in ROUND_ORDER if stats[r].total > 0]
    begun = any(stats[r].completed or stats[r].in_progress for r in played)
    completed = [r for r in played if stats[r].is_complete]

    if not begun:
        return TournamentProgress(
            current_round=None,
            completed_rounds=completed,
            upcoming_rounds=[r for r in played if r not in completed],
            round_stats=stats,
        )

    current: Round | None = None
    upcoming: list[Round] = []
    for r in played:
        if stats[r].is_complete:
            continue
        if current is None:
            current = r
        else:
            upcoming.append(r)
    if current is None:
        current = played[-1]
    return TournamentProgress(
        current_round=current,
        completed_rounds=completed,
        upcoming_rounds=upcoming,
        round_stats=stats,
    )
