"""
Per-round payout table. Fixed per board when the board is created and read-only
afterwards: a game's payout is looked up by its Round, never by game number.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from squares.config import get_settings
from squares.errors import InvalidInputError
from squares.models import ROUND_ORDER, Round, parse_round

# Payout per game as a multiple of the square price ($10 squares: $25 ... $500)
ROUND_MULTIPLIERS: dict[Round, float] = {
    Round.ROUND1: 2.5,
    Round.ROUND2: 5,
    Round.SWEET16: 10,
    Round.ELITE8: 20,
    Round.FINAL4: 35,
    Round.CHAMPIONSHIP: 50,
}


@dataclass(frozen=True)
class PayoutTable:
    """Positive payout amount for every round. Each round may be keyed only once."""
    amounts: Mapping[Round, float]

    def __post_init__(self) -> None:
        parsed: dict[Round, float] = {}
        for key, amount in dict(self.amounts).items():
            r = parse_round(key)
            if r in parsed:
                raise InvalidInputError(f"Duplicate payout for {r.value}")
            if isinstance(amount, bool) or not isinstance(amount, (int, float)) or amount <= 0:
                raise InvalidInputError(f"Payout for {r.value} must be a positive number, got {amount!r}")
            parsed[r] = float(amount)
        missing = [r.value for r in ROUND_ORDER if r not in parsed]
        if missing:
            raise InvalidInputError(f"Payout table is missing rounds: {', '.join(missing)}")
        object.__setattr__(self, "amounts", parsed)

    @classmethod
    def from_price_per_square(cls, price: float) -> PayoutTable:
        if isinstance(price, bool) or not isinstance(price, (int, float)) or price <= 0:
            raise InvalidInputError(f"Price per square must be positive, got {price!r}")
        return cls({r: price * m for r, m in ROUND_MULTIPLIERS.items()})

    @classmethod
    def default(cls) -> PayoutTable:
        return cls.from_price_per_square(get_settings().price_per_square)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> PayoutTable:
        """Round keys may be enum values or display names; empty => default table."""
        if not data:
            return cls.default()
        return cls(dict(data))

    def payout_for(self, round_: Round | str) -> float:
        return self.amounts[parse_round(round_)]

    @property
    def total_pool(self) -> float:
        """Total paid out if every game of a full bracket has a winner."""
        return sum(amount * r.expected_games for r, amount in self.amounts.items())

    def to_dict(self) -> dict[str, float]:
        return {r.value: self.amounts[r] for r in ROUND_ORDER}
