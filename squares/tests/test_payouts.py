"""
Tests for the per-round payout table.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from squares.config import get_settings
from squares.engine.payouts import ROUND_MULTIPLIERS, PayoutTable
from squares.errors import InvalidInputError
from squares.models import ROUND_ORDER, Round

SEED_PAYOUTS = {
    "Round 1": 25.0,
    "Round 2": 50.0,
    "Sweet 16": 100.0,
    "Elite 8": 200.0,
    "Final 4": 400.0,
    "Championship": 800.0,
}


@pytest.fixture
def clear_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestPayoutTable:
    def test_price_multipliers_for_ten_dollar_squares(self):
        table = PayoutTable.from_price_per_square(10)
        assert table.to_dict() == {
            "ROUND1": 25.0,
            "ROUND2": 50.0,
            "SWEET16": 100.0,
            "ELITE8": 200.0,
            "FINAL4": 350.0,
            "CHAMPIONSHIP": 500.0,
        }
        assert set(ROUND_MULTIPLIERS) == set(ROUND_ORDER)

    def test_display_name_keys(self):
        table = PayoutTable.from_dict(SEED_PAYOUTS)
        assert table.payout_for(Round.FINAL4) == 400.0
        assert table.payout_for("CHAMPIONSHIP") == 800.0
        assert table.payout_for("sweet 16") == 100.0

    def test_missing_round_rejected(self):
        partial = dict(SEED_PAYOUTS)
        del partial["Elite 8"]
        with pytest.raises(InvalidInputError, match="ELITE8"):
            PayoutTable(partial)

    @pytest.mark.parametrize("amount", [0, -5, "25", None, True])
    def test_non_positive_amount_rejected(self, amount):
        amounts = {r: 10.0 for r in ROUND_ORDER}
        amounts[Round.ROUND2] = amount
        with pytest.raises(InvalidInputError):
            PayoutTable(amounts)

    def test_unknown_round_rejected(self):
        with pytest.raises(InvalidInputError, match="Unknown round"):
            PayoutTable({**SEED_PAYOUTS, "First Four": 5.0})

    def test_unknown_round_lookup(self):
        with pytest.raises(InvalidInputError):
            PayoutTable.from_price_per_square(10).payout_for("QUARTERFINAL")

    def test_bad_price_rejected(self):
        with pytest.raises(InvalidInputError):
            PayoutTable.from_price_per_square(0)

    def test_total_pool(self):
        table = PayoutTable.from_price_per_square(10)
        # 32*25 + 16*50 + 8*100 + 4*200 + 2*350 + 1*500
        assert table.total_pool == 4400.0

    def test_duplicate_round_key_rejected(self):
        with pytest.raises(InvalidInputError, match="Duplicate payout for ROUND1"):
            PayoutTable({**SEED_PAYOUTS, "ROUND1": 999.0})

    def test_duplicate_enum_and_value_keys_rejected(self):
        amounts = {r: 10.0 for r in ROUND_ORDER}
        amounts["championship"] = 20.0
        with pytest.raises(InvalidInputError, match="CHAMPIONSHIP"):
            PayoutTable(amounts)

    def test_default_uses_configured_price(self, monkeypatch, clear_settings):
        monkeypatch.setenv("SQUARES_PRICE_PER_SQUARE", "20")
        assert PayoutTable.default().payout_for(Round.ROUND1) == 50.0

    def test_empty_mapping_falls_back_to_default(self, monkeypatch, clear_settings):
        monkeypatch.delenv("SQUARES_PRICE_PER_SQUARE", raising=False)
        assert PayoutTable.from_dict({}).payout_for(Round.CHAMPIONSHIP) == 500.0
