"""Tick range and slippage math, no blockchain interaction"""

import pytest

from univ3_lp.core.exceptions import InvalidArgumentError
from univ3_lp.core.types import TickRange
from univ3_lp.utils.math import (
    MAX_TICK,
    calculate_slippage_amounts,
    compute_tick_range,
    price_to_tick,
    round_tick_to_spacing,
    tick_to_price,
)


class TestComputeTickRange:
    """Symmetric window around the floored spacing bucket"""

    def test_negative_tick_floors_toward_negative_infinity(self):
        """-61 // 60 is -2, so the bucket starts at -120, not -60"""
        assert compute_tick_range(-61, 60) == TickRange(-180, -60)

    def test_zero_tick(self):
        assert compute_tick_range(0, 60) == TickRange(-60, 60)

    def test_positive_tick(self):
        assert compute_tick_range(123, 60) == TickRange(60, 180)

    def test_tick_on_spacing_boundary(self):
        assert compute_tick_range(120, 60) == TickRange(60, 180)
        assert compute_tick_range(-120, 60) == TickRange(-180, -60)

    def test_negative_tick_just_below_zero(self):
        assert compute_tick_range(-1, 10) == TickRange(-20, 0)

    def test_width(self):
        assert compute_tick_range(123, 60, width=3) == TickRange(-60, 300)

    def test_alignment_and_containment(self):
        for spacing in (1, 10, 60, 200):
            for tick in range(-450, 451, 7):
                result = compute_tick_range(tick, spacing)
                base = (tick // spacing) * spacing
                assert result.lower % spacing == 0
                assert result.upper % spacing == 0
                assert result.lower < result.upper
                assert result.lower <= base <= result.upper
                assert result.lower <= tick < result.upper

    def test_idempotent(self):
        assert compute_tick_range(-887, 10, 2) == compute_tick_range(-887, 10, 2)

    @pytest.mark.parametrize("spacing", [0, -60])
    def test_rejects_non_positive_spacing(self, spacing):
        with pytest.raises(InvalidArgumentError):
            compute_tick_range(100, spacing)

    def test_rejects_zero_width(self):
        with pytest.raises(InvalidArgumentError):
            compute_tick_range(100, 60, width=0)

    @pytest.mark.parametrize(
        "tick, spacing, width",
        [
            (0, 60, 1.5),
            (7, 2.5, 1),
            (0, 60.0, 1),
            (10.5, 60, 1),
            (0, 60, True),
        ],
    )
    def test_rejects_non_integer_inputs(self, tick, spacing, width):
        with pytest.raises(InvalidArgumentError):
            compute_tick_range(tick, spacing, width)

    def test_rejects_range_past_max_tick(self):
        with pytest.raises(InvalidArgumentError):
            compute_tick_range(MAX_TICK, 200)


class TestRoundTickToSpacing:

    def test_floors(self):
        assert round_tick_to_spacing(119, 60) == 60
        assert round_tick_to_spacing(-1, 60) == -60
        assert round_tick_to_spacing(-60, 60) == -60


class TestSlippageAmounts:

    def test_half_percent(self):
        """100 USDC at 6 decimals with 50 bps -> 99.5 USDC"""
        assert calculate_slippage_amounts(100_000000, 100_000000, 50) == (99_500000, 99_500000)

    def test_rounds_down(self):
        # 999 * 9950 / 10000 = 994.005
        assert calculate_slippage_amounts(999, 1, 50) == (994, 0)

    def test_zero_and_full_slippage(self):
        assert calculate_slippage_amounts(12345, 678, 0) == (12345, 678)
        assert calculate_slippage_amounts(12345, 678, 10000) == (0, 0)

    @pytest.mark.parametrize("bps", [10001, -1])
    def test_rejects_out_of_range_bps(self, bps):
        with pytest.raises(InvalidArgumentError):
            calculate_slippage_amounts(100, 100, bps)

    def test_rejects_fractional_bps(self):
        with pytest.raises(InvalidArgumentError):
            calculate_slippage_amounts(100, 100, 0.5)

    def test_rejects_float_amount(self):
        with pytest.raises(InvalidArgumentError):
            calculate_slippage_amounts(100.0, 100, 50)

    def test_rejects_negative_amount(self):
        with pytest.raises(InvalidArgumentError):
            calculate_slippage_amounts(-1, 100, 50)

    def test_large_amounts_stay_exact(self):
        amount = 2 ** 200 + 12345
        assert calculate_slippage_amounts(amount, 0, 50)[0] == amount * 9950 // 10000


class TestPriceTicks:
    """Percentage ranges around a price land on valid ticks"""

    @pytest.mark.parametrize(
        "price, pct, decimals0, decimals1, spacing",
        [
            (3000, 0.05, 18, 6, 60),
            (3000, 0.01, 18, 6, 10),
            (1.0, 0.001, 6, 6, 1),
        ],
    )
    def test_percentage_range_to_ticks(self, price, pct, decimals0, decimals1, spacing):
        tick_lower = round_tick_to_spacing(price_to_tick(price * (1 - pct), decimals0, decimals1), spacing)
        tick_upper = round_tick_to_spacing(price_to_tick(price * (1 + pct), decimals0, decimals1), spacing)

        assert tick_lower < tick_upper
        assert tick_lower % spacing == 0 and tick_upper % spacing == 0
        assert tick_to_price(tick_lower, decimals0, decimals1) <= price * (1 - pct) * 1.0001
        assert tick_to_price(tick_upper, decimals0, decimals1) <= price * (1 + pct) * 1.0001

    def test_rejects_non_positive_price(self):
        with pytest.raises(InvalidArgumentError):
            price_to_tick(0, 18, 6)
