"""Tick and amount math for Uniswap V3 positions"""

import math

from ..core.exceptions import InvalidArgumentError
from ..core.types import TickRange, MAX_UINT256

Q96 = 2 ** 96
BPS_DENOMINATOR = 10000

# TickMath.MIN_TICK / MAX_TICK
MIN_TICK = -887272
MAX_TICK = 887272


def _require_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(f"{name} must be an integer, got {value!r}")


def tick_to_price(tick, decimals0, decimals1):
    """
    Convert tick to human-readable price.

    Args:
        tick: Uniswap V3 tick value
        decimals0: Token0 decimals
        decimals1: Token1 decimals

    Returns:
        Price as token1/token0
    """
    return (1.0001 ** tick) * (10 ** decimals0) / (10 ** decimals1)


def price_to_tick(price, decimals0, decimals1):
    """
    Convert price to the tick at or below it.

    Args:
        price: Price as token1/token0
        decimals0: Token0 decimals
        decimals1: Token1 decimals

    Returns:
        Tick value (not rounded to spacing)
    """
    if price <= 0:
        raise InvalidArgumentError(f"Price must be positive, got {price}")
    adjusted_price = price * (10 ** decimals1) / (10 ** decimals0)
    return math.floor(math.log(adjusted_price) / math.log(1.0001))


def sqrt_price_x96_to_price(sqrt_price_x96, decimals0, decimals1):
    """Convert sqrtPriceX96 to human-readable price"""
    price = (sqrt_price_x96 / Q96) ** 2
    return price * (10 ** decimals0) / (10 ** decimals1)


def round_tick_to_spacing(tick, spacing):
    """
    Align tick down to the spacing grid.

    Floor division rounds toward negative infinity, so -61 with spacing 60
    becomes -120, not -60.
    """
    _require_int("tick", tick)
    _require_int("tick_spacing", spacing)
    if spacing <= 0:
        raise InvalidArgumentError(f"tick_spacing must be positive, got {spacing}")
    return (tick // spacing) * spacing


def compute_tick_range(current_tick, tick_spacing, width=1):
    """
    Symmetric tick window around the spacing bucket holding current_tick.

    Args:
        current_tick: Pool tick from slot0
        tick_spacing: Tick spacing of the pool (> 0)
        width: Spacing units on each side of the bucket start (>= 1)

    Returns:
        TickRange with lower = base - width * spacing and
        upper = base + width * spacing, where base is current_tick floored
        to the spacing grid.

    Examples:
        compute_tick_range(123, 60)  -> TickRange(60, 180)
        compute_tick_range(-61, 60)  -> TickRange(-180, -60)
    """
    _require_int("width", width)
    if width < 1:
        raise InvalidArgumentError(f"width must be >= 1, got {width}")

    base = round_tick_to_spacing(current_tick, tick_spacing)
    lower = base - width * tick_spacing
    upper = base + width * tick_spacing

    if lower < MIN_TICK or upper > MAX_TICK:
        raise InvalidArgumentError(
            f"Tick range [{lower}, {upper}] exceeds [{MIN_TICK}, {MAX_TICK}]"
        )

    return TickRange(lower=lower, upper=upper)


def apply_slippage(amount, slippage_bps):
    """
    Minimum acceptable amount for a desired amount.

    Integer floor division: the minimum is never rounded up, so the provider
    gets at most one raw unit less protection than the exact ratio.
    """
    _require_int("slippage_bps", slippage_bps)
    if not 0 <= slippage_bps <= BPS_DENOMINATOR:
        raise InvalidArgumentError(
            f"slippage_bps must be within [0, {BPS_DENOMINATOR}], got {slippage_bps}"
        )
    _require_int("amount", amount)
    if amount < 0 or amount > MAX_UINT256:
        raise InvalidArgumentError(f"Amount out of uint256 range: {amount}")
    return amount * (BPS_DENOMINATOR - slippage_bps) // BPS_DENOMINATOR


def calculate_slippage_amounts(amount0, amount1, slippage_bps):
    """
    Calculate minimum amounts with slippage protection.

    Args:
        amount0: Desired amount0 in raw units
        amount1: Desired amount1 in raw units
        slippage_bps: Slippage in basis points (50 = 0.5%)

    Returns:
        (amount0_min, amount1_min) in raw units
    """
    return apply_slippage(amount0, slippage_bps), apply_slippage(amount1, slippage_bps)
