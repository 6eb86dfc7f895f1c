"""Build mint requests from a pool snapshot"""

import time

from ..core.exceptions import InvalidArgumentError
from ..core.types import LiquidityRequest
from ..utils.math import compute_tick_range, calculate_slippage_amounts

DEFAULT_SLIPPAGE_BPS = 50
DEFAULT_DEADLINE_SECONDS = 60


def build_liquidity_request(
    pool,
    amount0_desired,
    amount1_desired,
    slippage_bps,
    recipient,
    deadline_offset_seconds,
    width=1,
    now=None,
):
    """
    Assemble NFPM mint parameters for a position around the pool's current tick.

    No RPC calls are made; the same inputs (and the same `now`) always give
    the same request.

    Args:
        pool: PoolState read immediately beforehand
        amount0_desired: Raw units of pool.token0 to deposit
        amount1_desired: Raw units of pool.token1 to deposit
        slippage_bps: Tolerated shortfall in basis points (0-10000)
        recipient: Address that receives the position NFT
        deadline_offset_seconds: Whole seconds from `now` until the mint expires (>= 1)
        width: Spacing units on each side of the current bucket
        now: Unix timestamp to offset from (defaults to time.time())

    Returns:
        LiquidityRequest

    Raises:
        InvalidArgumentError: On a deadline offset that is not an integer
            >= 1, a slippage outside [0, 10000] or any invalid tick input
    """
    if (
        isinstance(deadline_offset_seconds, bool)
        or not isinstance(deadline_offset_seconds, int)
        or deadline_offset_seconds < 1
    ):
        raise InvalidArgumentError(
            f"deadline_offset_seconds must be a whole number of seconds >= 1, "
            f"got {deadline_offset_seconds!r}"
        )

    tick_range = compute_tick_range(pool.current_tick, pool.tick_spacing, width)
    amount0_min, amount1_min = calculate_slippage_amounts(
        amount0_desired, amount1_desired, slippage_bps
    )

    if now is None:
        now = time.time()
    deadline = int(now) + deadline_offset_seconds

    return LiquidityRequest(
        token0=pool.token0,
        token1=pool.token1,
        fee=pool.fee,
        tick_range=tick_range,
        amount0_desired=amount0_desired,
        amount1_desired=amount1_desired,
        amount0_min=amount0_min,
        amount1_min=amount1_min,
        recipient=recipient,
        deadline=deadline,
    )
