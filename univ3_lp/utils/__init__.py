"""Utility functions for tick math and transactions"""

from .math import (
    tick_to_price,
    price_to_tick,
    round_tick_to_spacing,
    compute_tick_range,
    calculate_slippage_amounts,
)
from .transactions import TransactionBuilder

__all__ = [
    "tick_to_price",
    "price_to_tick",
    "round_tick_to_spacing",
    "compute_tick_range",
    "calculate_slippage_amounts",
    "TransactionBuilder",
]
