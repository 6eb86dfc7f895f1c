"""
univ3-lp - Mint Uniswap V3 positions around the current pool price
"""

from .core.connection import Web3Manager
from .core.config import Config
from .core.exceptions import AMMError, ConfigError, ConnectionError, TransactionError, InvalidArgumentError
from .core.types import PoolState, TickRange, LiquidityRequest, ProvisionResult
from .utils.math import compute_tick_range
from .operations.request import build_liquidity_request

__version__ = "0.1.0"
__all__ = [
    "Web3Manager",
    "Config",
    "AMMError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "InvalidArgumentError",
    "PoolState",
    "TickRange",
    "LiquidityRequest",
    "ProvisionResult",
    "compute_tick_range",
    "build_liquidity_request",
]
