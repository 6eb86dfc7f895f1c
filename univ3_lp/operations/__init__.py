"""High-level operations for liquidity provisioning"""

from .chain_state import ChainState
from .liquidity import LiquidityManager
from .request import build_liquidity_request

__all__ = ["ChainState", "LiquidityManager", "build_liquidity_request"]
