"""Uniswap V3 Pool contract wrapper"""

from ..core.exceptions import PoolError
from ..utils.math import sqrt_price_x96_to_price


class Pool:
    """Wrapper for Uniswap V3 Pool reads"""

    def __init__(self, manager, address):
        """
        Args:
            manager: Web3Manager instance
            address: Pool contract address
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(address, "pool")

    def slot0(self):
        """
        Get slot0 data (current state), read fresh on every call.
        Returns: (sqrtPriceX96, tick, observationIndex, ...)
        """
        try:
            return self.contract.functions.slot0().call()
        except Exception as e:
            raise PoolError(f"Could not read slot0 of {self.address}: {e}") from e

    @property
    def sqrt_price_x96(self):
        """Current sqrt price"""
        return self.slot0()[0]

    @property
    def current_tick(self):
        """Current tick"""
        return self.slot0()[1]

    @property
    def fee(self):
        """Pool fee tier"""
        return self.contract.functions.fee().call()

    @property
    def tick_spacing(self):
        """Tick spacing stored in the pool"""
        return self.contract.functions.tickSpacing().call()

    @property
    def token0(self):
        """Token0 address"""
        return self.contract.functions.token0().call()

    @property
    def token1(self):
        """Token1 address"""
        return self.contract.functions.token1().call()

    @property
    def liquidity(self):
        """Current in-range pool liquidity"""
        return self.contract.functions.liquidity().call()

    def get_price(self, decimals0, decimals1):
        """Human-readable token1/token0 price from the current sqrtPriceX96"""
        return sqrt_price_x96_to_price(self.sqrt_price_x96, decimals0, decimals1)
