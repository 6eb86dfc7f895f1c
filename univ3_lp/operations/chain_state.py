"""Read-only pool and balance queries consumed by the request builder"""

import logging

from ..core.connection import Web3Manager
from ..core.types import PoolState
from ..contracts.erc20 import ERC20
from ..contracts.pool import Pool

logger = logging.getLogger(__name__)


class ChainState:
    """Fresh (uncached) reads of pool state and token balances"""

    def __init__(self, manager=None):
        """
        Args:
            manager: Web3Manager instance (created read-only if None)
        """
        self.manager = manager or Web3Manager(require_signer=False)

    def _pool(self, pool_address):
        return Pool(self.manager, pool_address)

    def get_current_tick(self, pool_address):
        """Current tick from slot0"""
        return self._pool(pool_address).current_tick

    def get_tick_spacing(self, pool_address):
        """Tick spacing stored in the pool contract"""
        return self._pool(pool_address).tick_spacing

    def get_token_order(self, pool_address):
        """(token0, token1) as sorted by the pool"""
        pool = self._pool(pool_address)
        return pool.token0, pool.token1

    def get_balance(self, account, token):
        """Raw ERC20 balance of account"""
        return ERC20(self.manager, token).balance_of(self.manager.checksum(account))

    def get_pool_state(self, pool_address):
        """
        Snapshot everything the request builder needs in one pass.

        Each call hits the node; the caller should build and submit the
        request right after, since the tick keeps moving.
        """
        pool = self._pool(pool_address)
        sqrt_price_x96, tick = pool.slot0()[:2]
        state = PoolState(
            address=pool.address,
            token0=self.manager.checksum(pool.token0),
            token1=self.manager.checksum(pool.token1),
            fee=pool.fee,
            current_tick=tick,
            tick_spacing=pool.tick_spacing,
            sqrt_price_x96=sqrt_price_x96,
        )
        logger.debug("Pool %s at tick %s (spacing %s)", state.address, tick, state.tick_spacing)
        return state
