from unittest.mock import MagicMock

import pytest

from univ3_lp.core.types import PoolState

from tests.fakes import POOL, USDC, USDT, WHALE


@pytest.fixture
def manager():
    """Web3Manager stand-in: checksum is identity, signer is the whale"""
    m = MagicMock()
    m.address = WHALE
    m.chain_id = 1
    m.checksum.side_effect = lambda a: a
    return m


@pytest.fixture
def pool_state():
    return PoolState(
        address=POOL,
        token0=USDC,
        token1=USDT,
        fee=3000,
        current_tick=-61,
        tick_spacing=60,
    )
