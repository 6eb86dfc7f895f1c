"""Liquidity provisioning: read pool, build request, approve, mint"""

import logging
import time

from web3.exceptions import Web3Exception

from ..core.connection import Web3Manager
from ..core.config import Config
from ..core.exceptions import (
    AMMError,
    InsufficientBalanceError,
    InvalidArgumentError,
    StalePoolStateError,
)
from ..core.types import ProvisionResult
from ..contracts.nfpm import NFPM
from ..contracts.erc20 import ERC20
from .chain_state import ChainState
from .request import build_liquidity_request, DEFAULT_SLIPPAGE_BPS, DEFAULT_DEADLINE_SECONDS

logger = logging.getLogger(__name__)

# Errors a node or contract can raise while approving or minting
TX_ERRORS = (AMMError, Web3Exception, ValueError)


class LiquidityManager:
    """Mint Uniswap V3 positions around the current pool price"""

    def __init__(self, manager=None, maxFeePerGas=None, maxPriorityFeePerGas=None, nfpm=None):
        """
        Args:
            manager: Web3Manager instance (created with signer if None)
            maxFeePerGas: Maximum fee per gas in Gwei (None = use config/no limit)
            maxPriorityFeePerGas: Priority fee in Gwei (None = use config)
            nfpm: NFPM wrapper (built from config if None)
        """
        self.manager = manager or Web3Manager(require_signer=True)
        self.config = Config()
        self.maxFeePerGas = maxFeePerGas
        self.maxPriorityFeePerGas = maxPriorityFeePerGas
        self.nfpm = nfpm or NFPM(self.manager, maxFeePerGas=maxFeePerGas, maxPriorityFeePerGas=maxPriorityFeePerGas)
        self.chain_state = ChainState(self.manager)

    def _token(self, address):
        return ERC20(
            self.manager,
            address,
            maxFeePerGas=self.maxFeePerGas,
            maxPriorityFeePerGas=self.maxPriorityFeePerGas,
        )

    def prepare(
        self,
        pool,
        amount0,
        amount1,
        slippage_bps=DEFAULT_SLIPPAGE_BPS,
        width=1,
        deadline_offset=DEFAULT_DEADLINE_SECONDS,
        recipient=None,
    ):
        """
        Read the pool and build a mint request.

        Args:
            pool: Configured pool name (e.g. "USDC_USDT_3000") or address
            amount0: Human amount of the pool's token0
            amount1: Human amount of the pool's token1
            slippage_bps: Slippage tolerance in basis points
            width: Tick spacings on each side of the current bucket
            deadline_offset: Seconds until the mint expires
            recipient: Position owner (signer address if None)

        Returns:
            (PoolState, LiquidityRequest)
        """
        pool_address = self.config.get_pool_address(pool)
        state = self.chain_state.get_pool_state(pool_address)

        amount0_wei = self._token(state.token0).to_wei(amount0)
        amount1_wei = self._token(state.token1).to_wei(amount1)

        if slippage_bps == 10000:
            logger.warning(
                "slippage_bps=10000 sets both minimums to zero; the mint has no slippage protection"
            )

        request = build_liquidity_request(
            state,
            amount0_wei,
            amount1_wei,
            slippage_bps,
            recipient or self.manager.address,
            deadline_offset,
            width=width,
        )
        logger.info(
            "Prepared mint on %s: ticks [%s, %s] around %s",
            state.address, request.tick_lower, request.tick_upper, state.current_tick,
        )
        return state, request

    def check_balances(self, request):
        """Raise InsufficientBalanceError if the signer can't cover the desired amounts"""
        for token_address, needed in (
            (request.token0, request.amount0_desired),
            (request.token1, request.amount1_desired),
        ):
            token = self._token(token_address)
            balance = token.balance_of()
            if balance < needed:
                raise InsufficientBalanceError(
                    f"Insufficient {token.symbol} balance: have {token.from_wei(balance)}, "
                    f"need {token.from_wei(needed)}"
                )

    def check_pool_state(self, request, pool_address, strict=False):
        """
        Re-read the pool tick and compare it with the request's range.

        A moved tick is not an error by itself: the amount minimums bound
        what the mint can take. With strict=True it raises instead of warning.

        Returns:
            The current tick
        """
        tick = self.chain_state.get_current_tick(pool_address)
        if not request.tick_range.contains(tick):
            message = (
                f"Pool tick {tick} left range [{request.tick_lower}, {request.tick_upper}) "
                f"since the request was built"
            )
            if strict:
                raise StalePoolStateError(message, current_tick=tick, tick_range=request.tick_range)
            logger.warning(message)
        return tick

    def provision(self, request):
        """
        Approve both tokens and mint the position.

        Approvals are reset to zero then set to the desired amount, one
        confirmed transaction at a time, before mint is sent.

        Returns:
            ProvisionResult; chain-side failures are reported in it, not raised

        Raises:
            InvalidArgumentError: If the request deadline has already passed
        """
        if request.deadline <= int(time.time()):
            raise InvalidArgumentError(f"Request deadline {request.deadline} has passed")

        try:
            for token_address, amount in (
                (request.token0, request.amount0_desired),
                (request.token1, request.amount1_desired),
            ):
                self._token(token_address).approve(self.nfpm.address, amount, reset=True)

            minted = self.nfpm.mint(request)
        except TX_ERRORS as e:
            logger.error("Liquidity provisioning failed: %s", e, exc_info=True)
            return ProvisionResult.failed(
                str(e),
                error_data=getattr(e, "data", None),
                tx_hash=getattr(e, "tx_hash", None),
            )

        logger.info(
            "Minted position %s (liquidity %s) in %s",
            minted["token_id"], minted["liquidity"], minted["tx_hash"],
        )
        return ProvisionResult(
            success=True,
            position_id=minted["token_id"],
            liquidity=minted["liquidity"],
            amount0=minted["amount0"],
            amount1=minted["amount1"],
            tx_hash=minted["tx_hash"],
        )

    def add_liquidity(
        self,
        pool,
        amount0,
        amount1,
        slippage_bps=DEFAULT_SLIPPAGE_BPS,
        width=1,
        deadline_offset=DEFAULT_DEADLINE_SECONDS,
        recipient=None,
    ):
        """
        Mint a position of `width` spacings each side of the current tick.

        Args:
            pool: Configured pool name or address
            amount0: Human amount of token0
            amount1: Human amount of token1
            slippage_bps: Slippage tolerance in basis points
            width: Tick spacings on each side of the current bucket
            deadline_offset: Seconds until the mint expires
            recipient: Position owner (signer address if None)

        Returns:
            Dict with the request, the pool state and the ProvisionResult
        """
        state, request = self.prepare(
            pool, amount0, amount1,
            slippage_bps=slippage_bps,
            width=width,
            deadline_offset=deadline_offset,
            recipient=recipient,
        )
        self.check_balances(request)
        self.check_pool_state(request, state.address)

        result = self.provision(request)
        return {
            "pool": state,
            "request": request,
            "result": result,
        }
