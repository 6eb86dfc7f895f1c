"""Uniswap V3 NonfungiblePositionManager contract wrapper"""

import logging

from web3 import Web3
from web3.logs import DISCARD
from ..core.config import Config
from ..core.exceptions import PositionError
from ..utils.gas import GasManager
from ..utils.transactions import TransactionBuilder

logger = logging.getLogger(__name__)


class NFPM:
    """Wrapper for NonfungiblePositionManager interactions"""

    def __init__(self, manager, maxFeePerGas=None, maxPriorityFeePerGas=None, address=None):
        """
        Args:
            manager: Web3Manager instance
            maxFeePerGas: Maximum fee per gas in Gwei (None = use config/no limit)
            maxPriorityFeePerGas: Priority fee in Gwei (None = use config)
            address: Override the configured NFPM address
        """
        self.manager = manager
        self.config = Config()
        self.address = manager.checksum(address or self.config.nfpm_address(manager.chain_id))
        self.contract = manager.get_contract(self.address, "nfpm")

        self.gas_manager = GasManager(manager, maxFeePerGas=maxFeePerGas, maxPriorityFeePerGas=maxPriorityFeePerGas)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    def get_position(self, token_id):
        """
        Get position data by token ID.
        Returns dict with position fields.
        """
        try:
            pos = self.contract.functions.positions(token_id).call()
        except Exception as e:
            raise PositionError(f"Position {token_id} not found: {e}") from e

        return {
            "token_id": token_id,
            "nonce": pos[0],
            "operator": pos[1],
            "token0": pos[2],
            "token1": pos[3],
            "fee": pos[4],
            "tick_lower": pos[5],
            "tick_upper": pos[6],
            "liquidity": pos[7],
            "fee_growth_inside_0_last": pos[8],
            "fee_growth_inside_1_last": pos[9],
            "tokens_owed_0": pos[10],
            "tokens_owed_1": pos[11],
        }

    def mint(self, request, gas_buffer=1.2):
        """
        Mint new liquidity position.

        Args:
            request: LiquidityRequest
            gas_buffer: multiplier for gas estimate

        Returns:
            Dict with receipt, tx_hash, token_id, liquidity, amount0, amount1
            (the last four from the IncreaseLiquidity event, None if absent)

        Raises:
            TransactionError: If the mint reverts
        """
        params = list(request.to_mint_params())
        params[0] = Web3.to_checksum_address(params[0])
        params[1] = Web3.to_checksum_address(params[1])
        params[9] = Web3.to_checksum_address(params[9])

        contract_func = self.contract.functions.mint(tuple(params))
        receipt = self.tx_builder.build_and_send(
            contract_func,
            operation_type="mint",
            gas_buffer=gas_buffer
        )

        result = {
            "receipt": receipt,
            "tx_hash": Web3.to_hex(receipt.transactionHash),
            "token_id": None,
            "liquidity": None,
            "amount0": None,
            "amount1": None,
        }

        events = self.contract.events.IncreaseLiquidity().process_receipt(receipt, errors=DISCARD)
        if events:
            args = events[0]["args"]
            result.update(
                token_id=args["tokenId"],
                liquidity=args["liquidity"],
                amount0=args["amount0"],
                amount1=args["amount1"],
            )
        else:
            logger.warning("Mint %s emitted no IncreaseLiquidity event", result["tx_hash"])

        return result
