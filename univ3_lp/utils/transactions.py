"""Send contract calls through the manager's signer and wait for them to be mined"""

import logging

from web3 import Web3

from .gas import GasManager
from ..core.exceptions import TransactionError

logger = logging.getLogger(__name__)


class TransactionBuilder:
    """Turns contract calls into EIP-1559 transactions for the manager's signer"""

    def __init__(self, manager, gas_manager=None):
        self.manager = manager
        self.gas_manager = gas_manager or GasManager(manager)

    def build(self, contract_func, operation_type=None, gas_buffer=1.2):
        """Transaction dict for contract_func, ready for the signer"""
        sender = self.manager.address
        tx = {
            "from": sender,
            "nonce": self.manager.get_nonce(),
            "gas": self.gas_manager.gas_for(contract_func, sender, operation_type, gas_buffer),
            "chainId": self.manager.chain_id,
            "type": 2,
        }
        tx.update(self.gas_manager.fee_params())
        return contract_func.build_transaction(tx)

    def build_and_send(self, contract_func, operation_type=None, gas_buffer=1.2):
        """
        Send one transaction and block until it is mined.

        Returns:
            The receipt

        Raises:
            GasPriceTooHighError: Base fee above the configured cap (nothing is sent)
            TransactionError: The receipt reports a revert
        """
        label = operation_type or "transaction"
        tx = self.build(contract_func, operation_type, gas_buffer)

        tx_hash = Web3.to_hex(self.manager.send(tx))
        logger.info("Sent %s tx %s", label, tx_hash)

        receipt = self.manager.w3.eth.wait_for_transaction_receipt(tx_hash)
        if receipt.status != 1:
            raise TransactionError(f"{label} reverted in {tx_hash}", tx_hash=tx_hash)
        return receipt
