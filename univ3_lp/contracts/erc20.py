"""ERC20 token contract wrapper"""

import logging
from decimal import Decimal

from ..core.exceptions import InvalidArgumentError
from ..utils.gas import GasManager
from ..utils.transactions import TransactionBuilder

logger = logging.getLogger(__name__)


class ERC20:
    """Wrapper for ERC20 token interactions"""

    def __init__(self, manager, address, maxFeePerGas=None, maxPriorityFeePerGas=None):
        """
        Args:
            manager: Web3Manager instance
            address: Token contract address
            maxFeePerGas: Maximum fee per gas in Gwei (None = use config/no limit)
            maxPriorityFeePerGas: Priority fee in Gwei (None = use config)
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(address, "erc20")
        self._info = None

        self.gas_manager = GasManager(manager, maxFeePerGas=maxFeePerGas, maxPriorityFeePerGas=maxPriorityFeePerGas)
        self.tx_builder = TransactionBuilder(manager, self.gas_manager)

    @property
    def info(self):
        """Get token info (cached)"""
        if self._info is None:
            self._info = {
                "address": self.address,
                "symbol": self._get_text("symbol", "UNKNOWN"),
                "name": self._get_text("name", "Unknown Token"),
                "decimals": self.contract.functions.decimals().call(),
            }
        return self._info

    def _get_text(self, field, default):
        """Read symbol()/name(), tolerating tokens that return bytes32 (MKR, SAI)"""
        try:
            raw = getattr(self.contract.functions, field)().call()
        except Exception as e:
            logger.debug("%s() failed on %s: %s", field, self.address, e)
            return default
        if isinstance(raw, bytes):
            return raw.rstrip(b'\x00').decode('utf-8')
        return str(raw)

    @property
    def symbol(self):
        return self.info["symbol"]

    @property
    def name(self):
        return self.info["name"]

    @property
    def decimals(self):
        return self.info["decimals"]

    def balance_of(self, address=None):
        """Get token balance in raw units"""
        addr = address or self.manager.address
        return self.contract.functions.balanceOf(addr).call()

    def allowance(self, spender, owner=None):
        """Get allowance for spender"""
        owner_addr = owner or self.manager.address
        return self.contract.functions.allowance(owner_addr, spender).call()

    def to_wei(self, amount):
        """Convert human amount to raw units (exact for decimal strings)"""
        raw = Decimal(str(amount)) * (Decimal(10) ** self.decimals)
        if raw != raw.to_integral_value():
            raise InvalidArgumentError(
                f"{amount} {self.symbol} has more than {self.decimals} decimals"
            )
        return int(raw)

    def from_wei(self, amount):
        """Convert raw units to human amount"""
        return Decimal(amount) / (Decimal(10) ** self.decimals)

    def _send_approve(self, spender, amount_wei):
        contract_func = self.contract.functions.approve(spender, amount_wei)
        return self.tx_builder.build_and_send(contract_func, operation_type="approve")

    def approve(self, spender, amount_wei, reset=False):
        """
        Approve spender to spend tokens.

        Args:
            spender: Address allowed to pull tokens
            amount_wei: Allowance in raw units
            reset: Zero a non-zero allowance first (USDT rejects
                changing one non-zero allowance to another)

        Returns:
            Receipt of the final approve, or None if the allowance already
            covers amount_wei and reset is False
        """
        current_allowance = self.allowance(spender)
        if not reset and current_allowance >= amount_wei:
            return None

        if reset and current_allowance > 0:
            logger.info("Resetting %s allowance for %s", self.symbol, spender)
            self._send_approve(spender, 0)

        logger.info("Approving %s %s for %s", amount_wei, self.symbol, spender)
        return self._send_approve(spender, amount_wei)
