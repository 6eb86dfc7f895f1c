"""Token balance query operations"""

from .connection import Web3Manager
from .config import Config
from ..contracts.erc20 import ERC20


class BalanceQuery:
    """Query token balances for an address"""

    def __init__(self, manager=None):
        """
        Args:
            manager: Web3Manager instance (created if None)
        """
        self.manager = manager or Web3Manager(require_signer=False)
        self.config = Config()

    def get_eth_balance(self, address=None):
        """Get ETH balance for address"""
        addr = self.manager.checksum(address) if address else self.manager.address
        balance_wei = self.manager.get_balance(addr)
        return {
            "symbol": "ETH",
            "address": None,
            "balance": self.manager.w3.from_wei(balance_wei, "ether"),
            "balance_wei": str(balance_wei),
            "decimals": 18,
        }

    def get_token_balance(self, token_address, address=None):
        """Get ERC20 token balance for address"""
        addr = address or self.manager.address
        token = ERC20(self.manager, token_address)
        balance_wei = token.balance_of(addr)
        return {
            "symbol": token.symbol,
            "address": token.address,
            "balance": token.from_wei(balance_wei),
            "balance_wei": str(balance_wei),
            "decimals": token.decimals,
        }

    def get_balances(self, tokens=None, address=None, include_eth=True):
        """
        Get ETH and token balances.

        Args:
            tokens: Token symbols or addresses (all configured tokens if None)
            address: Address to query (uses manager address if None)
            include_eth: Whether to include the native ETH balance

        Returns:
            Dict with address and list of balances
        """
        addr = self.manager.checksum(address) if address else self.manager.address
        if tokens is None:
            tokens = list(self.config.common_tokens)

        balances = []
        if include_eth:
            balances.append(self.get_eth_balance(addr))

        for token in tokens:
            token_address = self.config.get_token_address(token)
            balances.append(self.get_token_balance(token_address, addr))

        return {
            "address": addr,
            "balances": balances,
        }
