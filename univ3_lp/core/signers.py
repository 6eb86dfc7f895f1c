"""Transaction signers: a local private key, or an impersonated account on a fork node"""

import logging

from eth_account import Account
from web3 import Web3

from .exceptions import ConfigError, ConnectionError

logger = logging.getLogger(__name__)


class LocalSigner:
    """Signs transactions locally and broadcasts the raw bytes"""

    def __init__(self, w3, private_key):
        """
        Args:
            w3: Web3 instance
            private_key: Hex private key
        """
        if not private_key:
            raise ConfigError("PRIVATE_KEY not found in wallet.env")
        self.w3 = w3
        self.account = Account.from_key(private_key)

    @property
    def address(self):
        return self.account.address

    def send(self, tx):
        """Sign and broadcast, returns tx hash"""
        signed = self.account.sign_transaction(tx)
        return self.w3.eth.send_raw_transaction(signed.raw_transaction)


class ImpersonatedSigner:
    """
    Sends transactions as an arbitrary account on anvil or hardhat.

    The node signs on our behalf after `<prefix>_impersonateAccount`, so
    transactions go through eth_sendTransaction unsigned.
    """

    NODE_PREFIXES = ("anvil", "hardhat")

    def __init__(self, w3, address, node="anvil"):
        """
        Args:
            w3: Web3 instance connected to a fork node
            address: Account to act as (e.g. a token whale)
            node: RPC method prefix, "anvil" or "hardhat"
        """
        if node not in self.NODE_PREFIXES:
            raise ConfigError(f"Unsupported node type: {node}. Valid: {list(self.NODE_PREFIXES)}")
        self.w3 = w3
        self.node = node
        self._address = Web3.to_checksum_address(address)
        self.active = False

    @property
    def address(self):
        return self._address

    def _rpc(self, method, params):
        response = self.w3.provider.make_request(f"{self.node}_{method}", params)
        if "error" in response:
            raise ConnectionError(f"{self.node}_{method} failed: {response['error']}")
        return response.get("result")

    def impersonate(self):
        """Start impersonating the account"""
        self._rpc("impersonateAccount", [self._address])
        self.active = True
        logger.info("Impersonating %s via %s", self._address, self.node)
        return self

    def stop(self):
        """Stop impersonating the account"""
        if self.active:
            self._rpc("stopImpersonatingAccount", [self._address])
            self.active = False
            logger.info("Stopped impersonating %s", self._address)

    def set_balance(self, balance_wei):
        """Set the account's ETH balance so it can pay for gas"""
        self._rpc("setBalance", [self._address, hex(balance_wei)])
        logger.info("Set ETH balance of %s to %s wei", self._address, balance_wei)

    def send(self, tx):
        """Send through the node's unlocked account, returns tx hash"""
        if not self.active:
            self.impersonate()
        tx = dict(tx)
        tx["from"] = self._address
        return self.w3.eth.send_transaction(tx)
