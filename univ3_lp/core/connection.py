"""Web3 connection management"""

import os
from web3 import Web3
from dotenv import load_dotenv
from .config import Config
from .exceptions import ConnectionError, ConfigError
from .signers import LocalSigner, ImpersonatedSigner


class Web3Manager:
    """Manages Web3 connection and the signer used for transactions"""

    def __init__(self, require_signer=False, impersonate=None, node="anvil", rpc_url=None):
        """
        Initialize Web3 connection.

        Args:
            require_signer: If True, loads PRIVATE_KEY for signing transactions
            impersonate: Address to act as on a fork node (takes precedence
                over PRIVATE_KEY)
            node: Fork node flavour for impersonation ("anvil" or "hardhat")
            rpc_url: RPC endpoint (defaults to RPC_URL from the environment)
        """
        load_dotenv()
        load_dotenv("wallet.env")

        self.config = Config()
        self._setup_web3(rpc_url)

        self.signer = None
        if impersonate:
            self.signer = ImpersonatedSigner(self.w3, impersonate, node=node).impersonate()
        elif require_signer:
            self.signer = LocalSigner(self.w3, os.getenv("PRIVATE_KEY"))

    def _setup_web3(self, rpc_url=None):
        """Setup Web3 connection"""
        rpc_url = rpc_url or os.getenv("RPC_URL")
        if not rpc_url:
            raise ConfigError("RPC_URL not found in environment")

        self.w3 = Web3(Web3.HTTPProvider(rpc_url))

        if not self.w3.is_connected():
            raise ConnectionError(f"Failed to connect to {rpc_url}")

    @property
    def address(self):
        """Get account address (from signer or PUBLIC_KEY in wallet.env)"""
        if self.signer:
            return self.signer.address
        # Fall back to PUBLIC_KEY for read-only operations
        public_key = os.getenv("PUBLIC_KEY")
        return self.checksum(public_key) if public_key else None

    @property
    def chain_id(self):
        """Get current chain ID"""
        return self.w3.eth.chain_id

    def get_balance(self, address=None):
        """Get ETH balance in wei"""
        addr = address or self.address
        if not addr:
            raise ValueError("No address provided")
        return self.w3.eth.get_balance(addr)

    def get_nonce(self, address=None):
        """Get transaction count (nonce)"""
        addr = address or self.address
        if not addr:
            raise ValueError("No address provided")
        return self.w3.eth.get_transaction_count(addr)

    def get_contract(self, address, abi_name):
        """Create contract instance"""
        abi = self.config.get_abi(abi_name)
        return self.w3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=abi
        )

    def send(self, tx):
        """Hand a built transaction to the signer, returns tx hash"""
        if self.signer is None:
            raise ConfigError("No signer configured: set PRIVATE_KEY or impersonate an address")
        return self.signer.send(tx)

    def close(self):
        """Release node-side state (ends impersonation)"""
        if isinstance(self.signer, ImpersonatedSigner):
            self.signer.stop()

    def checksum(self, address):
        """Convert address to checksum format"""
        return Web3.to_checksum_address(address)
