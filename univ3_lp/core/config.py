"""Configuration loading and management"""

import os
import json
from pathlib import Path
from .exceptions import ConfigError


# Chain ID to network name mapping
CHAIN_NAMES = {
    1: "mainnet",
    31337: "mainnet",    # anvil/hardhat fork of mainnet
    42161: "arbitrum",
    10: "optimism",
    8453: "base",
    137: "polygon",
}


class Config:
    """Centralized configuration manager"""

    _instance = None
    _tokens = None
    _pools = None
    _abis = None
    _addresses = None

    # Package files (not user-configurable)
    PACKAGE_DIR = Path(__file__).parent.parent
    PACKAGE_ABIS = PACKAGE_DIR / "abis.json"
    PACKAGE_ADDRESSES = PACKAGE_DIR / "addresses.json"
    PACKAGE_DEFAULTS = PACKAGE_DIR / "defaults"

    # Fee tier to tick spacing mapping
    TICK_SPACING = {
        100: 1,
        500: 10,
        3000: 60,
        10000: 200,
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if Config._abis is None:
            self._load()

    @classmethod
    def reload(cls):
        """Drop cached files so the next Config() re-reads them"""
        cls._tokens = None
        cls._pools = None
        cls._abis = None
        cls._addresses = None
        return cls()

    def _find_config_dir(self):
        """Find user config directory (None if there is none)"""
        env_path = os.getenv("UNIV3_LP_CONFIG_DIR")
        if env_path:
            path = Path(env_path)
            if path.exists():
                return path
            raise ConfigError(f"UNIV3_LP_CONFIG_DIR does not exist: {env_path}")

        locations = [
            Path.cwd() / "config",
            Path.home() / ".univ3-lp" / "config",
        ]

        for path in locations:
            if path.exists():
                return path

        return None

    def _read_json(self, path):
        with open(path) as f:
            return json.load(f)

    def _load(self):
        """Load configuration files"""
        if not self.PACKAGE_ABIS.exists():
            raise ConfigError(f"Package ABIs not found: {self.PACKAGE_ABIS}")
        if not self.PACKAGE_ADDRESSES.exists():
            raise ConfigError(f"Package addresses not found: {self.PACKAGE_ADDRESSES}")

        Config._abis = self._read_json(self.PACKAGE_ABIS)
        Config._addresses = self._read_json(self.PACKAGE_ADDRESSES)

        # User config overrides packaged defaults file by file
        config_dir = self._find_config_dir()
        for name, attr in (("tokens.json", "_tokens"), ("pools.json", "_pools")):
            path = config_dir / name if config_dir else None
            if path is None or not path.exists():
                path = self.PACKAGE_DEFAULTS / name
            if not path.exists():
                raise ConfigError(f"{name} not found in {config_dir} or package defaults")
            setattr(Config, attr, self._read_json(path))

    @property
    def common_tokens(self):
        """Token symbol -> address mapping"""
        return Config._tokens or {}

    @property
    def pools(self):
        """Pool name -> address mapping"""
        return Config._pools or {}

    def get_contracts(self, chain_id=None):
        """Contract addresses for a chain (mainnet when unknown)"""
        network = CHAIN_NAMES.get(chain_id, "mainnet")
        return Config._addresses.get(network, Config._addresses.get("mainnet", {}))

    def nfpm_address(self, chain_id=None):
        """NonfungiblePositionManager address"""
        address = self.get_contracts(chain_id).get("nfpm")
        if not address:
            raise ConfigError(f"NFPM address not configured for chain {chain_id}")
        return address

    def get_abi(self, name):
        """Get contract ABI by name ("erc20", "pool", "nfpm")"""
        if name in Config._abis:
            return Config._abis[name]

        raise ConfigError(f"ABI not found: {name}")

    def get_token_address(self, symbol_or_address):
        """Resolve token symbol to address, or validate address"""
        token = symbol_or_address.upper()

        if token in self.common_tokens:
            return self.common_tokens[token]

        if symbol_or_address.startswith("0x") and len(symbol_or_address) == 42:
            return symbol_or_address

        raise ConfigError(f"Unknown token: {symbol_or_address}")

    def get_pool_address(self, name_or_address):
        """Resolve configured pool name (e.g. USDC_USDT_3000) to address"""
        pools = {k.upper(): v for k, v in self.pools.items()}
        if name_or_address.upper() in pools:
            return pools[name_or_address.upper()]

        if name_or_address.startswith("0x") and len(name_or_address) == 42:
            return name_or_address

        raise ConfigError(f"Unknown pool: {name_or_address}. Known: {list(self.pools)}")

    def get_tick_spacing(self, fee):
        """Get tick spacing for fee tier"""
        if fee not in self.TICK_SPACING:
            raise ConfigError(f"Invalid fee tier: {fee}. Valid: {list(self.TICK_SPACING.keys())}")
        return self.TICK_SPACING[fee]
