"""EIP-1559 fee parameters and per-operation gas limits"""

import json
import logging
from pathlib import Path

from web3.exceptions import Web3Exception

from ..core.exceptions import ConfigError, GasPriceTooHighError

logger = logging.getLogger(__name__)

GWEI = 10 ** 9
DEFAULT_PRIORITY_FEE_GWEI = 1.5

# Used when the node can't estimate; mint matches the provisioning script's fixed limit
DEFAULT_GAS_LIMITS = {
    "approve": 65000,
    "mint": 1000000,
    "default": 500000,
}


def load_gas_config(path=None):
    """
    Read gas_config.json.

    Looks in ./gas_config.json then ~/.univ3-lp/gas_config.json unless a
    path is given. Returns {} when no file exists.

    File keys (all optional):
        maxFeePerGas: cap in Gwei
        maxPriorityFeePerGas: tip in Gwei
        gasLimit: {"approve": ..., "mint": ...}
    """
    if path is not None:
        if not Path(path).exists():
            raise ConfigError(f"Gas config not found: {path}")
        candidates = [Path(path)]
    else:
        candidates = [
            Path.cwd() / "gas_config.json",
            Path.home() / ".univ3-lp" / "gas_config.json",
        ]

    for candidate in candidates:
        if candidate.exists():
            logger.debug("Loading gas config from %s", candidate)
            with open(candidate) as f:
                return json.load(f)
    return {}


class GasManager:
    """Fee caps and gas limits for transactions sent by one manager"""

    def __init__(self, manager, maxFeePerGas=None, maxPriorityFeePerGas=None, config=None):
        """
        Args:
            manager: Web3Manager instance
            maxFeePerGas: Fee cap in Gwei (overrides gas_config.json; None = no cap)
            maxPriorityFeePerGas: Tip in Gwei (overrides gas_config.json)
            config: Parsed gas config dict (loaded from disk if None)
        """
        self.manager = manager
        self.config = load_gas_config() if config is None else config

        self.max_fee_gwei = (
            maxFeePerGas if maxFeePerGas is not None else self.config.get("maxFeePerGas")
        )
        self.priority_fee_gwei = (
            maxPriorityFeePerGas if maxPriorityFeePerGas is not None
            else self.config.get("maxPriorityFeePerGas", DEFAULT_PRIORITY_FEE_GWEI)
        )

    def gas_limit(self, operation_type=None):
        """Configured limit for "approve", "mint", ... ("default" otherwise)"""
        limits = dict(DEFAULT_GAS_LIMITS)
        limits.update(self.config.get("gasLimit", {}))
        return limits.get(operation_type or "default", limits["default"])

    def base_fee(self):
        """Base fee of the latest block in wei"""
        return self.manager.w3.eth.get_block("latest").get("baseFeePerGas", 0)

    def fee_params(self):
        """
        maxFeePerGas / maxPriorityFeePerGas in wei for the next transaction.

        Without a cap the max fee is 2 * base fee + tip.

        Raises:
            GasPriceTooHighError: If the base fee is already above the cap
        """
        base_fee = self.base_fee()
        priority_fee = int(self.priority_fee_gwei * GWEI)

        if self.max_fee_gwei is None:
            max_fee = 2 * base_fee + priority_fee
        else:
            max_fee = int(self.max_fee_gwei * GWEI)
            if max_fee < base_fee:
                raise GasPriceTooHighError(
                    f"Base fee {base_fee / GWEI:.2f} Gwei is above maxFeePerGas "
                    f"{self.max_fee_gwei} Gwei; the transaction could not be included"
                )

        return {
            "maxFeePerGas": max_fee,
            "maxPriorityFeePerGas": min(priority_fee, max_fee),
        }

    def gas_for(self, contract_func, sender, operation_type=None, gas_buffer=1.2):
        """Node estimate times gas_buffer, or the configured limit if estimation fails"""
        try:
            estimate = contract_func.estimate_gas({"from": sender})
        except (Web3Exception, ValueError) as e:
            limit = self.gas_limit(operation_type)
            logger.warning("Gas estimate for %s failed (%s); using limit %s", operation_type, e, limit)
            return limit
        return int(estimate * gas_buffer)
