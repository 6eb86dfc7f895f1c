"""Core module - configuration, connection, signers, exceptions, and value types"""

from .config import Config
from .connection import Web3Manager
from .exceptions import (
    AMMError,
    ConfigError,
    ConnectionError,
    TransactionError,
    InsufficientBalanceError,
    InvalidArgumentError,
    StalePoolStateError,
)
from .signers import LocalSigner, ImpersonatedSigner
from .types import PoolState, TickRange, LiquidityRequest, ProvisionResult
from .balances import BalanceQuery

__all__ = [
    "Config",
    "Web3Manager",
    "AMMError",
    "ConfigError",
    "ConnectionError",
    "TransactionError",
    "InsufficientBalanceError",
    "InvalidArgumentError",
    "StalePoolStateError",
    "LocalSigner",
    "ImpersonatedSigner",
    "PoolState",
    "TickRange",
    "LiquidityRequest",
    "ProvisionResult",
    "BalanceQuery",
]
