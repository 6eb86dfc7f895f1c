"""Custom exceptions for univ3-lp"""


class AMMError(Exception):
    """Base exception for all univ3-lp errors"""
    pass


class ConfigError(AMMError):
    """Configuration-related errors"""
    pass


class ConnectionError(AMMError):
    """Web3 connection errors"""
    pass


class TransactionError(AMMError):
    """Transaction execution errors"""

    def __init__(self, message, tx_hash=None):
        super().__init__(message)
        self.tx_hash = tx_hash


class InsufficientBalanceError(AMMError):
    """Insufficient token balance"""
    pass


class PositionError(AMMError):
    """Position-related errors (not found, not owned, etc.)"""
    pass


class PoolError(AMMError):
    """Pool-related errors (not found, not initialized, etc.)"""
    pass


class InvalidArgumentError(AMMError, ValueError):
    """Caller supplied a value outside the accepted domain"""
    pass


class StalePoolStateError(AMMError):
    """Pool tick moved out of the requested range between read and submission"""

    def __init__(self, message, current_tick=None, tick_range=None):
        super().__init__(message)
        self.current_tick = current_tick
        self.tick_range = tick_range


class GasPriceTooHighError(AMMError):
    """Raised when current base fee exceeds the user-specified maximum"""
    pass
