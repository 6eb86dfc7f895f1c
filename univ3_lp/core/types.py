"""Value types passed between the chain reader, the request builder and the NFPM"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Optional, Tuple

from .exceptions import InvalidArgumentError

MAX_UINT256 = 2 ** 256 - 1


@dataclass(frozen=True)
class TickRange:
    """
    Half-open tick window [lower, upper) for a liquidity position.

    Both bounds are multiples of the pool's tick spacing when produced by
    compute_tick_range().
    """

    lower: int
    upper: int

    def __post_init__(self):
        if self.lower >= self.upper:
            raise InvalidArgumentError(
                f"Invalid tick range: lower ({self.lower}) must be < upper ({self.upper})"
            )

    def contains(self, tick: int) -> bool:
        """True if the pool would consider `tick` in range"""
        return self.lower <= tick < self.upper

    @property
    def width(self) -> int:
        return self.upper - self.lower


@dataclass(frozen=True)
class PoolState:
    """
    Snapshot of a V3 pool read from the chain.

    Attributes:
        address: Pool contract address
        token0: Lower-sorted token address
        token1: Higher-sorted token address
        fee: Fee tier in hundredths of a bip (3000 = 0.30%)
        current_tick: Tick from slot0 (not aligned to spacing)
        tick_spacing: Tick spacing for the fee tier
        sqrt_price_x96: sqrtPriceX96 from slot0, if read
    """

    address: Optional[str]
    token0: str
    token1: str
    fee: int
    current_tick: int
    tick_spacing: int
    sqrt_price_x96: Optional[int] = None

    def __post_init__(self):
        if self.token0.lower() == self.token1.lower():
            raise InvalidArgumentError(f"Pool tokens must differ, got {self.token0} twice")
        if isinstance(self.tick_spacing, bool) or not isinstance(self.tick_spacing, int):
            raise InvalidArgumentError(f"tick_spacing must be an integer, got {self.tick_spacing!r}")
        if self.tick_spacing <= 0:
            raise InvalidArgumentError(
                f"tick_spacing must be positive, got {self.tick_spacing}"
            )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class LiquidityRequest:
    """
    Everything NonfungiblePositionManager.mint() needs for one position.

    Amounts are raw token units. The request is built once per provisioning
    attempt and consumed immediately.
    """

    token0: str
    token1: str
    fee: int
    tick_range: TickRange
    amount0_desired: int
    amount1_desired: int
    amount0_min: int
    amount1_min: int
    recipient: str
    deadline: int

    def __post_init__(self):
        for name in ("amount0_desired", "amount1_desired", "amount0_min", "amount1_min"):
            value = getattr(self, name)
            if value < 0 or value > MAX_UINT256:
                raise InvalidArgumentError(f"{name} out of uint256 range: {value}")
        if self.amount0_min > self.amount0_desired:
            raise InvalidArgumentError("amount0_min exceeds amount0_desired")
        if self.amount1_min > self.amount1_desired:
            raise InvalidArgumentError("amount1_min exceeds amount1_desired")

    @property
    def tick_lower(self) -> int:
        return self.tick_range.lower

    @property
    def tick_upper(self) -> int:
        return self.tick_range.upper

    def to_mint_params(self) -> Tuple:
        """MintParams tuple in ABI order"""
        return (
            self.token0,
            self.token1,
            self.fee,
            self.tick_range.lower,
            self.tick_range.upper,
            self.amount0_desired,
            self.amount1_desired,
            self.amount0_min,
            self.amount1_min,
            self.recipient,
            self.deadline,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["tick_lower"] = self.tick_range.lower
        data["tick_upper"] = self.tick_range.upper
        del data["tick_range"]
        return data


@dataclass
class ProvisionResult:
    """Outcome of one approve + mint attempt"""

    success: bool
    position_id: Optional[int] = None
    liquidity: Optional[int] = None
    amount0: Optional[int] = None
    amount1: Optional[int] = None
    tx_hash: Optional[str] = None
    error: Optional[str] = None
    error_data: Any = None

    @classmethod
    def failed(cls, error, error_data=None, tx_hash=None):
        return cls(success=False, error=error, error_data=error_data, tx_hash=tx_hash)

    def to_dict(self) -> dict:
        return asdict(self)
