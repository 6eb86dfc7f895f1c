"""Contract wrappers for ERC20, NFPM and Pool interactions"""

from .erc20 import ERC20
from .nfpm import NFPM
from .pool import Pool

__all__ = ["ERC20", "NFPM", "Pool"]
