"""Constant-product AMM liquidity pool."""

from ammpool.assets import AssetHandle, Balance, Supply
from ammpool.ledger import Ledger
from ammpool.pool import DepositResult, Pool, PoolPhase, PoolState, SwapDirection
from ammpool.registry import PoolDirectory, Registry
from ammpool.service import PoolService, get_default_service

__version__ = "0.1.0"
__all__ = [
    "AssetHandle",
    "Balance",
    "Supply",
    "Ledger",
    "DepositResult",
    "Pool",
    "PoolPhase",
    "PoolState",
    "SwapDirection",
    "PoolDirectory",
    "Registry",
    "PoolService",
    "get_default_service",
    "__version__",
]
