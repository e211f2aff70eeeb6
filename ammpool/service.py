"""Public operation surface for pools.

PoolService is the entry point callers use. It adds three things on top
of the bare Pool transitions:
- the registry gate (mutations are refused while the registry is paused)
- per-pool locking, so a read-then-modify sequence on one pool is never
  interleaved with another mutation of the same reserves
- one-pool-per-pair bookkeeping and structured logging
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

import structlog

from ammpool.assets import AssetHandle, Balance
from ammpool.config import ServiceConfig
from ammpool.errors import AmmError
from ammpool.pool import DepositResult, Pool, PoolState, SwapDirection
from ammpool.registry import PoolDirectory, Registry

logger = structlog.get_logger()


class PoolService:
    """Gated, thread-safe access to a set of pools under one registry.

    Pools for different pairs are independent and can be used
    concurrently; calls against the same pool are serialized.
    """

    def __init__(self, registry: Registry, directory: PoolDirectory | None = None) -> None:
        """Initialize the service.

        Args:
            registry: Registry whose pause flag gates every mutation
            directory: Pool index to use. If None, starts empty.
        """
        self.registry = registry
        self.directory = directory if directory is not None else PoolDirectory()
        self._locks: dict[str, threading.Lock] = {
            pool.pool_id: threading.Lock() for pool in self.directory.pools()
        }
        self._directory_lock = threading.Lock()

    # --- Mutations (gated) ---

    def create_pool(self, base: AssetHandle, quote: AssetHandle) -> tuple[str, Balance]:
        """Create a pool for a new pair.

        Returns:
            Tuple of (pool_id, claim tokens minted to the creator)

        Raises:
            RegistryPaused: If the registry is paused
            PoolExists: If a pool already serves this pair
            AmmError: Any error from Pool.create
        """
        with self._directory_lock, self._rejections("create_pool"):
            self.registry.ensure_not_paused()
            self.directory.ensure_pair_free(base.asset, quote.asset)
            pool, claim = Pool.create(self.registry, base, quote)
            self.directory.add(pool)
            self._locks[pool.pool_id] = threading.Lock()

        logger.info(
            "pool_created",
            pool_id=pool.pool_id,
            base_asset=pool.base_asset,
            quote_asset=pool.quote_asset,
            base_reserve=pool.base_reserve,
            quote_reserve=pool.quote_reserve,
            claim_minted=claim.value,
        )
        return pool.pool_id, claim

    def add_liquidity(
        self,
        pool_id: str,
        base: AssetHandle,
        base_min: int,
        quote: AssetHandle,
        quote_min: int,
    ) -> DepositResult:
        """Deposit into a pool. See Pool.add_liquidity."""
        with self._locked(pool_id, "add_liquidity") as pool:
            self.registry.ensure_not_paused()
            result = pool.add_liquidity(base, base_min, quote, quote_min)

        logger.info(
            "liquidity_added",
            pool_id=pool_id,
            claim_minted=result.claim.value,
            base_refund=result.base_refund.value,
            quote_refund=result.quote_refund.value,
        )
        return result

    def remove_liquidity(self, pool_id: str, claim: AssetHandle) -> tuple[Balance, Balance]:
        """Redeem claim tokens. See Pool.remove_liquidity."""
        claim_in = claim.value
        with self._locked(pool_id, "remove_liquidity") as pool:
            self.registry.ensure_not_paused()
            base_out, quote_out = pool.remove_liquidity(claim)
            phase = pool.phase

        logger.info(
            "liquidity_removed",
            pool_id=pool_id,
            claim_burned=claim_in,
            base_out=base_out.value,
            quote_out=quote_out.value,
            phase=phase.value,
        )
        return base_out, quote_out

    def swap(
        self,
        pool_id: str,
        direction: SwapDirection,
        asset_in: AssetHandle,
        min_out: int,
    ) -> Balance:
        """Swap through a pool. See Pool.swap."""
        direction = SwapDirection(direction)
        amount_in = asset_in.value
        with self._locked(pool_id, "swap") as pool:
            self.registry.ensure_not_paused()
            out = pool.swap(direction, asset_in, min_out)

        logger.info(
            "swap_executed",
            pool_id=pool_id,
            direction=direction.value,
            amount_in=amount_in,
            amount_out=out.value,
            min_out=min_out,
        )
        return out

    # --- Queries (ungated) ---

    def quote(self, pool_id: str, direction: SwapDirection, amount_in: int) -> int:
        """Price a hypothetical swap without mutating the pool."""
        with self._locked(pool_id, "quote") as pool:
            return pool.quote(direction, amount_in)

    def reserves(self, pool_id: str) -> PoolState:
        """Snapshot a pool's reserves and claim supply."""
        with self._locked(pool_id, "reserves") as pool:
            return pool.state()

    def pools(self) -> list[PoolState]:
        """Snapshot every pool."""
        with self._directory_lock:
            pool_ids = [pool.pool_id for pool in self.directory.pools()]
        return [self.reserves(pool_id) for pool_id in pool_ids]

    # --- Registry control ---

    def pause(self, caller: str) -> None:
        with self._rejections("pause"):
            self.registry.pause(caller)

    def unpause(self, caller: str) -> None:
        with self._rejections("unpause"):
            self.registry.unpause(caller)

    # --- Internals ---

    @contextmanager
    def _locked(self, pool_id: str, operation: str) -> Iterator[Pool]:
        with self._rejections(operation, pool_id):
            with self._directory_lock:
                pool = self.directory.get(pool_id)
                lock = self._locks[pool_id]
            with lock:
                yield pool

    @contextmanager
    def _rejections(self, operation: str, pool_id: str | None = None) -> Iterator[None]:
        try:
            yield
        except AmmError as e:
            logger.warning(
                "operation_rejected",
                operation=operation,
                pool_id=pool_id,
                error=e.code,
                detail=str(e),
            )
            raise


@lru_cache(maxsize=1)
def get_default_service() -> PoolService:
    """Process-wide service built from environment configuration.

    The registry operator comes from AMM_OPERATOR. Tests should build their
    own PoolService rather than share this one.
    """
    config = ServiceConfig.from_env()
    logger.info("registry_initialized", operator=config.operator)
    return PoolService(Registry(operator=config.operator))
