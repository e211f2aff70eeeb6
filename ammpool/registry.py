"""Registry gate and pool directory.

Registry holds the deployment-wide pause flag and the operator that
created it. The public operation surface consults it before any
pool-mutating call; the pool itself only keeps the registry id as a
provenance back-reference.

PoolDirectory indexes pools by their canonical asset pair so a service
can refuse to create a second pool for the same pair.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog

from ammpool.errors import NotOperator, PoolExists, PoolNotFound, RegistryPaused

if TYPE_CHECKING:
    from ammpool.pool import Pool

logger = structlog.get_logger()


class Registry:
    """Deployment-wide configuration consulted by the pool operation surface.

    Attributes:
        registry_id: Unique identifier assigned at creation
        operator: Address that initialized the registry
        paused: When True, pool-mutating operations are refused
    """

    def __init__(self, operator: str) -> None:
        self.registry_id = uuid.uuid4().hex
        self.operator = operator
        self.paused = False
        self._pool_ids: set[str] = set()

    def ensure_not_paused(self) -> None:
        """Raise RegistryPaused if pool-mutating operations are halted."""
        if self.paused:
            raise RegistryPaused("Pool operations are paused")

    def pause(self, caller: str) -> None:
        """Halt pool-mutating operations.

        Raises:
            NotOperator: If caller is not the registry operator
        """
        self._require_operator(caller)
        self.paused = True
        logger.info("registry_paused", registry_id=self.registry_id, caller=caller)

    def unpause(self, caller: str) -> None:
        """Resume pool-mutating operations.

        Raises:
            NotOperator: If caller is not the registry operator
        """
        self._require_operator(caller)
        self.paused = False
        logger.info("registry_unpaused", registry_id=self.registry_id, caller=caller)

    def record_pool(self, pool_id: str) -> None:
        """Note that a pool was created under this registry."""
        self._pool_ids.add(pool_id)

    def created(self, pool_id: str) -> bool:
        """True if the pool was created under this registry."""
        return pool_id in self._pool_ids

    @property
    def pool_count(self) -> int:
        return len(self._pool_ids)

    def _require_operator(self, caller: str) -> None:
        if caller != self.operator:
            raise NotOperator(f"{caller} is not the registry operator")


def pair_key(asset_a: str, asset_b: str) -> frozenset[str]:
    """Canonical, order-independent key for an asset pair."""
    return frozenset([asset_a, asset_b])


class PoolDirectory:
    """Lookup of pools by id and by asset pair (one pool per pair)."""

    def __init__(self) -> None:
        self._by_id: dict[str, Pool] = {}
        self._by_pair: dict[frozenset[str], str] = {}

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, pool_id: object) -> bool:
        return pool_id in self._by_id

    def ensure_pair_free(self, base_asset: str, quote_asset: str) -> None:
        """Raise PoolExists if a pool already serves this pair."""
        existing = self._by_pair.get(pair_key(base_asset, quote_asset))
        if existing is not None:
            raise PoolExists(f"Pool {existing} already serves {base_asset}/{quote_asset}")

    def add(self, pool: Pool) -> None:
        """Index a newly created pool.

        Raises:
            PoolExists: If the pair is already served
        """
        self.ensure_pair_free(pool.base_asset, pool.quote_asset)
        self._by_id[pool.pool_id] = pool
        self._by_pair[pair_key(pool.base_asset, pool.quote_asset)] = pool.pool_id

    def get(self, pool_id: str) -> Pool:
        """Get a pool by id.

        Raises:
            PoolNotFound: If no pool has this id
        """
        pool = self._by_id.get(pool_id)
        if pool is None:
            raise PoolNotFound(f"No pool with id {pool_id}")
        return pool

    def find(self, asset_a: str, asset_b: str) -> Pool | None:
        """Get the pool for a pair (order independent), or None."""
        pool_id = self._by_pair.get(pair_key(asset_a, asset_b))
        return self._by_id.get(pool_id) if pool_id is not None else None

    def pools(self) -> list[Pool]:
        return list(self._by_id.values())
