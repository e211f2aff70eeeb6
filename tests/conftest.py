"""Pytest configuration and fixtures."""

import pytest

from ammpool.assets import Balance
from ammpool.pool import Pool
from ammpool.registry import Registry
from ammpool.service import PoolService
from tests.helpers.constants import BASE, OPERATOR, QUOTE, SEED_BASE, SEED_QUOTE


@pytest.fixture
def registry() -> Registry:
    """Fresh, unpaused registry."""
    return Registry(operator=OPERATOR)


@pytest.fixture
def pool(registry: Registry) -> Pool:
    """Pool seeded with 1,000,000,000 base and 1,000,000 quote."""
    pool, _claim = Pool.create(registry, Balance(BASE, SEED_BASE), Balance(QUOTE, SEED_QUOTE))
    return pool


@pytest.fixture
def seeded(registry: Registry) -> tuple[Pool, Balance]:
    """Seeded pool together with the creator's claim tokens."""
    return Pool.create(registry, Balance(BASE, SEED_BASE), Balance(QUOTE, SEED_QUOTE))


@pytest.fixture
def service(registry: Registry) -> PoolService:
    """Service with an empty pool directory."""
    return PoolService(registry)
