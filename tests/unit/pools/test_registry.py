"""Tests for Registry and PoolDirectory."""

import pytest

from ammpool.errors import NotOperator, PoolExists, PoolNotFound, RegistryPaused
from ammpool.registry import PoolDirectory, Registry, pair_key
from tests.helpers import BASE, OPERATOR, QUOTE, make_pool


class TestRegistry:
    """Tests for the pause gate."""

    def test_defaults(self):
        registry = Registry(operator=OPERATOR)
        assert registry.operator == OPERATOR
        assert registry.paused is False
        assert registry.pool_count == 0
        registry.ensure_not_paused()

    def test_unique_ids(self):
        assert Registry(OPERATOR).registry_id != Registry(OPERATOR).registry_id

    def test_pause_and_unpause(self, registry):
        registry.pause(OPERATOR)
        assert registry.paused
        with pytest.raises(RegistryPaused):
            registry.ensure_not_paused()

        registry.unpause(OPERATOR)
        assert not registry.paused
        registry.ensure_not_paused()

    def test_only_operator_toggles(self, registry):
        with pytest.raises(NotOperator):
            registry.pause("0xstranger")
        assert not registry.paused

        registry.pause(OPERATOR)
        with pytest.raises(NotOperator):
            registry.unpause("0xstranger")
        assert registry.paused

    def test_records_pools(self, registry):
        pool, _claim = make_pool(10, 10, registry=registry)
        assert registry.created(pool.pool_id)
        assert not registry.created("unknown")
        assert registry.pool_count == 1


class TestPoolDirectory:
    """Tests for the pair-keyed pool index."""

    def test_pair_key_is_order_independent(self):
        assert pair_key(BASE, QUOTE) == pair_key(QUOTE, BASE)

    def test_add_and_get(self):
        directory = PoolDirectory()
        pool, _claim = make_pool(10, 10)
        directory.add(pool)
        assert directory.get(pool.pool_id) is pool
        assert pool.pool_id in directory
        assert len(directory) == 1

    def test_find_by_pair(self):
        directory = PoolDirectory()
        pool, _claim = make_pool(10, 10)
        directory.add(pool)
        assert directory.find(BASE, QUOTE) is pool
        assert directory.find(QUOTE, BASE) is pool
        assert directory.find(BASE, "DAI") is None

    def test_duplicate_pair_rejected(self):
        directory = PoolDirectory()
        first, _ = make_pool(10, 10)
        directory.add(first)
        reversed_pair, _ = make_pool(10, 10, base_asset=QUOTE, quote_asset=BASE)
        with pytest.raises(PoolExists):
            directory.add(reversed_pair)
        assert len(directory) == 1

    def test_get_unknown(self):
        with pytest.raises(PoolNotFound):
            PoolDirectory().get("missing")

    def test_pools(self):
        directory = PoolDirectory()
        a, _ = make_pool(10, 10)
        b, _ = make_pool(10, 10, base_asset="WETH", quote_asset="DAI")
        directory.add(a)
        directory.add(b)
        assert {p.pool_id for p in directory.pools()} == {a.pool_id, b.pool_id}
