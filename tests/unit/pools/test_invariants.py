"""Pool-level invariants: conservation, bounds, drained symmetry, ratios."""

import pytest

from ammpool.assets import Balance
from ammpool.constants import MAX_POOL_VALUE
from ammpool.errors import Overlimit
from ammpool.pool import PoolPhase
from tests.helpers import BASE, QUOTE, make_pool, snapshot


class TestConservation:
    """Deposit followed by redeeming the minted claim."""

    @pytest.mark.parametrize(("base", "quote"), [(1000, 1000), (1_000_000_000, 1_000_000)])
    def test_deposit_then_withdraw_restores_reserves(self, base, quote):
        """When the deposit matches the seed, the round trip is exact."""
        pool, _claim = make_pool(base, quote)
        before = snapshot(pool)

        result = pool.add_liquidity(Balance(BASE, base), 1, Balance(QUOTE, quote), 1)
        base_out, quote_out = pool.remove_liquidity(result.claim)

        assert snapshot(pool) == before
        assert (base_out.value, quote_out.value) == (base, quote)

    def test_supply_restored_after_round_trip(self):
        pool, _claim = make_pool(1_000_000_000, 1_000_000)
        supply_before = pool.claim_supply
        result = pool.add_liquidity(Balance(BASE, 2_000_000), 1, Balance(QUOTE, 2_000), 1)
        pool.remove_liquidity(result.claim)
        assert pool.claim_supply == supply_before


class TestRawProductMint:
    """add_liquidity mints accepted_base * accepted_quote.

    This is not the proportional rule (claim_supply * accepted / reserve).
    Claim value therefore depends on deposit size, not just pool share.
    These tests pin the behavior so any change to it is deliberate.
    """

    def test_small_depositor_is_diluted(self):
        pool, _claim = make_pool(1000, 1000)
        result = pool.add_liquidity(Balance(BASE, 10), 1, Balance(QUOTE, 10), 1)

        # Proportional minting would give 1_000_000 * 10 // 1000 = 10_000
        assert result.claim.value == 100
        base_out, quote_out = pool.remove_liquidity(result.claim)
        assert (base_out.value, quote_out.value) == (0, 0)
        assert snapshot(pool) == (1010, 1010, 1_000_000)

    def test_large_depositor_is_inflated(self):
        pool, _claim = make_pool(1000, 1000)
        result = pool.add_liquidity(Balance(BASE, 2000), 1, Balance(QUOTE, 2000), 1)

        # Two thirds of the reserves, but four fifths of the supply
        assert result.claim.value == 4_000_000
        assert pool.claim_supply == 5_000_000
        base_out, quote_out = pool.remove_liquidity(result.claim)
        assert (base_out.value, quote_out.value) == (2400, 2400)


class TestNoOverflow:
    """Redemption near the reserve ceiling never overflows."""

    @pytest.mark.parametrize(
        ("base", "quote"),
        [(MAX_POOL_VALUE - 1, 10_000), (10_000, MAX_POOL_VALUE - 1), (MAX_POOL_VALUE - 1, 1)],
    )
    def test_remove_any_fraction(self, base, quote):
        _pool, claim = make_pool(base, quote)
        supply = claim.value
        for claim_in in (1, 7, supply // 3, supply - 1, supply):
            pool, fresh_claim = make_pool(base, quote)
            base_out, quote_out = pool.remove_liquidity(fresh_claim.split(claim_in))
            assert base_out.value <= base
            assert quote_out.value <= quote
            assert pool.claim_supply == supply - claim_in

    def test_swaps_stay_below_ceiling(self):
        pool, _claim = make_pool(MAX_POOL_VALUE - 2, 10_000)
        out = pool.swap_base_for_quote(Balance(BASE, 1), 0)
        assert pool.base_reserve == MAX_POOL_VALUE - 1
        assert out.value == 0


class TestDrainedSymmetry:
    """Redeeming the whole supply empties the pool exactly."""

    def test_drain_after_swaps(self):
        pool, claim = make_pool(1_000_000_000, 1_000_000)
        pool.swap_base_for_quote(Balance(BASE, 5_000_000), 0)
        pool.swap_quote_for_base(Balance(QUOTE, 1_000), 0)
        reserves = (pool.base_reserve, pool.quote_reserve)

        base_out, quote_out = pool.remove_liquidity(claim)

        assert (base_out.value, quote_out.value) == reserves
        assert snapshot(pool) == (0, 0, 0)
        assert pool.phase is PoolPhase.DRAINED

    def test_drain_with_several_holders(self):
        pool, creator = make_pool(1000, 1000)
        result = pool.add_liquidity(Balance(BASE, 10), 1, Balance(QUOTE, 10), 1)
        pool.remove_liquidity(creator)
        pool.remove_liquidity(result.claim)
        assert snapshot(pool) == (0, 0, 0)

    def test_drained_pool_reactivates(self):
        pool, claim = make_pool(1000, 1000)
        pool.remove_liquidity(claim)

        result = pool.add_liquidity(Balance(BASE, 500), 1, Balance(QUOTE, 700), 1)

        assert result.claim.value == 350_000
        assert (result.base_refund.value, result.quote_refund.value) == (0, 0)
        assert snapshot(pool) == (500, 700, 350_000)
        assert pool.phase is PoolPhase.ACTIVE


class TestDepositRatio:
    """A deposit that keeps all the offered base moves the ratio by at most one rounding unit."""

    @pytest.mark.parametrize(
        ("seed", "offer"),
        [
            ((1_000_000_000, 1_000_000), (1_234, 999_999)),
            ((1_000_000_000, 1_000_000), (2_000_000, 2_000)),
            ((7, 11), (5, 10**9)),
            ((1000, 333), (77, 500)),
            ((5_000, 5_000), (300, 7_000)),
            ((5_000, 5_000), (7_000, 300)),
        ],
    )
    def test_ratio_preserved(self, seed, offer):
        pool, _claim = make_pool(*seed)
        base_before, quote_before, _ = snapshot(pool)

        pool.add_liquidity(Balance(BASE, offer[0]), 1, Balance(QUOTE, offer[1]), 1)

        base_after, quote_after, _ = snapshot(pool)
        drift = abs(base_after * quote_before - base_before * quote_after)
        assert drift < max(base_before, quote_before)


class TestExcessBaseDeposit:
    """With too much base offered, accepted base is quote_in * quote_reserve / base_reserve.

    On a pool with unequal reserves that is not the ratio-matched amount,
    so the deposit shifts the pool price. Pinned so any change is deliberate.
    """

    def test_skews_price_toward_quote(self):
        pool, _claim = make_pool(1_000_000_000, 1_000_000)
        result = pool.add_liquidity(Balance(BASE, 10_000_000), 1, Balance(QUOTE, 3_000), 1)

        # The ratio-matched deposit would be (3_000_000, 3_000)
        assert snapshot(pool)[:2] == (1_000_000_003, 1_003_000)
        assert result.base_refund.value == 9_999_997
        assert result.claim.value == 9_000

    def test_overlimit_leaves_pool_and_handles(self):
        """10 quote demands 20 base at 200/100, only 10 offered."""
        pool, _claim = make_pool(100, 200)
        before = snapshot(pool)
        base, quote = Balance(BASE, 10), Balance(QUOTE, 10)

        with pytest.raises(Overlimit):
            pool.add_liquidity(base, 1, quote, 1)

        assert snapshot(pool) == before
        assert (base.value, quote.value) == (10, 10)
