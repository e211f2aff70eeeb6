"""End-to-end pool lifecycle through PoolService."""

from ammpool.assets import Balance
from ammpool.math import amount_out
from ammpool.pool import PoolPhase, SwapDirection
from tests.helpers import BASE, QUOTE, SEED_BASE, SEED_QUOTE


class TestReferenceScenario:
    """Create, trade both ways, then withdraw everything."""

    def test_full_lifecycle(self, service):
        pool_id, claim = service.create_pool(Balance(BASE, SEED_BASE), Balance(QUOTE, SEED_QUOTE))
        assert claim.value == 1_000_000_000_000_000
        assert service.reserves(pool_id).claim_supply == claim.value

        quote_out = service.swap(
            pool_id, SwapDirection.BASE_TO_QUOTE, Balance(BASE, 5_000_000), 4960
        )
        assert (quote_out.asset, quote_out.value) == (QUOTE, 4960)
        state = service.reserves(pool_id)
        assert (state.base_reserve, state.quote_reserve) == (1_005_000_000, 995_040)

        base_out = service.swap(pool_id, SwapDirection.QUOTE_TO_BASE, Balance(QUOTE, 1_000), 0)
        assert (base_out.asset, base_out.value) == (BASE, 1_005_971)

        assert amount_out(10, 1000, 1000) == 9

        base_back, quote_back = service.remove_liquidity(pool_id, claim)
        assert (base_back.value, quote_back.value) == (1_003_994_029, 996_040)
        assert claim.value == 0

        state = service.reserves(pool_id)
        assert (state.base_reserve, state.quote_reserve, state.claim_supply) == (0, 0, 0)
        assert state.phase is PoolPhase.DRAINED

    def test_value_is_conserved(self, service):
        """Every unit that entered the pool either left it or is still reserved."""
        pool_id, claim = service.create_pool(Balance(BASE, SEED_BASE), Balance(QUOTE, SEED_QUOTE))
        base_in, quote_in = SEED_BASE, SEED_QUOTE
        base_paid = quote_paid = 0

        for amount in (5_000_000, 123_456, 77):
            base_in += amount
            quote_paid += service.swap(
                pool_id, SwapDirection.BASE_TO_QUOTE, Balance(BASE, amount), 0
            ).value
        for amount in (1_000, 4_321):
            quote_in += amount
            base_paid += service.swap(
                pool_id, SwapDirection.QUOTE_TO_BASE, Balance(QUOTE, amount), 0
            ).value

        base_back, quote_back = service.remove_liquidity(pool_id, claim)
        assert base_back.value + base_paid == base_in
        assert quote_back.value + quote_paid == quote_in
