"""Constant-product liquidity pool.

A Pool owns the reserves of one base/quote pair and the supply of its
claim token. Five transitions change that state: create, add liquidity,
remove liquidity, and a swap in either direction. Each transition checks
every precondition before it touches a reserve or the supply, so a raised
error always leaves the pool exactly as it was.

Pools do not lock. Callers that share a pool across threads go through
PoolService, which serializes access per pool.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import structlog

from ammpool.assets import AssetHandle, Balance, Supply
from ammpool.constants import CLAIM_PREFIX, MAX_POOL_VALUE
from ammpool.errors import (
    AssetMismatch,
    InsufficientBase,
    InsufficientQuote,
    PoolFull,
    ReservesEmpty,
    SlippageExceeded,
    Underflow,
    ZeroAmount,
)
from ammpool.math import amount_out, checked_add, checked_mul, optimal_deposit, scaled_mul_div
from ammpool.safe_int import S, u64

if TYPE_CHECKING:
    from ammpool.registry import Registry

logger = structlog.get_logger()


class PoolPhase(str, Enum):
    """Lifecycle phase of an existing pool."""

    ACTIVE = "active"  # Reserves and supply non-zero
    DRAINED = "drained"  # Everything withdrawn; a deposit reactivates it


class SwapDirection(str, Enum):
    """Which asset is sold into the pool."""

    BASE_TO_QUOTE = "base_to_quote"
    QUOTE_TO_BASE = "quote_to_base"


@dataclass(frozen=True)
class PoolState:
    """Read-only snapshot of a pool."""

    pool_id: str
    base_asset: str
    quote_asset: str
    claim_asset: str
    base_reserve: int
    quote_reserve: int
    claim_supply: int
    phase: PoolPhase


@dataclass
class DepositResult:
    """Handles returned by add_liquidity.

    Attributes:
        claim: Newly minted claim tokens
        base_refund: Base the pool did not accept (may be empty)
        quote_refund: Quote the pool did not accept (may be empty)
    """

    claim: Balance
    base_refund: Balance
    quote_refund: Balance


def _ensure_below_ceiling(reserve: int, added: int, asset: str) -> None:
    if S(reserve) + added >= MAX_POOL_VALUE:
        raise PoolFull(
            f"{asset} reserve would reach {reserve + added}, limit is below {MAX_POOL_VALUE}"
        )


class Pool:
    """Liquidity pool for a single base/quote pair.

    Attributes:
        pool_id: Unique identifier assigned at creation
        registry_id: Id of the registry the pool was created under
    """

    def __init__(
        self,
        pool_id: str,
        registry_id: str,
        base: Balance,
        quote: Balance,
        supply: Supply,
    ) -> None:
        self.pool_id = pool_id
        self.registry_id = registry_id
        self._base = base
        self._quote = quote
        self._supply = supply

    def __repr__(self) -> str:
        return (
            f"Pool({self.pool_id[:8]}, {self.base_asset}={self.base_reserve}, "
            f"{self.quote_asset}={self.quote_reserve}, claims={self.claim_supply})"
        )

    @classmethod
    def create(
        cls,
        registry: Registry,
        base: AssetHandle,
        quote: AssetHandle,
    ) -> tuple[Pool, Balance]:
        """Create a pool seeded with the full value of both handles.

        The initial claim supply is base_in * quote_in (the raw product, not
        its square root), so claim-token scale depends on the seed deposit.

        Args:
            registry: Registry the pool is created under
            base: Base asset to seed the pool with (consumed)
            quote: Quote asset to seed the pool with (consumed)

        Returns:
            Tuple of (pool, claim tokens minted to the creator)

        Raises:
            AssetMismatch: If base and quote hold the same asset
            ZeroAmount: If either amount is zero
            PoolFull: If either amount is at or above MAX_POOL_VALUE
            Overflow: If base_in * quote_in does not fit in u64
        """
        if base.asset == quote.asset:
            raise AssetMismatch(f"Base and quote must differ, both are {base.asset}")
        base_in, quote_in = base.value, quote.value
        if base_in == 0 or quote_in == 0:
            raise ZeroAmount(f"Initial deposits must be positive: ({base_in}, {quote_in})")
        _ensure_below_ceiling(0, base_in, base.asset)
        _ensure_below_ceiling(0, quote_in, quote.asset)
        share = checked_mul(base_in, quote_in)

        pool_id = uuid.uuid4().hex
        pool = cls(
            pool_id=pool_id,
            registry_id=registry.registry_id,
            base=Balance.zero(base.asset),
            quote=Balance.zero(quote.asset),
            supply=Supply(f"{CLAIM_PREFIX}{pool_id}"),
        )
        pool._base.join(base)
        pool._quote.join(quote)
        claim = pool._supply.mint(share)
        registry.record_pool(pool_id)

        logger.debug(
            "pool_created",
            pool=pool_id[:8],
            base_reserve=base_in,
            quote_reserve=quote_in,
            claim_supply=share,
        )
        return pool, claim

    # --- Queries ---

    @property
    def base_asset(self) -> str:
        return self._base.asset

    @property
    def quote_asset(self) -> str:
        return self._quote.asset

    @property
    def claim_asset(self) -> str:
        return self._supply.asset

    @property
    def base_reserve(self) -> int:
        return self._base.value

    @property
    def quote_reserve(self) -> int:
        return self._quote.value

    @property
    def claim_supply(self) -> int:
        return self._supply.total

    @property
    def phase(self) -> PoolPhase:
        if self.claim_supply == 0 and self.base_reserve == 0 and self.quote_reserve == 0:
            return PoolPhase.DRAINED
        return PoolPhase.ACTIVE

    def get_reserves(self) -> tuple[int, int, int]:
        """Return (base_reserve, quote_reserve, claim_supply)."""
        return self.base_reserve, self.quote_reserve, self.claim_supply

    def state(self) -> PoolState:
        """Snapshot the pool's current state."""
        return PoolState(
            pool_id=self.pool_id,
            base_asset=self.base_asset,
            quote_asset=self.quote_asset,
            claim_asset=self.claim_asset,
            base_reserve=self.base_reserve,
            quote_reserve=self.quote_reserve,
            claim_supply=self.claim_supply,
            phase=self.phase,
        )

    def quote_base_for_quote(self, base_in: int) -> int:
        """Quote output for selling `base_in` base. Does not mutate."""
        return self._quote_out(base_in, self._base, self._quote)

    def quote_quote_for_base(self, quote_in: int) -> int:
        """Quote output for selling `quote_in` quote. Does not mutate."""
        return self._quote_out(quote_in, self._quote, self._base)

    def quote(self, direction: SwapDirection, amount_in: int) -> int:
        """Quote output for a hypothetical swap in `direction`."""
        if SwapDirection(direction) is SwapDirection.BASE_TO_QUOTE:
            return self.quote_base_for_quote(amount_in)
        return self.quote_quote_for_base(amount_in)

    # --- Transitions ---

    def add_liquidity(
        self,
        base: AssetHandle,
        base_min: int,
        quote: AssetHandle,
        quote_min: int,
    ) -> DepositResult:
        """Deposit base and quote at the pool's current ratio.

        Only the ratio-matched part of each handle is taken; the rest is
        handed back untouched as a refund. Claim tokens minted are
        accepted_base * accepted_quote, the same raw-product rule as
        create(). This is not proportional to the existing supply.

        Args:
            base: Base asset offered (emptied: accepted part joins the pool,
                  the rest is returned as base_refund)
            base_min: Smallest base amount the caller will accept
            quote: Quote asset offered (emptied likewise)
            quote_min: Smallest quote amount the caller will accept

        Returns:
            DepositResult with the minted claim and both refunds

        Raises:
            AssetMismatch: If a handle holds the wrong asset
            InsufficientBase: If base_min is zero or above the base offered
            InsufficientQuote: If quote_min is zero or above the quote offered
            InsufficientIn / InsufficientOut / Overlimit: From ratio matching
            PoolFull: If a reserve would reach MAX_POOL_VALUE
            Overflow: If the mint does not fit in u64
        """
        self._check_asset(base, self.base_asset)
        self._check_asset(quote, self.quote_asset)
        base_in, quote_in = base.value, quote.value
        base_min, quote_min = u64(base_min).value, u64(quote_min).value

        if base_min == 0 or base_in < base_min:
            raise InsufficientBase(f"Base offered {base_in} with minimum {base_min}")
        if quote_min == 0 or quote_in < quote_min:
            raise InsufficientQuote(f"Quote offered {quote_in} with minimum {quote_min}")

        base_reserve, quote_reserve, claim_supply = self.get_reserves()
        accepted_base, accepted_quote = optimal_deposit(
            base_in, quote_in, base_min, quote_min, base_reserve, quote_reserve
        )
        share = checked_mul(accepted_base, accepted_quote)
        _ensure_below_ceiling(base_reserve, accepted_base, self.base_asset)
        _ensure_below_ceiling(quote_reserve, accepted_quote, self.quote_asset)
        checked_add(claim_supply, share)

        self._base.join(base.split(accepted_base))
        self._quote.join(quote.split(accepted_quote))
        claim = self._supply.mint(share)

        logger.debug(
            "liquidity_added",
            pool=self.pool_id[:8],
            base_in=accepted_base,
            quote_in=accepted_quote,
            claim_minted=share,
        )
        return DepositResult(
            claim=claim,
            base_refund=_take_all(base),
            quote_refund=_take_all(quote),
        )

    def remove_liquidity(self, claim: AssetHandle) -> tuple[Balance, Balance]:
        """Redeem claim tokens for a pro-rata share of both reserves.

        Each side pays floor(reserve * claim_in / claim_supply), so the
        redeemer never receives more than their exact share. Redeeming the
        whole supply empties the pool exactly.

        Args:
            claim: Claim tokens to burn (consumed)

        Returns:
            Tuple of (base withdrawn, quote withdrawn)

        Raises:
            AssetMismatch: If claim is not this pool's claim token
            ZeroAmount: If claim is empty
            Underflow: If claim exceeds the outstanding supply
        """
        self._check_asset(claim, self.claim_asset)
        claim_in = claim.value
        if claim_in == 0:
            raise ZeroAmount("Claim amount must be positive")

        base_reserve, quote_reserve, claim_supply = self.get_reserves()
        if claim_in > claim_supply:
            raise Underflow(f"Claim {claim_in} exceeds outstanding supply {claim_supply}")
        removed_base = scaled_mul_div(base_reserve, claim_in, claim_supply)
        removed_quote = scaled_mul_div(quote_reserve, claim_in, claim_supply)

        self._supply.burn(claim)
        base_out = self._base.split(removed_base)
        quote_out = self._quote.split(removed_quote)

        logger.debug(
            "liquidity_removed",
            pool=self.pool_id[:8],
            claim_burned=claim_in,
            base_out=removed_base,
            quote_out=removed_quote,
        )
        return base_out, quote_out

    def swap_base_for_quote(self, base: AssetHandle, min_out: int) -> Balance:
        """Sell all of `base` for quote.

        Raises:
            See swap()
        """
        return self._swap(base, min_out, self._base, self._quote)

    def swap_quote_for_base(self, quote: AssetHandle, min_out: int) -> Balance:
        """Sell all of `quote` for base.

        Raises:
            See swap()
        """
        return self._swap(quote, min_out, self._quote, self._base)

    def swap(self, direction: SwapDirection, asset_in: AssetHandle, min_out: int) -> Balance:
        """Sell all of `asset_in` in `direction`.

        Args:
            direction: Which asset is sold
            asset_in: Asset being sold (consumed)
            min_out: Smallest output the caller will accept

        Returns:
            Handle holding the output asset

        Raises:
            AssetMismatch: If asset_in does not match the direction
            ZeroAmount: If asset_in is empty
            ReservesEmpty: If either reserve is zero
            PoolFull: If the input reserve would reach MAX_POOL_VALUE
            SlippageExceeded: If output is below min_out
        """
        if SwapDirection(direction) is SwapDirection.BASE_TO_QUOTE:
            return self.swap_base_for_quote(asset_in, min_out)
        return self.swap_quote_for_base(asset_in, min_out)

    # --- Internals ---

    def _swap(
        self,
        asset_in: AssetHandle,
        min_out: int,
        reserve_in: Balance,
        reserve_out: Balance,
    ) -> Balance:
        self._check_asset(asset_in, reserve_in.asset)
        min_out = u64(min_out).value
        input_amount = asset_in.value
        if input_amount == 0:
            raise ZeroAmount("Swap input must be positive")
        if reserve_in.value == 0 or reserve_out.value == 0:
            raise ReservesEmpty(
                f"Cannot price against empty reserves ({reserve_in.value}, {reserve_out.value})"
            )
        _ensure_below_ceiling(reserve_in.value, input_amount, reserve_in.asset)

        output = amount_out(input_amount, reserve_in.value, reserve_out.value)
        if output < min_out:
            raise SlippageExceeded(f"Output {output} is below minimum {min_out}")

        reserve_in.join(asset_in)
        out = reserve_out.split(output)

        logger.debug(
            "swap_executed",
            pool=self.pool_id[:8],
            asset_in=reserve_in.asset,
            amount_in=input_amount,
            asset_out=reserve_out.asset,
            amount_out=output,
        )
        return out

    def _quote_out(self, amount_in: int, reserve_in: Balance, reserve_out: Balance) -> int:
        if reserve_in.value == 0 or reserve_out.value == 0:
            raise ReservesEmpty("Cannot price against empty reserves")
        return amount_out(amount_in, reserve_in.value, reserve_out.value)

    @staticmethod
    def _check_asset(handle: AssetHandle, expected: str) -> None:
        if handle.asset != expected:
            raise AssetMismatch(f"Expected {expected}, got {handle.asset}")


def _take_all(handle: AssetHandle) -> Balance:
    """Move whatever is left in `handle` into a fresh Balance."""
    return Balance(handle.asset, handle.split(handle.value).value)
