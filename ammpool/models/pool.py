"""Pydantic models for pool API requests and responses.

Amounts travel as decimal strings so clients never lose precision on
values above 2^53.
"""

from pydantic import BaseModel, Field

from ammpool.models.types import AccountId, AssetId, Uint64
from ammpool.pool import PoolPhase, PoolState, SwapDirection


class PoolView(BaseModel):
    """Current reserves and claim supply of a pool."""

    pool_id: str
    base_asset: str
    quote_asset: str
    claim_asset: str
    base_reserve: Uint64
    quote_reserve: Uint64
    claim_supply: Uint64
    phase: PoolPhase

    @classmethod
    def from_state(cls, state: PoolState) -> "PoolView":
        return cls(
            pool_id=state.pool_id,
            base_asset=state.base_asset,
            quote_asset=state.quote_asset,
            claim_asset=state.claim_asset,
            base_reserve=str(state.base_reserve),
            quote_reserve=str(state.quote_reserve),
            claim_supply=str(state.claim_supply),
            phase=state.phase,
        )


class CreatePoolRequest(BaseModel):
    """Seed a new pool with both assets."""

    account: AccountId
    base_asset: AssetId
    quote_asset: AssetId
    base_amount: Uint64
    quote_amount: Uint64


class CreatePoolResponse(BaseModel):
    claim_minted: Uint64
    pool: PoolView


class AddLiquidityRequest(BaseModel):
    """Offer both assets; the pool accepts the ratio-matched part."""

    account: AccountId
    base_amount: Uint64
    base_min: Uint64
    quote_amount: Uint64
    quote_min: Uint64


class AddLiquidityResponse(BaseModel):
    claim_minted: Uint64
    base_refund: Uint64
    quote_refund: Uint64
    pool: PoolView


class RemoveLiquidityRequest(BaseModel):
    account: AccountId
    claim_amount: Uint64


class RemoveLiquidityResponse(BaseModel):
    base_out: Uint64
    quote_out: Uint64
    pool: PoolView


class SwapRequest(BaseModel):
    account: AccountId
    direction: SwapDirection
    amount_in: Uint64
    min_out: Uint64 = Field(default="0", description="Minimum acceptable output")


class SwapResponse(BaseModel):
    direction: SwapDirection
    amount_in: Uint64
    amount_out: Uint64
    pool: PoolView


class QuoteResponse(BaseModel):
    direction: SwapDirection
    amount_in: Uint64
    amount_out: Uint64


class FundRequest(BaseModel):
    """Deposit an outside asset into a ledger account."""

    asset: AssetId
    amount: Uint64


class AccountView(BaseModel):
    account: str
    balances: dict[str, Uint64]


class OperatorRequest(BaseModel):
    caller: str = Field(min_length=1)


class RegistryView(BaseModel):
    registry_id: str
    operator: str
    paused: bool
    pool_count: int


class ErrorResponse(BaseModel):
    """Body returned for rejected pool operations."""

    error: str = Field(description="Stable error code, e.g. 'slippage_exceeded'")
    detail: str
