"""API endpoints for pool operations.

Requests name a ledger account. Every input handle is debited from that
account before the service sees it, and every handle the service returns
(claim tokens, refunds, withdrawals, swap output) is credited back to it.
"""

from fastapi import APIRouter, Depends, Query

from ammpool.constants import U64_MAX
from ammpool.ledger import Ledger, get_default_ledger
from ammpool.models import (
    AccountView,
    AddLiquidityRequest,
    AddLiquidityResponse,
    CreatePoolRequest,
    CreatePoolResponse,
    FundRequest,
    OperatorRequest,
    PoolView,
    QuoteResponse,
    RegistryView,
    RemoveLiquidityRequest,
    RemoveLiquidityResponse,
    SwapRequest,
    SwapResponse,
)
from ammpool.pool import SwapDirection
from ammpool.service import PoolService, get_default_service

router = APIRouter()


def get_service() -> PoolService:
    """Dependency provider for the pool service.

    Override this in tests to inject an isolated service:
        app.dependency_overrides[get_service] = lambda: service
    """
    return get_default_service()


def get_ledger() -> Ledger:
    """Dependency provider for the account ledger."""
    return get_default_ledger()


def account_view(ledger: Ledger, account: str) -> AccountView:
    return AccountView(
        account=account,
        balances={asset: str(value) for asset, value in ledger.balances(account).items()},
    )


@router.get("/accounts/{account}")
def get_account(account: str, ledger: Ledger = Depends(get_ledger)) -> AccountView:
    return account_view(ledger, account)


@router.post("/accounts/{account}/fund")
def fund_account(
    account: str,
    request: FundRequest,
    ledger: Ledger = Depends(get_ledger),
) -> AccountView:
    """Deposit an outside asset. Claim tokens cannot be funded."""
    ledger.fund(account, request.asset, int(request.amount))
    return account_view(ledger, account)


@router.get("/pools")
def list_pools(service: PoolService = Depends(get_service)) -> list[PoolView]:
    return [PoolView.from_state(state) for state in service.pools()]


@router.post("/pools", status_code=201)
def create_pool(
    request: CreatePoolRequest,
    service: PoolService = Depends(get_service),
    ledger: Ledger = Depends(get_ledger),
) -> CreatePoolResponse:
    """Create a pool from the account's assets and credit it the initial claim tokens."""
    account = request.account
    with ledger.spend(account, request.base_asset, int(request.base_amount)) as base:
        with ledger.spend(account, request.quote_asset, int(request.quote_amount)) as quote:
            pool_id, claim = service.create_pool(base, quote)
    minted = claim.value
    ledger.credit(account, claim)
    return CreatePoolResponse(
        claim_minted=str(minted),
        pool=PoolView.from_state(service.reserves(pool_id)),
    )


@router.get("/pools/{pool_id}")
def get_pool(pool_id: str, service: PoolService = Depends(get_service)) -> PoolView:
    """Reserves and claim supply of one pool."""
    return PoolView.from_state(service.reserves(pool_id))


@router.get("/pools/{pool_id}/quote")
def quote(
    pool_id: str,
    direction: SwapDirection,
    amount: int = Query(ge=0, le=U64_MAX),
    service: PoolService = Depends(get_service),
) -> QuoteResponse:
    """Price a hypothetical swap. Does not change the pool."""
    amount_out = service.quote(pool_id, direction, amount)
    return QuoteResponse(direction=direction, amount_in=str(amount), amount_out=str(amount_out))


@router.post("/pools/{pool_id}/liquidity")
def add_liquidity(
    pool_id: str,
    request: AddLiquidityRequest,
    service: PoolService = Depends(get_service),
    ledger: Ledger = Depends(get_ledger),
) -> AddLiquidityResponse:
    """Deposit both assets; the unmatched excess is refunded to the account."""
    account = request.account
    state = service.reserves(pool_id)
    with ledger.spend(account, state.base_asset, int(request.base_amount)) as base:
        with ledger.spend(account, state.quote_asset, int(request.quote_amount)) as quote:
            result = service.add_liquidity(
                pool_id, base, int(request.base_min), quote, int(request.quote_min)
            )
    response = AddLiquidityResponse(
        claim_minted=str(result.claim.value),
        base_refund=str(result.base_refund.value),
        quote_refund=str(result.quote_refund.value),
        pool=PoolView.from_state(service.reserves(pool_id)),
    )
    for handle in (result.claim, result.base_refund, result.quote_refund):
        ledger.credit(account, handle)
    return response


@router.post("/pools/{pool_id}/withdraw")
def remove_liquidity(
    pool_id: str,
    request: RemoveLiquidityRequest,
    service: PoolService = Depends(get_service),
    ledger: Ledger = Depends(get_ledger),
) -> RemoveLiquidityResponse:
    """Redeem the account's claim tokens for a pro-rata share of both reserves."""
    account = request.account
    state = service.reserves(pool_id)
    with ledger.spend(account, state.claim_asset, int(request.claim_amount)) as claim:
        base_out, quote_out = service.remove_liquidity(pool_id, claim)
    response = RemoveLiquidityResponse(
        base_out=str(base_out.value),
        quote_out=str(quote_out.value),
        pool=PoolView.from_state(service.reserves(pool_id)),
    )
    ledger.credit(account, base_out)
    ledger.credit(account, quote_out)
    return response


@router.post("/pools/{pool_id}/swap")
def swap(
    pool_id: str,
    request: SwapRequest,
    service: PoolService = Depends(get_service),
    ledger: Ledger = Depends(get_ledger),
) -> SwapResponse:
    """Sell `amount_in` of one asset from the account for the other."""
    state = service.reserves(pool_id)
    asset_in = (
        state.base_asset
        if request.direction is SwapDirection.BASE_TO_QUOTE
        else state.quote_asset
    )
    with ledger.spend(request.account, asset_in, int(request.amount_in)) as handle:
        out = service.swap(pool_id, request.direction, handle, int(request.min_out))
    amount_out = out.value
    ledger.credit(request.account, out)
    return SwapResponse(
        direction=request.direction,
        amount_in=request.amount_in,
        amount_out=str(amount_out),
        pool=PoolView.from_state(service.reserves(pool_id)),
    )


@router.get("/registry")
def get_registry(service: PoolService = Depends(get_service)) -> RegistryView:
    registry = service.registry
    return RegistryView(
        registry_id=registry.registry_id,
        operator=registry.operator,
        paused=registry.paused,
        pool_count=registry.pool_count,
    )


@router.post("/registry/pause")
def pause(request: OperatorRequest, service: PoolService = Depends(get_service)) -> RegistryView:
    """Halt pool-mutating operations (operator only)."""
    service.pause(request.caller)
    return get_registry(service)


@router.post("/registry/unpause")
def unpause(request: OperatorRequest, service: PoolService = Depends(get_service)) -> RegistryView:
    """Resume pool-mutating operations (operator only)."""
    service.unpause(request.caller)
    return get_registry(service)
