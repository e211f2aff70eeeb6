"""Pydantic models for the pool HTTP API."""

from ammpool.models.pool import (
    AccountView,
    AddLiquidityRequest,
    AddLiquidityResponse,
    CreatePoolRequest,
    CreatePoolResponse,
    ErrorResponse,
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
from ammpool.models.types import AccountId, AssetId, Uint64, validate_uint64

__all__ = [
    "AccountView",
    "AddLiquidityRequest",
    "AddLiquidityResponse",
    "CreatePoolRequest",
    "CreatePoolResponse",
    "ErrorResponse",
    "FundRequest",
    "OperatorRequest",
    "PoolView",
    "QuoteResponse",
    "RegistryView",
    "RemoveLiquidityRequest",
    "RemoveLiquidityResponse",
    "SwapRequest",
    "SwapResponse",
    "AccountId",
    "AssetId",
    "Uint64",
    "validate_uint64",
]
