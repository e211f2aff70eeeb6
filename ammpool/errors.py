"""Pool error classes.

Every failed pool operation raises one of these. Each class carries a
stable ``code`` so callers (and the HTTP layer) can tell failures apart
without parsing messages.
"""

from typing import ClassVar


class AmmError(Exception):
    """Base error for pool operations."""

    code: ClassVar[str] = "amm_error"


class ZeroAmount(AmmError):
    """A supplied amount that must be positive is zero."""

    code = "zero_amount"


class ReservesEmpty(AmmError):
    """Swap attempted against a pool with an empty side."""

    code = "reserves_empty"


class PoolFull(AmmError):
    """A reserve would reach or exceed MAX_POOL_VALUE."""

    code = "pool_full"


class InsufficientBase(AmmError):
    """Base amount below the caller's minimum, or the minimum itself is zero."""

    code = "insufficient_base"


class InsufficientQuote(AmmError):
    """Quote amount below the caller's minimum, or the minimum itself is zero."""

    code = "insufficient_quote"


class InsufficientIn(AmmError):
    """Ratio-matched input amount falls below the caller's minimum."""

    code = "insufficient_in"


class InsufficientOut(AmmError):
    """Ratio-matched output amount falls below the caller's minimum."""

    code = "insufficient_out"


class Overlimit(AmmError):
    """Required input exceeds what the caller offered."""

    code = "overlimit"


class SlippageExceeded(AmmError):
    """Swap output is below the caller's minimum acceptable output."""

    code = "slippage_exceeded"


class AssetMismatch(AmmError):
    """Asset handle belongs to a different asset than expected."""

    code = "asset_mismatch"


class RegistryPaused(AmmError):
    """Pool-mutating operations are halted by the registry."""

    code = "registry_paused"


class NotOperator(AmmError):
    """Caller is not the registry operator."""

    code = "not_operator"


class PoolNotFound(AmmError):
    """No pool with the requested id."""

    code = "pool_not_found"


class PoolExists(AmmError):
    """A pool for this asset pair already exists."""

    code = "pool_exists"


class InsufficientBalance(AmmError):
    """Account holds less of an asset than it tried to spend."""

    code = "insufficient_balance"


class PoolArithmeticError(AmmError, ArithmeticError):
    """Base class for integer arithmetic failures.

    These indicate an internal guard firing. Given the reserve bounds they
    should be unreachable from valid inputs.
    """

    code = "arithmetic_error"


class DivideByZero(PoolArithmeticError):
    """Division or modulo by zero."""

    code = "divide_by_zero"


class Underflow(PoolArithmeticError):
    """Subtraction would produce a negative result."""

    code = "underflow"


class Overflow(PoolArithmeticError):
    """Value does not fit in an unsigned 64-bit integer."""

    code = "overflow"


__all__ = [
    "AmmError",
    "ZeroAmount",
    "ReservesEmpty",
    "PoolFull",
    "InsufficientBase",
    "InsufficientQuote",
    "InsufficientIn",
    "InsufficientOut",
    "Overlimit",
    "SlippageExceeded",
    "AssetMismatch",
    "RegistryPaused",
    "NotOperator",
    "PoolNotFound",
    "PoolExists",
    "InsufficientBalance",
    "PoolArithmeticError",
    "DivideByZero",
    "Underflow",
    "Overflow",
]
