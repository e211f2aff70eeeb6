"""Constant-product pool arithmetic.

Pure functions over u64 amounts. Every proportional computation goes
through scaled_mul_div, which multiplies with an unbounded intermediate
before dividing, so nothing is lost to a narrow product. All divisions
floor, which means rounding always favours the pool.

Formula (swap): amount_out = (in * 9970 * res_out) / (res_in * 10000 + in * 9970)
"""

from __future__ import annotations

from ammpool.constants import FEE_MULTIPLIER, FEE_SCALE
from ammpool.errors import InsufficientIn, InsufficientOut, Overlimit
from ammpool.safe_int import u64

__all__ = [
    "scaled_mul_div",
    "checked_mul",
    "checked_add",
    "amount_out",
    "optimal_deposit",
]


def scaled_mul_div(x: int, y: int, z: int) -> int:
    """Compute floor(x * y / z) with a wide intermediate.

    Args:
        x: First factor (u64)
        y: Second factor (u64)
        z: Divisor (u64)

    Returns:
        The quotient, narrowed back to u64

    Raises:
        DivideByZero: If z is zero
        Overflow: If any operand or the quotient does not fit in u64
    """
    return ((u64(x) * u64(y)) // u64(z)).to_u64()


def checked_mul(x: int, y: int) -> int:
    """Multiply two u64 values, raising Overflow if the product exceeds u64."""
    return (u64(x) * u64(y)).to_u64()


def checked_add(x: int, y: int) -> int:
    """Add two u64 values, raising Overflow if the sum exceeds u64."""
    return (u64(x) + u64(y)).to_u64()


def amount_out(input_amount: int, reserve_in: int, reserve_out: int) -> int:
    """Calculate swap output using the fee-adjusted constant product formula.

    The form ``in_fee * res_out / (res_in * FEE_SCALE + in_fee)`` is the
    algebraic rearrangement of ``res_out - k / (res_in + in_fee)`` that
    avoids subtract-then-divide, so the single floor division is the only
    rounding step.

    Args:
        input_amount: Amount being sold into the pool
        reserve_in: Pool reserve of the input asset
        reserve_out: Pool reserve of the output asset

    Returns:
        Output amount, rounded down

    Raises:
        Overflow: If input_amount * 9970 or the scaled reserve exceeds u64
        DivideByZero: If both reserve_in and input_amount are zero
    """
    input_after_fee = checked_mul(input_amount, FEE_MULTIPLIER)
    new_reserve_in_scaled = checked_add(checked_mul(reserve_in, FEE_SCALE), input_after_fee)
    return scaled_mul_div(input_after_fee, reserve_out, new_reserve_in_scaled)


def optimal_deposit(
    desired_in: int,
    desired_out: int,
    min_in: int,
    min_out: int,
    reserve_in: int,
    reserve_out: int,
) -> tuple[int, int]:
    """Pick deposit amounts from the pool's current reserves.

    When the out-asset is offered in excess, desired_in is kept and the out
    amount is scaled to the reserve ratio. Otherwise desired_out is kept and
    the in amount is desired_out * reserve_out / reserve_in, which equals the
    ratio-matched amount only when the reserves are equal.

    The accepted pair never exceeds what the caller offered and never falls
    below the caller's minimums.

    Args:
        desired_in: Amount of the "in" asset the caller offers
        desired_out: Amount of the "out" asset the caller offers
        min_in: Smallest "in" amount the caller will accept
        min_out: Smallest "out" amount the caller will accept
        reserve_in: Pool reserve of the "in" asset
        reserve_out: Pool reserve of the "out" asset

    Returns:
        Tuple of (accepted_in, accepted_out)

    Raises:
        InsufficientOut: Ratio-matched out amount is below min_out
        Overlimit: Ratio-matched in amount exceeds desired_in
        InsufficientIn: Ratio-matched in amount is below min_in
    """
    if reserve_in == 0 and reserve_out == 0:
        # First deposit (or a drained pool) sets the ratio
        return desired_in, desired_out

    implied_out = scaled_mul_div(desired_in, reserve_out, reserve_in)
    if implied_out <= desired_out:
        if implied_out < min_out:
            raise InsufficientOut(
                f"Ratio-matched out amount {implied_out} is below minimum {min_out}"
            )
        return desired_in, implied_out

    # Scaled by reserve_out / reserve_in, the same direction as implied_out.
    # On an unbalanced pool this does not match the reserve ratio.
    implied_in = scaled_mul_div(desired_out, reserve_out, reserve_in)
    if implied_in > desired_in:
        raise Overlimit(f"Ratio-matched in amount {implied_in} exceeds offered {desired_in}")
    if implied_in < min_in:
        raise InsufficientIn(f"Ratio-matched in amount {implied_in} is below minimum {min_in}")
    return implied_in, desired_out
