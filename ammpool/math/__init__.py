"""Arithmetic for the constant-product pool.

This package provides the pure integer primitives behind every pool
transition:
- scaled_mul_div: floor(x * y / z) with a wide intermediate
- amount_out: fee-adjusted constant-product swap output
- optimal_deposit: ratio-matched deposit amounts
"""

from ammpool.math.pool_math import (
    amount_out,
    checked_add,
    checked_mul,
    optimal_deposit,
    scaled_mul_div,
)

__all__ = [
    "scaled_mul_div",
    "checked_mul",
    "checked_add",
    "amount_out",
    "optimal_deposit",
]
