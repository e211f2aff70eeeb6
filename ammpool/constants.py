"""Pool constants.

Centralizes the fixed fee parameters and the integer bounds every pool
operation is checked against.
"""

# Largest value an unsigned 64-bit amount can hold
U64_MAX = 2**64 - 1

# Fee denominator (basis points)
FEE_SCALE = 10_000

# Swap fee in basis points (30 = 0.3%). Fixed, not configurable.
FEE_RATE_BPS = 30

# Multiplier applied to swap input: 10000 - 30 = 9970
FEE_MULTIPLIER = FEE_SCALE - FEE_RATE_BPS

# Reserves stay strictly below this so reserve * FEE_SCALE fits in u64
MAX_POOL_VALUE = U64_MAX // FEE_SCALE

# Claim token ids are this prefix followed by the pool id
CLAIM_PREFIX = "claim:"
