"""Test helpers module for shared test utilities.

- constants: asset ids, operator address and seed amounts
- factories: pool factory functions
- api: TestClient helpers for funding accounts and creating pools
"""

from tests.helpers.constants import ALICE, BASE, MALLORY, OPERATOR, QUOTE, SEED_BASE, SEED_QUOTE
from tests.helpers.factories import make_pool, snapshot

__all__ = [
    "ALICE",
    "MALLORY",
    "BASE",
    "QUOTE",
    "OPERATOR",
    "SEED_BASE",
    "SEED_QUOTE",
    "make_pool",
    "snapshot",
]
