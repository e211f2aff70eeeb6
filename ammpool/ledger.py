"""In-process account ledger.

The HTTP API has no external custody layer, so it keeps per-account
balances here and hands the service real handles carved out of them.
Outside assets enter an account only through fund(). Claim tokens and
swap outputs enter only as the results of pool operations, so a caller
can never spend more than it was given.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

import structlog

from ammpool.assets import AssetHandle, Balance
from ammpool.constants import CLAIM_PREFIX
from ammpool.errors import AssetMismatch, InsufficientBalance

logger = structlog.get_logger()


class Ledger:
    """Balances per (account, asset)."""

    def __init__(self) -> None:
        self._accounts: dict[str, dict[str, Balance]] = {}
        self._lock = threading.Lock()

    def balance(self, account: str, asset: str) -> int:
        with self._lock:
            held = self._accounts.get(account, {}).get(asset)
            return held.value if held is not None else 0

    def balances(self, account: str) -> dict[str, int]:
        """Non-zero holdings of `account`."""
        with self._lock:
            return {
                asset: held.value
                for asset, held in self._accounts.get(account, {}).items()
                if held.value
            }

    def fund(self, account: str, asset: str, amount: int) -> int:
        """Deposit an outside asset into `account`.

        Returns:
            The account's new balance of `asset`

        Raises:
            AssetMismatch: If `asset` is a claim token
            Overflow: If the balance would exceed u64
        """
        if asset.startswith(CLAIM_PREFIX):
            raise AssetMismatch(f"{asset} is minted by its pool and cannot be funded")
        total = self.credit(account, Balance(asset, amount))
        logger.info("account_funded", account=account, asset=asset, amount=amount, balance=total)
        return total

    def credit(self, account: str, handle: AssetHandle) -> int:
        """Move everything in `handle` into `account`."""
        with self._lock:
            held = self._accounts.setdefault(account, {}).setdefault(
                handle.asset, Balance.zero(handle.asset)
            )
            return held.join(handle)

    def debit(self, account: str, asset: str, amount: int) -> Balance:
        """Carve `amount` of `asset` out of `account`.

        Raises:
            InsufficientBalance: If the account holds less than `amount`
        """
        with self._lock:
            held = self._accounts.get(account, {}).get(asset)
            available = held.value if held is not None else 0
            if amount > available:
                raise InsufficientBalance(
                    f"{account} holds {available} {asset}, needs {amount}"
                )
            if held is None:
                return Balance(asset, amount)
            return held.split(amount)

    @contextmanager
    def spend(self, account: str, asset: str, amount: int) -> Iterator[Balance]:
        """Debit a handle for one operation and credit back whatever it leaves.

        A pool operation either consumes its input handles or raises with
        them untouched, so a failed operation returns the funds in full.
        """
        handle = self.debit(account, asset, amount)
        try:
            yield handle
        finally:
            if handle.value:
                self.credit(account, handle)


@lru_cache(maxsize=1)
def get_default_ledger() -> Ledger:
    """Process-wide ledger backing the HTTP API."""
    return Ledger()
