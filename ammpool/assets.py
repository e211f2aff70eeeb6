"""Asset handles for pool custody.

The pool never holds raw integers for assets it custodies. It holds
handles that can be split and joined, and it mints and burns claim tokens
through a Supply. The ledger that backs real custody lives outside this
package; it only has to satisfy the AssetHandle protocol.

Balance and Supply are the in-memory implementations used by the service
layer and tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ammpool.errors import AssetMismatch
from ammpool.safe_int import S, u64


@runtime_checkable
class AssetHandle(Protocol):
    """Protocol for a fungible amount of a single asset.

    Joining consumes the other handle; splitting carves a new handle out
    of this one. Neither operation can create or destroy value.
    """

    @property
    def asset(self) -> str:
        """Identifier of the asset this handle holds."""
        ...

    @property
    def value(self) -> int:
        """Amount held."""
        ...

    def split(self, amount: int) -> AssetHandle:
        """Move `amount` out of this handle into a new one."""
        ...

    def join(self, other: AssetHandle) -> int:
        """Move all of `other` into this handle and return the new value."""
        ...


class Balance:
    """In-memory asset handle.

    Attributes:
        asset: Asset identifier
        value: Amount held (u64)
    """

    __slots__ = ("_asset", "_value")

    def __init__(self, asset: str, value: int = 0) -> None:
        self._asset = asset
        self._value = u64(value).value

    @property
    def asset(self) -> str:
        return self._asset

    @property
    def value(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"Balance({self._asset!r}, {self._value})"

    @classmethod
    def zero(cls, asset: str) -> Balance:
        """Create an empty handle for `asset`."""
        return cls(asset, 0)

    def split(self, amount: int) -> Balance:
        """Move `amount` out of this handle into a new one.

        Raises:
            Underflow: If amount exceeds the held value
        """
        self._value = (S(self._value) - u64(amount)).value
        return Balance(self._asset, amount)

    def join(self, other: AssetHandle) -> int:
        """Consume `other`, adding its value to this handle.

        Raises:
            AssetMismatch: If `other` holds a different asset
            Overflow: If the combined value exceeds u64
        """
        if other.asset != self._asset:
            raise AssetMismatch(f"Cannot join {other.asset} into {self._asset}")
        combined = (S(self._value) + u64(other.value)).to_u64()
        other.split(other.value)
        self._value = combined
        return combined

    def withdraw_all(self) -> Balance:
        """Empty this handle into a new one."""
        return self.split(self._value)


class Supply:
    """Mint/burn counter for a claim token.

    Attributes:
        asset: Identifier of the claim token
        total: Outstanding amount (u64)
    """

    __slots__ = ("_asset", "_total")

    def __init__(self, asset: str) -> None:
        self._asset = asset
        self._total = 0

    @property
    def asset(self) -> str:
        return self._asset

    @property
    def total(self) -> int:
        return self._total

    def mint(self, amount: int) -> Balance:
        """Increase supply and return a handle holding the new tokens.

        Raises:
            Overflow: If total supply would exceed u64
        """
        self._total = (S(self._total) + u64(amount)).to_u64()
        return Balance(self._asset, amount)

    def burn(self, balance: AssetHandle) -> int:
        """Consume `balance` and decrease supply by its value.

        Returns:
            The amount burned

        Raises:
            AssetMismatch: If `balance` is not this supply's token
            Underflow: If more is burned than is outstanding
        """
        if balance.asset != self._asset:
            raise AssetMismatch(f"Cannot burn {balance.asset} against {self._asset} supply")
        amount = balance.value
        self._total = (S(self._total) - amount).value
        balance.split(amount)
        return amount
