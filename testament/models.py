"""
testament.models
================

Records, error kinds and the tagged result type shared by every layer.

The three records (:class:`Will`, :class:`Beneficiary`,
:class:`ProofOfLife`) are frozen dataclasses: stores hand out values, and
a mutation is always a fresh record written back through the store.  This
keeps snapshots cheap and makes rollback a matter of restoring the
previous mapping.  Like the rest of the core, this module carries **no**
external‑library dependencies.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class WillError(Enum):
    """Failure kinds returned by the state‑transition API (stable codes)."""
    NOT_AUTHORIZED = 100
    ALREADY_INITIALIZED = 101
    NOT_FOUND = 102
    INVALID_BENEFICIARY = 103
    WILL_EXECUTED = 104
    INVALID_EXECUTOR = 105
    INVALID_ASSET_TYPE = 106
    INVALID_CUSTOM_DATA = 107
    INVALID_PERIOD = 108
    ZERO_SHARE = 109
    INVALID_SHARE_VALUE = 110

    def __str__(self) -> str:
        return self.name


class AssetType(Enum):
    """Declared asset categories a beneficiary entry may name."""
    STX = "STX"
    BTC = "BTC"
    NFT = "NFT"
    DIGITAL_ASSET = "DIGITAL-ASSET"
    PHYSICAL_ASSET = "PHYSICAL-ASSET"
    OTHER = "OTHER"

    def __str__(self) -> str:
        return self.value


class WillFault(Exception):
    """
    Raised inside a transaction to abort it with a :class:`WillError`.

    The registry converts it into a failed :class:`Result`; it never
    leaves the public API.
    """

    def __init__(self, error: WillError) -> None:
        super().__init__(error.name)
        self.error = error


@dataclass(frozen=True)
class Will:
    """
    Root record of an estate plan, keyed by its owner.

    Parameters
    ----------
    owner : str
        Account identifier of the testator.
    executor : str
        The only account allowed to execute the will.  Never the owner.
    active : bool, default=True
        Whether the will is currently in force.
    executed : bool, default=False
        Terminal flag; an executed will is always inactive.
    total_shares : int, default=0
        Running sum of every beneficiary share for this owner (≤ 100).
    last_modified : int, default=0
        Logical time of the last mutation.
    """
    owner: str
    executor: str
    active: bool = True
    executed: bool = False
    total_shares: int = 0
    last_modified: int = 0

    def __post_init__(self):
        if self.executor == self.owner:
            raise ValueError("executor cannot be the will owner")
        if self.executed and self.active:
            raise ValueError("an executed will cannot be active")


@dataclass(frozen=True)
class Beneficiary:
    """One (owner, beneficiary) entry: share, asset type and optional note."""
    owner: str
    beneficiary: str
    share: int
    asset_type: str
    custom_data: Optional[str] = None


@dataclass(frozen=True)
class ProofOfLife:
    """Last check‑in time and the interval the owner committed to."""
    owner: str
    last_check_in: int
    check_in_period: int


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Tagged success / failure value returned by every public operation.

    Examples
    --------
    >>> Result.success(42).ok
    True
    >>> Result.failure(WillError.NOT_FOUND).error
    <WillError.NOT_FOUND: 102>
    """
    value: Optional[T] = None
    error: Optional[WillError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: WillError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising :class:`ValueError` on a failure."""
        if self.error is not None:
            raise ValueError(f"operation failed: {self.error.name}")
        return self.value

    def to_dict(self) -> Dict[str, Any]:
        """JSON‑friendly view of the result."""
        if self.error is not None:
            return {"ok": False, "error": self.error.name, "code": self.error.value}
        value = asdict(self.value) if is_dataclass(self.value) else self.value
        return {"ok": True, "value": value}
