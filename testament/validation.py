"""
testament.validation
====================

Pure predicates and clamping helpers guarding every mutation.

Bounds
------
- share: 1‑100
- check‑in period: 2 592 000 ‑ 31 536 000 (30 to 365 days, in seconds)
- custom data: 1‑255 characters when present
- asset type: one of :data:`VALID_ASSET_TYPES`

Out‑of‑range shares and periods are either clamped into range or
rejected, depending on the :class:`InputPolicy` the registry runs with.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Tuple

from .models import AssetType

MIN_SHARE = 1
MAX_SHARE = 100
MIN_CHECK_IN_PERIOD = 2_592_000
MAX_CHECK_IN_PERIOD = 31_536_000
MAX_CUSTOM_DATA_LENGTH = 255

VALID_ASSET_TYPES: Tuple[str, ...] = tuple(a.value for a in AssetType)


class InputPolicy(str, Enum):
    """How out‑of‑range share / period input is treated."""
    CLAMP = "clamp"     # replace with the minimum bound
    STRICT = "strict"   # reject

    def __str__(self) -> str:
        return self.value


def _is_uint(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


# ---------------------------------------------------------------------
# Shares
# ---------------------------------------------------------------------
def validate_share(share: Any) -> bool:
    return _is_uint(share) and MIN_SHARE <= share <= MAX_SHARE


def sanitize_share(share: Any) -> int:
    """Return *share* if it is in range, otherwise :data:`MIN_SHARE`."""
    return share if validate_share(share) else MIN_SHARE


def resolve_share(share: Any, policy: InputPolicy = InputPolicy.CLAMP) -> Optional[int]:
    """Apply *policy*; ``None`` means the share is rejected."""
    if policy is InputPolicy.CLAMP:
        share = sanitize_share(share)
    return share if validate_share(share) else None


# ---------------------------------------------------------------------
# Check‑in periods
# ---------------------------------------------------------------------
def validate_check_in_period(period: Any) -> bool:
    return (
        _is_uint(period)
        and period > 0
        and MIN_CHECK_IN_PERIOD <= period <= MAX_CHECK_IN_PERIOD
    )


def sanitize_check_in_period(period: Any) -> int:
    """Return *period* if it is in range, otherwise :data:`MIN_CHECK_IN_PERIOD`."""
    return period if validate_check_in_period(period) else MIN_CHECK_IN_PERIOD


def resolve_check_in_period(period: Any, policy: InputPolicy = InputPolicy.CLAMP) -> Optional[int]:
    """Apply *policy*; ``None`` means the period is rejected."""
    if policy is InputPolicy.CLAMP:
        period = sanitize_check_in_period(period)
    return period if validate_check_in_period(period) else None


# ---------------------------------------------------------------------
# Tags and free text
# ---------------------------------------------------------------------
def validate_asset_type(tag: Any) -> bool:
    return isinstance(tag, str) and len(tag) > 0 and tag in VALID_ASSET_TYPES


def validate_custom_data(data: Optional[str]) -> bool:
    """Absent data is always valid; present data must be 1‑255 characters."""
    if data is None:
        return True
    return isinstance(data, str) and 0 < len(data) <= MAX_CUSTOM_DATA_LENGTH
