"""
testament.accounting
====================

Share accounting for the beneficiary ledger.

A will's ``total_shares`` must always equal the sum of its live
beneficiary shares.  Updates are computed as a *delta*: the previous
share of the beneficiary being written is subtracted before the new one
is added, so an insert (previous share 0) and an update go through the
same path and re‑registering the same value never double counts.

:func:`sum_shares` and :func:`is_conserved` are not used on the write
path.  They recompute the total from scratch and serve as property
checks for the conservation invariant (the test suite asserts them after
every sequence of registry operations).
"""

from __future__ import annotations

from typing import Iterable, Optional

from .models import Beneficiary, Will

MAX_TOTAL_SHARES = 100


def rebalance_total(total: int, previous: Optional[Beneficiary], share: int) -> int:
    """Total after replacing *previous* (if any) with *share*."""
    prior = previous.share if previous is not None else 0
    return total - prior + share


def release_share(total: int, entry: Beneficiary) -> int:
    """Total after removing *entry* from the ledger."""
    if entry.share > total:
        raise ValueError(f"share {entry.share} exceeds recorded total {total}")
    return total - entry.share


def within_limit(total: int) -> bool:
    return 0 <= total <= MAX_TOTAL_SHARES


def sum_shares(entries: Iterable[Beneficiary]) -> int:
    return sum(e.share for e in entries)


def is_conserved(will: Will, entries: Iterable[Beneficiary]) -> bool:
    """True when *will*'s running total matches its beneficiary entries."""
    total = sum_shares(e for e in entries if e.owner == will.owner)
    return total == will.total_shares and within_limit(total)
