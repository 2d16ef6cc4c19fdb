"""
testament.proof_of_life
=======================

Temporal helpers for :class:`testament.models.ProofOfLife` records.

A will becomes executable only once the owner's grace period has
*strictly* elapsed, i.e. ``now > last_check_in + check_in_period``.
"""

from __future__ import annotations

from .models import ProofOfLife


def record_check_in(owner: str, now: int, period: int) -> ProofOfLife:
    """Fresh proof‑of‑life record for a check‑in made at *now*."""
    return ProofOfLife(owner=owner, last_check_in=now, check_in_period=period)


def execution_deadline(proof: ProofOfLife) -> int:
    """Last logical time at which the will is still protected."""
    return proof.last_check_in + proof.check_in_period


def is_overdue(proof: ProofOfLife, now: int) -> bool:
    return now > execution_deadline(proof)


def seconds_remaining(proof: ProofOfLife, now: int) -> int:
    """Time left before the deadline passes (0 once overdue)."""
    return max(execution_deadline(proof) - now, 0)
