"""
testament.ledger
================

An in‑memory keyed store holding the three record types:

* wills, keyed by owner
* beneficiary entries, keyed by ``(owner, beneficiary)``
* proof‑of‑life records, keyed by owner

This module is intentionally simple (only the standard library) so that
the registry can be unit‑tested without a database.
:class:`testament.ledger_db.DBLedger` offers the same surface over SQL.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

from .models import Beneficiary, ProofOfLife, Will

logger = logging.getLogger(__name__)


class WillStore(Protocol):
    """Surface the registry needs from a backing store."""

    def get_will(self, owner: str) -> Optional[Will]: ...
    def put_will(self, will: Will) -> None: ...
    def get_beneficiary(self, owner: str, beneficiary: str) -> Optional[Beneficiary]: ...
    def put_beneficiary(self, entry: Beneficiary) -> None: ...
    def delete_beneficiary(self, owner: str, beneficiary: str) -> None: ...
    def beneficiaries_of(self, owner: str) -> List[Beneficiary]: ...
    def get_proof(self, owner: str) -> Optional[ProofOfLife]: ...
    def put_proof(self, proof: ProofOfLife) -> None: ...
    def atomic(self): ...


class MemoryLedger:
    """
    Dictionary‑backed store with snapshot / rollback transactions.

    Example
    -------
    >>> ledger = MemoryLedger()
    >>> with ledger.atomic():
    ...     ledger.put_will(Will("alice", "bob"))
    >>> ledger.get_will("alice").executor
    'bob'
    """

    def __init__(self) -> None:
        self._wills: Dict[str, Will] = {}
        self._beneficiaries: Dict[Tuple[str, str], Beneficiary] = {}
        self._proofs: Dict[str, ProofOfLife] = {}

    # ------------------------------------------------------------------
    # Wills
    # ------------------------------------------------------------------
    def get_will(self, owner: str) -> Optional[Will]:
        return self._wills.get(owner)

    def put_will(self, will: Will) -> None:
        """Insert or overwrite the will of ``will.owner``."""
        self._wills[will.owner] = will

    # ------------------------------------------------------------------
    # Beneficiaries
    # ------------------------------------------------------------------
    def get_beneficiary(self, owner: str, beneficiary: str) -> Optional[Beneficiary]:
        return self._beneficiaries.get((owner, beneficiary))

    def put_beneficiary(self, entry: Beneficiary) -> None:
        self._beneficiaries[(entry.owner, entry.beneficiary)] = entry

    def delete_beneficiary(self, owner: str, beneficiary: str) -> None:
        """Remove an entry (raise KeyError if not present)."""
        del self._beneficiaries[(owner, beneficiary)]

    def beneficiaries_of(self, owner: str) -> List[Beneficiary]:
        """Entries of *owner*, ordered by beneficiary id."""
        return sorted(
            (e for (o, _), e in self._beneficiaries.items() if o == owner),
            key=lambda e: e.beneficiary,
        )

    # ------------------------------------------------------------------
    # Proof of life
    # ------------------------------------------------------------------
    def get_proof(self, owner: str) -> Optional[ProofOfLife]:
        return self._proofs.get(owner)

    def put_proof(self, proof: ProofOfLife) -> None:
        self._proofs[proof.owner] = proof

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    @contextmanager
    def atomic(self) -> Iterator["MemoryLedger"]:
        """
        Run a block as one unit: any exception restores every map to the
        state it had on entry, then propagates.
        """
        snapshot = (dict(self._wills), dict(self._beneficiaries), dict(self._proofs))
        try:
            yield self
        except BaseException:
            self._wills, self._beneficiaries, self._proofs = snapshot
            logger.debug("memory ledger rolled back")
            raise
