"""
testament.ledger_db
===================

SQL‑backed implementation of the :class:`testament.ledger.MemoryLedger`
public surface.

This adapter wraps the CRUD helpers in :pymod:`testament.db` so that a
:class:`testament.registry.WillRegistry` can switch to a persistent store
without changing its calls.  ``atomic()`` commits the session when the
block succeeds and rolls it back otherwise.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlmodel import Session

from testament import db
from testament.models import Beneficiary, ProofOfLife, Will

logger = logging.getLogger(__name__)


class DBLedger:
    """
    Drop‑in replacement for MemoryLedger backed by SQLModel.

    Methods mirror the in‑memory ledger:
    * get_will / put_will
    * get_beneficiary / put_beneficiary / delete_beneficiary / beneficiaries_of
    * get_proof / put_proof
    * atomic()
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session = session or db.SessionLocal()

    # ----------------------------------------------------------------- wills
    def get_will(self, owner: str) -> Optional[Will]:
        return db.get_will(self._session, owner)

    def put_will(self, will: Will) -> None:
        db.upsert_will(self._session, will)

    # --------------------------------------------------------- beneficiaries
    def get_beneficiary(self, owner: str, beneficiary: str) -> Optional[Beneficiary]:
        return db.get_beneficiary(self._session, owner, beneficiary)

    def put_beneficiary(self, entry: Beneficiary) -> None:
        db.upsert_beneficiary(self._session, entry)

    def delete_beneficiary(self, owner: str, beneficiary: str) -> None:
        db.delete_beneficiary(self._session, owner, beneficiary)

    def beneficiaries_of(self, owner: str) -> List[Beneficiary]:
        return db.beneficiaries_of(self._session, owner)

    # --------------------------------------------------------- proof of life
    def get_proof(self, owner: str) -> Optional[ProofOfLife]:
        return db.get_proof(self._session, owner)

    def put_proof(self, proof: ProofOfLife) -> None:
        db.upsert_proof(self._session, proof)

    # ---------------------------------------------------------- transactions
    @contextmanager
    def atomic(self) -> Iterator["DBLedger"]:
        try:
            yield self
            self._session.commit()
        except BaseException:
            self._session.rollback()
            logger.debug("db ledger rolled back")
            raise

    # ----------------------------------------------------- context manager
    def __enter__(self) -> "DBLedger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._session.close()
