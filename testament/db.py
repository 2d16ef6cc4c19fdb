"""
testament.db
============

SQLite persistence layer for the Testament registry.

This module exposes:

* ``engine`` – a global SQLModel engine pointing at the configured URL
* ``SessionLocal`` – a session factory used via ``with SessionLocal() as s:``
* ``make_engine()`` – build a separate engine (tests use ``sqlite://``)
* ``create_all()`` – helper to create tables at first run

The CRUD helpers only *stage* changes on the session; committing is the
caller's job so that an operation's writes land together or not at all.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Field, Session, SQLModel, create_engine, select

from testament.models import Beneficiary, ProofOfLife, Will
from testament.settings import DB_ECHO, settings


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def make_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; in‑memory SQLite URLs share one connection."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo)


engine = make_engine(settings.db_url, echo=DB_ECHO)


# ---------------------------------------------------------------------------
# Session factory
# ---------------------------------------------------------------------------
def SessionLocal(bind: Optional[Engine] = None) -> Session:  # noqa: N802 (factory camel‑case for consistency with FastAPI docs)
    """Return a new Session bound to *bind* or the global engine."""
    return Session(bind or engine)


# ---------------------------------------------------------------------------
# ORM models mirroring testament.models
# ---------------------------------------------------------------------------
class WillRow(SQLModel, table=True):
    """SQL representation of a :class:`testament.models.Will`."""

    __tablename__ = "will"

    owner: str = Field(primary_key=True, index=True)
    executor: str
    active: bool = True
    executed: bool = False
    total_shares: int = 0
    last_modified: int = 0

    @classmethod
    def from_record(cls, will: Will) -> "WillRow":
        return cls(
            owner=will.owner,
            executor=will.executor,
            active=will.active,
            executed=will.executed,
            total_shares=will.total_shares,
            last_modified=will.last_modified,
        )

    def to_record(self) -> Will:
        return Will(
            owner=self.owner,
            executor=self.executor,
            active=self.active,
            executed=self.executed,
            total_shares=self.total_shares,
            last_modified=self.last_modified,
        )


class BeneficiaryRow(SQLModel, table=True):
    """Composite‑key row for one (owner, beneficiary) entry."""

    __tablename__ = "beneficiary"

    owner: str = Field(primary_key=True, index=True)
    beneficiary: str = Field(primary_key=True)
    share: int
    asset_type: str
    custom_data: Optional[str] = Field(default=None, max_length=255)

    @classmethod
    def from_record(cls, entry: Beneficiary) -> "BeneficiaryRow":
        return cls(
            owner=entry.owner,
            beneficiary=entry.beneficiary,
            share=entry.share,
            asset_type=entry.asset_type,
            custom_data=entry.custom_data,
        )

    def to_record(self) -> Beneficiary:
        return Beneficiary(
            owner=self.owner,
            beneficiary=self.beneficiary,
            share=self.share,
            asset_type=self.asset_type,
            custom_data=self.custom_data,
        )


class ProofOfLifeRow(SQLModel, table=True):
    __tablename__ = "proof_of_life"

    owner: str = Field(primary_key=True, index=True)
    last_check_in: int
    check_in_period: int

    @classmethod
    def from_record(cls, proof: ProofOfLife) -> "ProofOfLifeRow":
        return cls(
            owner=proof.owner,
            last_check_in=proof.last_check_in,
            check_in_period=proof.check_in_period,
        )

    def to_record(self) -> ProofOfLife:
        return ProofOfLife(
            owner=self.owner,
            last_check_in=self.last_check_in,
            check_in_period=self.check_in_period,
        )


# ---------------------------------------------------------------------------
# Convenience CRUD helpers (stage only, never commit)
# ---------------------------------------------------------------------------
def upsert_will(s: Session, will: Will) -> None:
    s.merge(WillRow.from_record(will))


def get_will(s: Session, owner: str) -> Will | None:
    """Return a will by owner or *None* if missing."""
    row = s.get(WillRow, owner)
    return row.to_record() if row else None


def upsert_beneficiary(s: Session, entry: Beneficiary) -> None:
    s.merge(BeneficiaryRow.from_record(entry))


def get_beneficiary(s: Session, owner: str, beneficiary: str) -> Beneficiary | None:
    row = s.get(BeneficiaryRow, (owner, beneficiary))
    return row.to_record() if row else None


def delete_beneficiary(s: Session, owner: str, beneficiary: str) -> None:
    """Delete an entry (raise KeyError if not present)."""
    row = s.get(BeneficiaryRow, (owner, beneficiary))
    if row is None:
        raise KeyError((owner, beneficiary))
    s.delete(row)


def beneficiaries_of(s: Session, owner: str) -> List[Beneficiary]:
    rows = s.exec(
        select(BeneficiaryRow)
        .where(BeneficiaryRow.owner == owner)
        .order_by(BeneficiaryRow.beneficiary)
    ).all()
    return [row.to_record() for row in rows]


def upsert_proof(s: Session, proof: ProofOfLife) -> None:
    s.merge(ProofOfLifeRow.from_record(proof))


def get_proof(s: Session, owner: str) -> ProofOfLife | None:
    row = s.get(ProofOfLifeRow, owner)
    return row.to_record() if row else None


# ---------------------------------------------------------------------------
# Utility: create tables
# ---------------------------------------------------------------------------
def create_all(bind: Optional[Engine] = None) -> None:
    """Create the will, beneficiary and proof_of_life tables if missing."""
    SQLModel.metadata.create_all(bind or engine)


# ---------------------------------------------------------------------------
# Lightweight CLI
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    """
    Quick bootstrap helper.

    Examples
    --------
    $ python -m testament.db --create        # first‑time table creation
    """
    import argparse

    parser = argparse.ArgumentParser(prog="python -m testament.db")
    parser.add_argument("--create", action="store_true", help="create tables")
    args = parser.parse_args()

    if args.create:
        create_all()
        print(f"testament schema initialised at {settings.db_url}")
