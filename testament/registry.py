"""
testament.registry
==================

The public state‑transition API over a will store.

Every mutating operation takes a :class:`testament.host.TxContext` and
returns a :class:`testament.models.Result`.  Operations run one at a time
under the registry lock and inside ``store.atomic()``; a rejected
operation raises :class:`WillFault` inside the transaction, so nothing it
staged survives.

Quick start
-----------
>>> from testament.host import LogicalClock
>>> from testament.ledger import MemoryLedger
>>> reg = WillRegistry(MemoryLedger())
>>> clock = LogicalClock()
>>> reg.create_will(clock.context("alice"), "bob").ok
True
>>> reg.set_beneficiary(clock.context("alice"), "carol", 60, "STX").value.share
60
"""

from __future__ import annotations

import functools
import logging
import threading
from dataclasses import replace
from typing import List, Optional, Tuple

from .accounting import rebalance_total, release_share, within_limit
from .host import TxContext
from .ledger import WillStore
from .lifecycle import WillState, advance_state
from .models import Beneficiary, ProofOfLife, Result, Will, WillError, WillFault
from .proof_of_life import is_overdue, record_check_in
from .settings import Settings, settings as default_settings
from .validation import (
    VALID_ASSET_TYPES,
    resolve_check_in_period,
    resolve_share,
    validate_asset_type,
    validate_custom_data,
)

logger = logging.getLogger(__name__)


def transition(func):
    """Run a mutating operation atomically and turn faults into results."""

    @functools.wraps(func)
    def wrapper(self: "WillRegistry", ctx: TxContext, *args, **kwargs) -> Result:
        with self._lock:
            try:
                with self._store.atomic():
                    value = func(self, ctx, *args, **kwargs)
            except WillFault as fault:
                logger.warning("%s rejected for %s at %d: %s", func.__name__, ctx.caller, ctx.now, fault.error)
                return Result.failure(fault.error)
        logger.info("%s accepted for %s at %d", func.__name__, ctx.caller, ctx.now)
        return Result.success(value)

    return wrapper


class WillRegistry:
    """
    Will registry, beneficiary ledger and proof‑of‑life tracker.

    Parameters
    ----------
    store : WillStore
        Backing store (:class:`~testament.ledger.MemoryLedger` or
        :class:`~testament.ledger_db.DBLedger`).
    settings : Settings, optional
        Input policy and default check‑in period; the module‑level
        settings are used when omitted.
    """

    def __init__(self, store: WillStore, settings: Optional[Settings] = None) -> None:
        self._store = store
        self._settings = settings or default_settings
        self._lock = threading.RLock()

    @property
    def settings(self) -> Settings:
        return self._settings

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _open_will(self, owner: str) -> Will:
        """The owner's will, provided it exists and has not been executed."""
        will = self._store.get_will(owner)
        if will is None:
            raise WillFault(WillError.NOT_FOUND)
        if will.executed:
            raise WillFault(WillError.WILL_EXECUTED)
        return will

    # ------------------------------------------------------------------
    # Will lifecycle
    # ------------------------------------------------------------------
    @transition
    def create_will(self, ctx: TxContext, executor: str) -> Will:
        if self._store.get_will(ctx.caller) is not None:
            raise WillFault(WillError.ALREADY_INITIALIZED)
        if not executor or executor == ctx.caller:
            raise WillFault(WillError.INVALID_EXECUTOR)
        will = Will(owner=ctx.caller, executor=executor, last_modified=ctx.now)
        self._store.put_will(will)
        return will

    @transition
    def update_executor(self, ctx: TxContext, new_executor: str) -> Will:
        will = self._open_will(ctx.caller)
        if not new_executor or new_executor == ctx.caller:
            raise WillFault(WillError.INVALID_EXECUTOR)
        will = replace(will, executor=new_executor, last_modified=ctx.now)
        self._store.put_will(will)
        return will

    @transition
    def deactivate_will(self, ctx: TxContext) -> Will:
        will = advance_state(self._open_will(ctx.caller), WillState.INACTIVE, ctx.now)
        self._store.put_will(will)
        return will

    @transition
    def execute_will(self, ctx: TxContext, owner: str) -> Will:
        """
        Terminal transition, only for the executor and only once the
        owner's check‑in deadline has strictly passed.
        """
        will = self._store.get_will(owner)
        proof = self._store.get_proof(owner)
        if will is None or proof is None:
            raise WillFault(WillError.NOT_FOUND)
        if ctx.caller != will.executor:
            raise WillFault(WillError.NOT_AUTHORIZED)
        if will.executed:
            raise WillFault(WillError.WILL_EXECUTED)
        if not will.active:
            raise WillFault(WillError.NOT_AUTHORIZED)
        if not is_overdue(proof, ctx.now):
            raise WillFault(WillError.NOT_AUTHORIZED)
        if will.total_shares == 0:
            raise WillFault(WillError.INVALID_BENEFICIARY)
        will = advance_state(will, WillState.EXECUTED, ctx.now)
        self._store.put_will(will)
        return will

    # ------------------------------------------------------------------
    # Beneficiary ledger
    # ------------------------------------------------------------------
    @transition
    def set_beneficiary(
        self,
        ctx: TxContext,
        beneficiary: str,
        share: int,
        asset_type: str,
        custom_data: Optional[str] = None,
    ) -> Beneficiary:
        """Insert or update an entry, keeping ``total_shares`` exact."""
        will = self._open_will(ctx.caller)
        if not beneficiary or beneficiary == ctx.caller:
            raise WillFault(WillError.INVALID_BENEFICIARY)
        resolved = resolve_share(share, self._settings.input_policy)
        if resolved is None:
            raise WillFault(WillError.ZERO_SHARE)
        if not validate_asset_type(asset_type):
            raise WillFault(WillError.INVALID_ASSET_TYPE)
        if not validate_custom_data(custom_data):
            raise WillFault(WillError.INVALID_CUSTOM_DATA)

        previous = self._store.get_beneficiary(ctx.caller, beneficiary)
        total = rebalance_total(will.total_shares, previous, resolved)
        if not within_limit(total):
            raise WillFault(WillError.INVALID_SHARE_VALUE)

        entry = Beneficiary(
            owner=ctx.caller,
            beneficiary=beneficiary,
            share=resolved,
            asset_type=asset_type,
            custom_data=custom_data,
        )
        self._store.put_will(replace(will, total_shares=total, last_modified=ctx.now))
        self._store.put_beneficiary(entry)
        return entry

    @transition
    def remove_beneficiary(self, ctx: TxContext, beneficiary: str) -> Will:
        will = self._open_will(ctx.caller)
        entry = self._store.get_beneficiary(ctx.caller, beneficiary)
        if entry is None:
            raise WillFault(WillError.NOT_FOUND)
        will = replace(will, total_shares=release_share(will.total_shares, entry), last_modified=ctx.now)
        self._store.delete_beneficiary(ctx.caller, beneficiary)
        self._store.put_will(will)
        return will

    # ------------------------------------------------------------------
    # Proof of life
    # ------------------------------------------------------------------
    @transition
    def check_in(self, ctx: TxContext, period: Optional[int] = None) -> ProofOfLife:
        if period is None:
            period = self._settings.default_check_in_period
        resolved = resolve_check_in_period(period, self._settings.input_policy)
        if resolved is None:
            raise WillFault(WillError.INVALID_PERIOD)
        proof = record_check_in(ctx.caller, ctx.now, resolved)
        self._store.put_proof(proof)
        return proof

    # ------------------------------------------------------------------
    # Read‑only queries
    # ------------------------------------------------------------------
    def get_will(self, owner: str) -> Optional[Will]:
        with self._lock:
            return self._store.get_will(owner)

    def get_beneficiary(self, owner: str, beneficiary: str) -> Optional[Beneficiary]:
        with self._lock:
            return self._store.get_beneficiary(owner, beneficiary)

    def list_beneficiaries(self, owner: str) -> List[Beneficiary]:
        with self._lock:
            return self._store.beneficiaries_of(owner)

    def get_proof_of_life_status(self, owner: str) -> Optional[ProofOfLife]:
        with self._lock:
            return self._store.get_proof(owner)

    def is_will_active(self, owner: str) -> bool:
        will = self.get_will(owner)
        return will is not None and will.active and not will.executed

    @staticmethod
    def get_valid_asset_types() -> Tuple[str, ...]:
        return VALID_ASSET_TYPES
