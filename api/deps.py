"""
api.deps
========

FastAPI dependency providers.

`get_registry` returns a singleton **WillRegistry** over the persistent
SQL ledger, `get_context` turns the request's headers into the
:class:`~testament.host.TxContext` the registry expects:

* ``X-Caller`` – authenticated identity of the caller (required)
* ``X-Logical-Time`` – host‑supplied logical time (optional; the server
  clock ticks by one otherwise).  The clock never moves backwards.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from testament.db import create_all
from testament.host import LogicalClock, TxContext
from testament.ledger_db import DBLedger
from testament.models import Result, WillError
from testament.registry import WillRegistry
from testament.settings import settings

# Failure kind → HTTP status
STATUS_CODES = {
    WillError.NOT_FOUND: 404,
    WillError.NOT_AUTHORIZED: 403,
    WillError.ALREADY_INITIALIZED: 409,
    WillError.WILL_EXECUTED: 409,
    WillError.INVALID_BENEFICIARY: 422,
    WillError.INVALID_EXECUTOR: 422,
    WillError.INVALID_ASSET_TYPE: 422,
    WillError.INVALID_CUSTOM_DATA: 422,
    WillError.INVALID_PERIOD: 422,
    WillError.ZERO_SHARE: 422,
    WillError.INVALID_SHARE_VALUE: 422,
}


@lru_cache
def get_settings():
    """Return application settings."""
    return settings


@lru_cache
def get_clock() -> LogicalClock:
    """Singleton logical clock (persists across requests)."""
    return LogicalClock()


@lru_cache
def get_registry() -> WillRegistry:
    """Singleton DB‑backed registry (persists across requests)."""
    create_all()
    return WillRegistry(DBLedger(), settings=get_settings())


def get_context(
    x_caller: str = Header(..., min_length=1),
    x_logical_time: Optional[int] = Header(None, ge=0),
    clock: LogicalClock = Depends(get_clock),
) -> TxContext:
    """Caller identity and logical time for the current request."""
    now = clock.tick() if x_logical_time is None else clock.observe(x_logical_time)
    return TxContext(caller=x_caller, now=now)


def unwrap(result: Result):
    """Return the result's value or raise the matching HTTPException."""
    if not result.ok:
        raise HTTPException(
            status_code=STATUS_CODES.get(result.error, 400),
            detail={"error": result.error.name, "code": result.error.value},
        )
    return result.value
