"""
testament.host
==============

Adapter for what the hosting ledger would normally supply: the identity
of the caller and a monotonically non‑decreasing logical clock.

Every operation receives one :class:`TxContext`; all reads and writes
within that operation see the same ``now``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TxContext:
    """Caller identity and logical time of a single transaction."""
    caller: str
    now: int

    def __post_init__(self):
        if not self.caller:
            raise ValueError("caller identity cannot be empty")
        if self.now < 0:
            raise ValueError("logical time cannot be negative")


class LogicalClock:
    """
    Thread‑safe, never‑decreasing counter standing in for block height.

    Example
    -------
    >>> clock = LogicalClock()
    >>> clock.tick()
    1
    >>> clock.advance_to(2_592_001)
    2592001
    >>> clock.context("alice").now
    2592002
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("start cannot be negative")
        self._now = start
        self._lock = threading.Lock()

    @property
    def now(self) -> int:
        return self._now

    def tick(self, step: int = 1) -> int:
        """Move forward by *step* and return the new time."""
        if step < 0:
            raise ValueError("step cannot be negative")
        with self._lock:
            self._now += step
            return self._now

    def advance_to(self, t: int) -> int:
        """Jump to *t*; raise :class:`ValueError` if that would go backwards."""
        with self._lock:
            if t < self._now:
                raise ValueError(f"logical time cannot go backwards ({t} < {self._now})")
            self._now = t
            return self._now

    def observe(self, t: int) -> int:
        """Move to *t* if it is ahead, otherwise keep the current time."""
        with self._lock:
            self._now = max(self._now, t)
            return self._now

    def context(self, caller: str, at: Optional[int] = None) -> TxContext:
        """Build a :class:`TxContext`, ticking unless *at* pins the time."""
        now = self.tick() if at is None else self.advance_to(at)
        return TxContext(caller=caller, now=now)
