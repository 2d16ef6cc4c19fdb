"""
testament.lifecycle
===================

State‑transition guard for a :class:`testament.models.Will`.

A will only ever moves forward: an active will may be deactivated or
executed, a deactivated will may be deactivated again (a no‑op), and an
executed will is terminal.  :func:`advance_state` returns the updated
record after validating the transition.
"""

from __future__ import annotations

from dataclasses import replace
from enum import Enum, auto

from .models import Will


class WillState(Enum):
    """Life‑cycle phases derived from a will's flags."""
    ACTIVE = auto()
    INACTIVE = auto()
    EXECUTED = auto()

    def __str__(self) -> str:
        return self.name


# ---------------------------------------------------------------------
# Allowed transitions: source state → set[valid target states]
# ---------------------------------------------------------------------
RULES = {
    WillState.ACTIVE:   {WillState.INACTIVE, WillState.EXECUTED},
    WillState.INACTIVE: {WillState.INACTIVE},
    WillState.EXECUTED: set(),
}


def will_state(will: Will) -> WillState:
    if will.executed:
        return WillState.EXECUTED
    return WillState.ACTIVE if will.active else WillState.INACTIVE


def advance_state(will: Will, target: WillState, now: int) -> Will:
    """
    Return a copy of *will* moved to *target* and stamped with *now*,
    or raise :class:`ValueError` if the transition is illegal.

    Examples
    --------
    >>> w = Will("alice", "bob")
    >>> advance_state(w, WillState.EXECUTED, 10).executed
    True
    >>> advance_state(advance_state(w, WillState.EXECUTED, 10), WillState.INACTIVE, 11)
    Traceback (most recent call last):
        ...
    ValueError: illegal transition EXECUTED → INACTIVE
    """
    current = will_state(will)
    if target not in RULES.get(current, set()):
        raise ValueError(f"illegal transition {current.name} → {target.name}")
    return replace(
        will,
        active=False,
        executed=target is WillState.EXECUTED,
        last_modified=now,
    )
