"""
Testament
=========

A deterministic state‑transition core for digital wills: an owner names
an executor and beneficiaries with shares, proves they are alive through
periodic check‑ins, and the executor may execute the will once, after the
check‑in deadline has lapsed.

Import structure
----------------
`import testament` is intentionally cheap: the core sub‑modules use only
the standard library.  *pydantic‑settings* is pulled in by
:pymod:`testament.settings` (and therefore the registry), *sqlmodel* only
when you access :pymod:`testament.db` / :pymod:`testament.ledger_db`.

Sub‑modules
~~~~~~~~~~~
- :pymod:`testament.models`        – records, ``WillError`` kinds, ``Result``
- :pymod:`testament.validation`    – bounds, sanitizers, ``InputPolicy``
- :pymod:`testament.lifecycle`     – state‑machine guard (`advance_state`)
- :pymod:`testament.accounting`    – delta share accounting
- :pymod:`testament.proof_of_life` – check‑in deadlines
- :pymod:`testament.host`          – ``TxContext`` + ``LogicalClock``
- :pymod:`testament.ledger`        – ``MemoryLedger`` in‑memory store
- :pymod:`testament.ledger_db`     – ``DBLedger`` SQL store
- :pymod:`testament.registry`      – ``WillRegistry`` public API

Quick start
-----------
>>> from testament.host import LogicalClock
>>> from testament.ledger import MemoryLedger
>>> from testament.registry import WillRegistry
>>> reg, clock = WillRegistry(MemoryLedger()), LogicalClock()
>>> reg.create_will(clock.context("alice"), "bob").ok
True
>>> reg.is_will_active("alice")
True
"""

__all__ = [
    "models",
    "validation",
    "lifecycle",
    "accounting",
    "proof_of_life",
    "host",
    "ledger",
    "ledger_db",
    "registry",
]

__version__ = "0.1.0"
