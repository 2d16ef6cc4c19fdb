"""
tests/test_ledger.py
====================

Unit tests for testament.ledger.MemoryLedger
"""

import pytest

from testament.ledger import MemoryLedger
from testament.models import Beneficiary, ProofOfLife, Will


def _demo_ledger():
    ledger = MemoryLedger()
    ledger.put_will(Will("alice", "bob", total_shares=60))
    ledger.put_will(Will("zed", "yan"))
    ledger.put_beneficiary(Beneficiary("alice", "dave", 20, "BTC"))
    ledger.put_beneficiary(Beneficiary("alice", "carol", 40, "STX"))
    ledger.put_beneficiary(Beneficiary("zed", "carol", 10, "NFT"))
    return ledger


def test_put_and_get():
    ledger = _demo_ledger()
    assert ledger.get_will("alice").executor == "bob"
    assert ledger.get_will("nobody") is None
    assert ledger.get_beneficiary("alice", "carol").share == 40
    assert ledger.get_proof("alice") is None


def test_beneficiaries_of_is_sorted_and_scoped():
    ledger = _demo_ledger()
    assert [e.beneficiary for e in ledger.beneficiaries_of("alice")] == ["carol", "dave"]
    assert len(ledger.beneficiaries_of("zed")) == 1


def test_delete_missing_raises():
    with pytest.raises(KeyError):
        MemoryLedger().delete_beneficiary("alice", "carol")


def test_atomic_commits_on_success():
    ledger = MemoryLedger()
    with ledger.atomic():
        ledger.put_proof(ProofOfLife("alice", 5, 2_592_000))
    assert ledger.get_proof("alice").last_check_in == 5


def test_atomic_rolls_back_every_map():
    ledger = _demo_ledger()
    with pytest.raises(RuntimeError):
        with ledger.atomic():
            ledger.put_will(Will("alice", "erin", total_shares=0))
            ledger.delete_beneficiary("alice", "carol")
            ledger.put_proof(ProofOfLife("alice", 5, 2_592_000))
            raise RuntimeError("abort")

    assert ledger.get_will("alice").executor == "bob"
    assert ledger.get_beneficiary("alice", "carol") is not None
    assert ledger.get_proof("alice") is None
