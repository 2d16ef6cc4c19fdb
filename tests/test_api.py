"""
Tests for the HTTP adapter.

These tests use FastAPI TestClient against the real routers, with the
registry dependency overridden to an in‑memory SQLite ledger so nothing
touches the on‑disk database.
"""

import pytest
from fastapi.testclient import TestClient

from api.deps import get_clock, get_registry
from api.main import app
from testament.db import SessionLocal
from testament.host import LogicalClock
from testament.ledger_db import DBLedger
from testament.registry import WillRegistry
from testament.settings import Settings

PERIOD = 2_592_000


@pytest.fixture
def client(engine):
    registry = WillRegistry(DBLedger(SessionLocal(engine)), settings=Settings())
    clock = LogicalClock()
    app.dependency_overrides[get_registry] = lambda: registry
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


def _as(caller, t):
    return {"X-Caller": caller, "X-Logical-Time": str(t)}


def test_health(client):
    assert client.get("/").json()["status"] == "ok"


def test_asset_types(client):
    assert client.get("/asset-types").json() == ["STX", "BTC", "NFT", "DIGITAL-ASSET", "PHYSICAL-ASSET", "OTHER"]


def test_caller_header_required(client):
    assert client.post("/wills", json={"executor": "bob"}).status_code == 422


def test_create_and_read_will(client):
    resp = client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 10))
    assert resp.status_code == 201
    assert resp.json()["last_modified"] == 10

    assert client.get("/wills/alice").json()["executor"] == "bob"
    assert client.get("/wills/alice/active").json() == {"owner": "alice", "active": True}
    assert client.get("/wills/ghost").status_code == 404


def test_errors_map_to_status_codes(client):
    client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 1))

    dup = client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 2))
    assert dup.status_code == 409
    assert dup.json()["detail"] == {"error": "ALREADY_INITIALIZED", "code": 101}

    bad = client.put("/wills/beneficiaries/carol", json={"share": 10, "asset_type": "ETH"}, headers=_as("alice", 3))
    assert bad.status_code == 422
    assert bad.json()["detail"]["error"] == "INVALID_ASSET_TYPE"

    missing = client.post("/wills/deactivate", headers=_as("nobody", 4))
    assert missing.status_code == 404


def test_beneficiary_endpoints(client):
    client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 1))
    resp = client.put(
        "/wills/beneficiaries/carol",
        json={"share": 60, "asset_type": "BTC", "custom_data": "cold wallet"},
        headers=_as("alice", 2),
    )
    assert resp.status_code == 200
    assert resp.json()["share"] == 60

    client.put("/wills/beneficiaries/dave", json={"share": 40, "asset_type": "STX"}, headers=_as("alice", 3))
    assert [b["beneficiary"] for b in client.get("/wills/alice/beneficiaries").json()] == ["carol", "dave"]
    assert client.get("/wills/alice/beneficiaries/carol").json()["custom_data"] == "cold wallet"

    removed = client.delete("/wills/beneficiaries/carol", headers=_as("alice", 4))
    assert removed.json()["total_shares"] == 40
    assert client.get("/wills/alice/beneficiaries/carol").status_code == 404


def test_executor_update(client):
    client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 1))
    assert client.put("/wills/executor", json={"executor": "erin"}, headers=_as("alice", 2)).json()["executor"] == "erin"
    assert client.put("/wills/executor", json={"executor": "alice"}, headers=_as("alice", 3)).status_code == 422


def test_check_in_and_execute(client):
    client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 100))
    client.put("/wills/beneficiaries/carol", json={"share": 100, "asset_type": "STX"}, headers=_as("alice", 101))

    assert client.post("/check-ins", headers=_as("alice", 200)).json()["check_in_period"] == PERIOD
    status = client.get("/proof-of-life/alice").json()
    assert status["deadline"] == 200 + PERIOD

    early = client.post("/wills/alice/execute", headers=_as("bob", 1_200))
    assert early.status_code == 403
    assert client.post("/wills/alice/execute", headers=_as("mallory", 200 + PERIOD + 1)).status_code == 403

    done = client.post("/wills/alice/execute", headers=_as("bob", 200 + PERIOD + 2))
    assert done.status_code == 200
    assert done.json()["executed"] is True

    again = client.post("/wills/alice/execute", headers=_as("bob", 200 + PERIOD + 3))
    assert again.status_code == 409
    assert again.json()["detail"]["error"] == "WILL_EXECUTED"


def test_logical_time_never_goes_backwards(client):
    client.post("/check-ins", json={"period": 5_000_000}, headers=_as("alice", 500))
    client.post("/check-ins", json={"period": 5_000_000}, headers=_as("alice", 300))
    assert client.get("/proof-of-life/alice").json()["last_check_in"] == 500
    assert client.get("/proof-of-life/ghost").status_code == 404


def test_missing_time_header_ticks_logical_clock(client):
    client.post("/wills", json={"executor": "bob"}, headers=_as("alice", 100))
    client.put("/wills/beneficiaries/carol", json={"share": 100, "asset_type": "STX"}, headers=_as("alice", 101))
    client.post("/check-ins", json={"period": PERIOD}, headers=_as("alice", 200))

    resp = client.post("/wills/alice/execute", headers={"X-Caller": "bob"})
    assert resp.status_code == 403
    assert client.get("/wills/alice/active").json()["active"] is True


def test_headerless_request_keeps_host_time_domain(client):
    client.post("/check-ins", headers={"X-Caller": "alice"})
    assert client.get("/proof-of-life/alice").json()["last_check_in"] == 1

    client.post("/check-ins", headers=_as("alice", 300))
    assert client.get("/proof-of-life/alice").json()["last_check_in"] == 300
