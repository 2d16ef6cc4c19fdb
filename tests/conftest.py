"""
Pytest configuration: make sure `import testament` works regardless of
where pytest is invoked, and provide shared store / registry fixtures.
"""

import sys
from pathlib import Path

import pytest

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from testament.db import SessionLocal, create_all, make_engine  # noqa: E402
from testament.host import LogicalClock  # noqa: E402
from testament.ledger import MemoryLedger  # noqa: E402
from testament.ledger_db import DBLedger  # noqa: E402
from testament.registry import WillRegistry  # noqa: E402
from testament.settings import Settings  # noqa: E402


@pytest.fixture
def engine():
    """Fresh in‑memory SQLite engine with the schema created."""
    eng = make_engine("sqlite://")
    create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_ledger(engine):
    with DBLedger(SessionLocal(engine)) as ledger:
        yield ledger


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """Each registry test runs against both store implementations."""
    if request.param == "memory":
        yield MemoryLedger()
    else:
        yield request.getfixturevalue("db_ledger")


@pytest.fixture
def clock():
    return LogicalClock(start=1_000)


@pytest.fixture
def registry(store):
    return WillRegistry(store, settings=Settings(input_policy="clamp"))


@pytest.fixture
def strict_registry(store):
    return WillRegistry(store, settings=Settings(input_policy="strict"))
