"""Pytest fixtures for testing"""

import itertools
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

import pytest
from fastapi.testclient import TestClient

from pixelfin.api.main import create_app
from pixelfin.domain.models import Transaction
from pixelfin.infrastructure.storage.memory import MemoryStorage
from pixelfin.services.ledger_store import LedgerStore

# Mid-day so that +/- a few hours never crosses a UTC calendar day
NOW = datetime(2024, 5, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Build transactions relative to NOW: days_ago=0 is today"""
    counter = itertools.count(1)

    def _make(
        kind: str,
        amount_cents: int,
        days_ago: int = 0,
        note: Optional[str] = None,
    ) -> Transaction:
        return Transaction(
            id=f"tx_{next(counter)}",
            kind=kind,
            amount_cents=amount_cents,
            created_at=NOW - timedelta(days=days_ago),
            note=note,
        )

    return _make


class TickingClock:
    """Clock that advances one second per call"""

    def __init__(self, start: datetime):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(seconds=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock(NOW)


@pytest.fixture
def memory_storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(memory_storage: MemoryStorage, clock: TickingClock) -> LedgerStore:
    return LedgerStore(memory_storage, key="ledger", clock=clock)


@pytest.fixture
def client(store: LedgerStore) -> Iterator[TestClient]:
    """FastAPI test client wired to an in-memory store"""
    app = create_app(store=store)
    with TestClient(app) as test_client:
        yield test_client
