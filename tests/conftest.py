"""Shared fixtures: controllable clock, fresh ledger, API client."""
import pytest
from fastapi.testclient import TestClient

from emission_ledger.dependencies import get_ledger
from emission_ledger.main import app
from emission_ledger.services.ledger import EmissionLedger

START = 1_700_000_000.0


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger(clock):
    return EmissionLedger(clock=clock)


@pytest.fixture
def client(ledger):
    app.dependency_overrides[get_ledger] = lambda: ledger
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
