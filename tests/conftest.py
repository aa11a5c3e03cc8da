# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from ticketdesk.core.clock import get_clock
from ticketdesk.main import app
from ticketdesk.ticket.routes import get_tickets


class FakeClock:
    """Clock that moves forward one step on every call."""

    def __init__(self, start=datetime(2024, 1, 1, tzinfo=timezone.utc), step=timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self):
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def tickets():
    return AsyncMongoMockClient(tz_aware=True)["helpdesk"]["tickets"]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(tickets, clock):
    app.dependency_overrides[get_tickets] = lambda: tickets
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
