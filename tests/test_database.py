# tests/test_database.py
import asyncio

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from ticketdesk.core import database
from ticketdesk.core.errors import StoreUnavailable
from ticketdesk.main import app

pytestmark = pytest.mark.anyio


class FakeClient:
    def __init__(self):
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def fresh_connection(monkeypatch):
    monkeypatch.setattr(database, "_connecting", None)


async def test_concurrent_callers_share_one_connection(monkeypatch):
    calls = []

    async def fake_connect(settings):
        calls.append(settings)
        await asyncio.sleep(0.01)
        return FakeClient()

    monkeypatch.setattr(database, "_connect", fake_connect)

    clients = await asyncio.gather(*(database.get_client() for _ in range(5)))

    assert len(calls) == 1
    assert all(c is clients[0] for c in clients)
    assert await database.get_client() is clients[0]


async def test_failed_connect_is_retried_on_next_call(monkeypatch):
    attempts = []

    async def flaky_connect(settings):
        attempts.append(settings)
        if len(attempts) == 1:
            raise ServerSelectionTimeoutError("no servers")
        return FakeClient()

    monkeypatch.setattr(database, "_connect", flaky_connect)

    with pytest.raises(StoreUnavailable):
        await database.get_client()
    client = await database.get_client()

    assert isinstance(client, FakeClient)
    assert len(attempts) == 2


async def test_close_client_closes_and_forgets(monkeypatch):
    async def fake_connect(settings):
        return FakeClient()

    monkeypatch.setattr(database, "_connect", fake_connect)
    client = await database.get_client()

    await database.close_client()

    assert client.closed
    assert database._connecting is None


async def test_close_client_waits_for_connect_in_flight(monkeypatch):
    release = asyncio.Event()
    created = []

    async def slow_connect(settings):
        await release.wait()
        client = FakeClient()
        created.append(client)
        return client

    monkeypatch.setattr(database, "_connect", slow_connect)
    caller = asyncio.ensure_future(database.get_client())
    await asyncio.sleep(0)

    closing = asyncio.ensure_future(database.close_client())
    await asyncio.sleep(0)
    release.set()
    await closing

    assert created[0].closed
    assert await caller is created[0]
    assert database._connecting is None


async def test_close_client_ignores_failed_connect(monkeypatch):
    async def failing_connect(settings):
        raise ServerSelectionTimeoutError("no servers")

    monkeypatch.setattr(database, "_connect", failing_connect)
    with pytest.raises(StoreUnavailable):
        await database.get_client()

    await database.close_client()

    assert database._connecting is None


class PingableDatabase:
    name = "helpdesk"

    def __init__(self, error=None):
        self.error = error

    async def command(self, name):
        if self.error:
            raise self.error
        return {"ok": 1}


def test_health_db_reports_store_state(client):
    app.dependency_overrides[database.get_database] = lambda: PingableDatabase()
    r = client.get("/health/db")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "helpdesk"}

    app.dependency_overrides[database.get_database] = lambda: PingableDatabase(ServerSelectionTimeoutError("down"))
    r2 = client.get("/health/db")
    assert r2.status_code == 500
