# tests/conftest.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.main import app
from gateway import AsyncQueryClient, QueryBuilder, QueryResult

BASE_URL = "http://testserver"


@pytest.fixture
def client():
    c = TestClient(app)
    c.post("/reset")
    yield c
    c.post("/reset")


@pytest.fixture
def backend_gateway(client):
    # async gateway talking to the in-memory backend without a socket
    return AsyncQueryClient(BASE_URL, transport=httpx.ASGITransport(app=app))


def product_row(pid, name, category="Pottery", price=100, created_at="2024-01-01T00:00:00.000000+00:00"):
    return {"id": pid, "name": name, "category": category, "price": price,
            "description": "", "image": "/x.jpg", "created_at": created_at}


class FakeGateway:
    """
    Records every request. ``fail`` maps (method, table) to an error message.
    Inserts go to the front so reads stay newest first.
    """

    def __init__(self):
        self.calls = []
        self.tables = {"products": [], "inquiries": []}
        self.fail = {}
        self._seq = 0

    def table(self, name):
        return QueryBuilder(self, name)

    def count(self, method, table=None):
        return len([c for c in self.calls if c[0] == method and (table is None or c[1] == table)])

    async def request(self, method, table, params=None, payload=None):
        self.calls.append((method, table, dict(params or {}), payload))
        error = self.fail.get((method, table))
        if error:
            return QueryResult(error=error, status_code=400)
        rows = self.tables[table]
        if method == "GET":
            return QueryResult(data=[dict(r) for r in rows], status_code=200)
        if method == "POST":
            inserted = []
            for r in payload:
                self._seq += 1
                inserted.append(dict(r, id=f"id-{self._seq}", created_at=f"2024-01-01T00:00:{self._seq:02d}.000000+00:00"))
            rows[:0] = list(reversed(inserted))
            return QueryResult(data=inserted, status_code=201)
        if method == "DELETE":
            target = params["id"].split(".", 1)[1]
            deleted = [r for r in rows if r["id"] == target]
            rows[:] = [r for r in rows if r["id"] != target]
            return QueryResult(data=deleted, status_code=200)
        raise AssertionError(f"unexpected method {method}")


class GatedGateway(FakeGateway):
    """Reads snapshot the table immediately but only answer once their gate is set."""

    def __init__(self):
        super().__init__()
        self.gates = []

    async def request(self, method, table, params=None, payload=None):
        if method != "GET":
            return await super().request(method, table, params, payload)
        self.calls.append((method, table, dict(params or {}), payload))
        snapshot = [dict(r) for r in self.tables[table]]
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return QueryResult(data=snapshot, status_code=200)


@pytest.fixture
def fake_gateway():
    return FakeGateway()
