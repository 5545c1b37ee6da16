import os
import tempfile

_DB_PATH = os.path.join(tempfile.mkdtemp(prefix="tripsplit-"), "test.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"

import pytest
from httpx import ASGITransport, AsyncClient

from tripsplit.db.session import Base, engine
from tripsplit.main import app


@pytest.fixture
async def client():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def make_user(client):
    async def _make(name, phone_no=None):
        res = await client.post(
            "/api/v1/users/",
            json={"name": name, "phone_no": phone_no or f"555-{name.lower()}"},
        )
        assert res.status_code == 201, res.text
        return res.json()["data"]["id"]
    return _make


@pytest.fixture
def make_trip(client):
    async def _make(name):
        res = await client.post("/api/v1/trips/", json={"name": name})
        assert res.status_code == 201, res.text
        return res.json()["data"]["id"]
    return _make
