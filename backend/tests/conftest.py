import os, tempfile, uuid

# Must be set before burpeeboard.config is imported.
_DB_PATH = os.path.join(tempfile.gettempdir(), f"burpeeboard-test-{uuid.uuid4().hex[:8]}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["ENVIRONMENT"] = "dev"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["CONTEST_START"] = "2026-03-01"
os.environ["CONTEST_END"] = "2026-03-31"
os.environ["DAILY_GOAL"] = "100"

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient

from burpeeboard.db import Base, engine
from burpeeboard.main import app


@pytest_asyncio.fixture
async def db():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest_asyncio.fixture
async def ac(db):
    async with AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def sign_in():
    """Run the magic-link flow and return (auth headers, session body)."""
    async def _sign_in(ac: AsyncClient, email: str | None = None, name: str | None = None):
        email = email or f"user-{uuid.uuid4().hex[:8]}@ex.com"
        r = await ac.post("/auth/otp", json={"email": email})
        assert r.status_code == 200, r.text
        r = await ac.post("/auth/verify", json={"token": r.json()["token"]})
        assert r.status_code == 200, r.text
        body = r.json()
        hdrs = {"Authorization": f"Bearer {body['access']}"}
        if name:
            assert (await ac.put("/profile", headers=hdrs, json={"display_name": name})).status_code == 200
        return hdrs, body
    return _sign_in
