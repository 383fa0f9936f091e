"""Pytest fixtures for the Vote API tests.

Provides an in-memory stand-in for the MySQL-backed Database, an app built
around it, and an httpx client talking to that app over ASGI.
"""

import asyncio
from typing import AsyncGenerator, Dict, List, Optional

import httpx
import pytest

from vote_api.main import create_app
from vote_api.models import Category


class FakeDatabase:
    """In-memory Database with the same coroutine interface.

    Set ``error`` to make every query raise it. ``ping_failures`` makes the
    first N pings fail before the database becomes reachable.
    """

    def __init__(self, ping_failures: int = 0):
        self.rows: Dict[str, int] = {}
        self.calls: List[str] = []
        self.error: Optional[Exception] = None
        self.schema_error: Optional[Exception] = None
        self.ping_failures = ping_failures
        self.closed = False

    def _record(self, name: str):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def connect(self):
        self.calls.append("connect")

    async def ping(self):
        self.calls.append("ping")
        if self.ping_failures > 0:
            self.ping_failures -= 1
            raise ConnectionRefusedError("Can't connect to MySQL server")

    async def create_schema(self):
        self._record("create_schema")
        if self.schema_error is not None:
            raise self.schema_error
        for category in Category:
            self.rows.setdefault(category.value, 0)

    async def increment(self, category: Category):
        # Yield first so concurrent requests interleave
        await asyncio.sleep(0)
        self._record("increment")
        if category.value in self.rows:
            self.rows[category.value] += 1

    async def get_tallies(self) -> Dict[str, int]:
        await asyncio.sleep(0)
        self._record("get_tallies")
        return dict(self.rows)

    async def check_health(self) -> bool:
        try:
            await self.ping()
            return True
        except Exception:
            return False

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_database() -> FakeDatabase:
    """Freshly initialized database: one zeroed row per category."""
    database = FakeDatabase()
    database.rows = {category.value: 0 for category in Category}
    return database


@pytest.fixture
def app(fake_database: FakeDatabase, tmp_path):
    """FastAPI app wired to the fake database with a throwaway static dir."""
    (tmp_path / "index.html").write_text("<h1>Cats vs. Dogs</h1>")
    return create_app(fake_database, static_dir=str(tmp_path))


@pytest.fixture
async def api_client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for making API requests against the app in-process."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers",
        "docker: mark test as requiring a running vote-api and MySQL"
    )
