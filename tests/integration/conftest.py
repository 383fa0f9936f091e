"""Fixtures for integration tests against a live service."""

import os
from typing import AsyncGenerator

import httpx
import pytest


@pytest.fixture(scope="session")
def base_url() -> str:
    """Base URL for the vote API."""
    base = os.getenv("API_BASE_URL", "http://localhost:80")
    try:
        httpx.get(f"{base}/health", timeout=2.0)
    except httpx.HTTPError:
        pytest.skip(f"vote-api not reachable at {base}")
    return base


@pytest.fixture
async def live_client(base_url: str) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client for the running service."""
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0) as client:
        yield client
