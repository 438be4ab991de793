"""Shared test configuration and fixtures.

- All HTTP calls go through the local ASGI app via httpx.AsyncClient.
- The store handle is swapped through FastAPI dependency overrides for an
  in-memory Motor-compatible client (mongomock-motor), one database per test.
- AnyIO is the single async runner via pytest-anyio (@pytest.mark.anyio).
"""

from typing import Any, AsyncGenerator

import sys
import uuid
from pathlib import Path

import httpx
import pytest
from httpx import ASGITransport
from mongomock_motor import AsyncMongoMockClient

# Ensure backend root is on sys.path so that `server` module is importable
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from server import app
from app.auth import create_access_token
from app.db import StoreHandle, get_store


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Force pytest-anyio to use asyncio event loop."""

    return "asyncio"


@pytest.fixture(autouse=True)
def token_secret_env(monkeypatch) -> None:
    monkeypatch.setenv("ACCESS_TOKEN_SECRET", "test_access_token_secret")


@pytest.fixture(scope="function")
def store() -> StoreHandle:
    """Function-scoped isolated in-memory database for each test."""

    return StoreHandle(AsyncMongoMockClient(), f"gobook_test_{uuid.uuid4().hex}")


@pytest.fixture(scope="function")
def app_with_overrides(store: StoreHandle) -> Any:
    """FastAPI app instance whose get_store dependency points to the test store."""

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield app
    finally:
        app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def async_client(app_with_overrides) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app instance.

    App exceptions are not re-raised so uncaught errors are observed as the
    500 responses a real client would get.
    """

    transport = ASGITransport(app=app_with_overrides, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://test", timeout=30.0) as client:
        yield client


def token_from(response: httpx.Response) -> str:
    """Extract the `token` cookie value from a Set-Cookie header."""

    for header in response.headers.get_list("set-cookie"):
        name, _, rest = header.partition("=")
        if name.strip() == "token":
            return rest.split(";", 1)[0]
    raise AssertionError(f"no token cookie in {response.headers!r}")


def cookie_header(token: str) -> dict[str, str]:
    return {"Cookie": f"token={token}"}


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Cookie header carrying a valid token for a@b.com."""

    return cookie_header(create_access_token({"email": "a@b.com"}))
