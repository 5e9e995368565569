"""
Shared fixtures: an application wired to an in-memory history store and
a mock outbound transport, so no test touches the network or disk unless
it asks to.
"""

from contextlib import contextmanager
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from api_playground.config import Settings
from api_playground.main import create_app
from api_playground.services.history_store import InMemoryHistoryStore


OWNER = "alice"
OTHER_OWNER = "bob"


def default_handler(request: httpx.Request) -> httpx.Response:
    """Echo the outbound request back as JSON."""
    return httpx.Response(
        200,
        json={
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
            "body": request.content.decode("utf-8") if request.content else None,
        },
    )


@contextmanager
def get_test_client(
    handler: Callable[[httpx.Request], httpx.Response] = default_handler,
    store: InMemoryHistoryStore | None = None,
):
    """Context manager to create a test client with a fresh in-memory store."""
    store = store if store is not None else InMemoryHistoryStore()
    app = create_app(
        settings=Settings(history_backend="memory"),
        store=store,
        transport=httpx.MockTransport(handler),
    )
    with TestClient(app) as test_client:
        yield test_client


def owner_headers(owner: str = OWNER) -> dict[str, str]:
    return {"X-User-Id": owner}


@pytest.fixture
def client():
    """Test client whose outbound calls are echoed back."""
    with get_test_client() as c:
        yield c


@pytest.fixture
def memory_store():
    return InMemoryHistoryStore()
