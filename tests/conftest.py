"""Test configuration and fixtures."""

import asyncio
from datetime import datetime
from typing import Callable
from typing import List
from typing import Optional

import httpx
import pytest

from apicore.client import Client
from apicore.config import HTTPConfig
from apicore.models import Credentials
from apicore.websocket.connection import WEBSOCKET_CLOSE_MESSAGE

BASE_URL = "https://api.example.com"


@pytest.fixture
def credentials():
    """Credentials fixture."""
    return Credentials(
        access_key="test_access_key",
        passphrase="test_passphrase",
        signing_key="test_signing_key",
        portfolio_id="portfolio_123",
    )


@pytest.fixture
def http_config():
    """HTTP configuration fixture."""
    return HTTPConfig(
        base_url=BASE_URL,
        connect_timeout=2.0,
        read_timeout=3.0,
        user_agent="test-agent/1.0.0",
    )


@pytest.fixture
def header_calls() -> List[tuple]:
    """Arguments of every header function call."""
    return []


@pytest.fixture
def sign_headers(header_calls):
    """Header function that records its arguments and adds auth headers."""
    def _sign(request: httpx.Request, path: str, body: bytes, client: Client, timestamp: datetime) -> None:
        header_calls.append((request, path, body, client, timestamp))
        request.headers["X-Access-Key"] = client.credentials.access_key if client.credentials else ""
        request.headers["X-Timestamp"] = str(int(timestamp.timestamp()))
        request.headers["Content-Type"] = "application/json"
    return _sign


@pytest.fixture
async def make_client(credentials):
    """Factory for clients backed by an ``httpx.MockTransport``."""
    clients: List[Client] = []

    def _make(
        handler: Callable[[httpx.Request], httpx.Response],
        base_url: str = BASE_URL,
        with_credentials: bool = True,
    ) -> Client:
        client = Client(
            http_base_url=base_url,
            credentials=credentials if with_credentials else None,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.aclose()


@pytest.fixture
def json_handler():
    """Handler factory returning a fixed JSON response and recording requests."""
    def _factory(status_code: int = 200, payload=None, seen: Optional[list] = None):
        def _handler(request: httpx.Request) -> httpx.Response:
            if seen is not None:
                seen.append(request)
            return httpx.Response(status_code, json=payload if payload is not None else {})
        return _handler
    return _factory


class FakeWebSocketConnection:
    """Connection stub that replays scripted frames from ``read_message``."""

    def __init__(self, frames: List[object]) -> None:
        self._frames = list(frames)
        self.reads = 0

    async def read_message(self):
        self.reads += 1
        frame = self._frames.pop(0) if self._frames else (WEBSOCKET_CLOSE_MESSAGE, b"")
        if isinstance(frame, BaseException):
            raise frame
        await asyncio.sleep(0)
        return frame


@pytest.fixture
def fake_websocket():
    """Factory for scripted WebSocket connections."""
    return FakeWebSocketConnection
