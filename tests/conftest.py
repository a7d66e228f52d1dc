"""
Pytest configuration and shared fixtures for CirrusDB client tests.
"""

import asyncio
import tempfile
from pathlib import Path
from typing import Generator, List, Optional

import pytest

from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse
from cirrusdb.sdk.adapters.mock import MockAdapter, envelope_response
from cirrusdb.sdk.client import CirrusClient


class GatedAdapter(BaseAdapter):
    """
    Adapter whose replies are released by the test.

    Every ``send`` parks on its own event until :meth:`release` is called,
    which lets tests observe how many requests are in flight at once.
    """

    def __init__(self, reply: Optional[TransportResponse] = None) -> None:
        self._reply = reply or envelope_response(success=True)
        self.started: List[TransportRequest] = []
        self._gates: List[asyncio.Event] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def send(self, request: TransportRequest) -> TransportResponse:
        gate = asyncio.Event()
        self.started.append(request)
        self._gates.append(gate)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await gate.wait()
        finally:
            self.in_flight -= 1
        return self._reply

    def release(self, index: int) -> None:
        self._gates[index].set()

    async def close(self) -> None:
        pass

    @property
    def is_connected(self) -> bool:
        return True


async def settle() -> None:
    """Let every ready coroutine run until the loop is idle."""
    for _ in range(10):
        await asyncio.sleep(0)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path to temporary directory that is cleaned up after test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_adapter() -> MockAdapter:
    return MockAdapter()


@pytest.fixture
def client(mock_adapter: MockAdapter) -> CirrusClient:
    """Client on the default ``/api/v1`` root, not yet authenticated."""
    return CirrusClient(adapter=mock_adapter, hostname="db.test", port=443)


@pytest.fixture
def authed_client(mock_adapter: MockAdapter) -> CirrusClient:
    """Client holding the token ``TOKEN123``."""
    return CirrusClient(
        adapter=mock_adapter, hostname="db.test", port=443, user_token="TOKEN123"
    )


@pytest.fixture
def gated_adapter() -> GatedAdapter:
    return GatedAdapter()


@pytest.fixture
def settle_loop():
    """The :func:`settle` helper, for tests that drive the event loop."""
    return settle
