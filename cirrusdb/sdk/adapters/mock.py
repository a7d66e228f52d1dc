"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Mock transport adapter for local testing.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Tuple, Union

from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse

MockReply = Union[TransportResponse, Exception]


def envelope_response(status_code: int = 200, **envelope: Any) -> TransportResponse:
    """Build a ``TransportResponse`` whose body is the JSON-encoded envelope.

    Example::

        envelope_response(success=True, results={"a": 1})
    """
    return TransportResponse(
        status_code=status_code,
        headers={"Content-Type": "application/json"},
        text=json.dumps(envelope),
    )


class MockAdapter(BaseAdapter):
    """In-memory mock adapter for unit tests.

    Args:
        responses: Mapping from ``(method, path)`` tuples to
            ``TransportResponse`` instances, or to exceptions that ``send``
            raises instead.

    Example::

        adapter = MockAdapter({
            ("GET", "/api/v1/"): envelope_response(success=True, results=[]),
        })
    """

    def __init__(
        self,
        responses: Optional[Dict[Tuple[str, str], MockReply]] = None,
    ) -> None:
        self._responses: Dict[Tuple[str, str], MockReply] = dict(responses or {})
        self._sent: list[TransportRequest] = []
        self._closed = False

    def add_response(self, method: str, path: str, reply: MockReply) -> None:
        """Register (or replace) the reply for ``(method, path)``."""
        self._responses[(method.upper(), path)] = reply

    async def send(self, request: TransportRequest) -> TransportResponse:
        self._sent.append(request)
        key = (request.method.upper(), request.path)
        reply = self._responses.get(key)
        if reply is None:
            return envelope_response(404, success=False, message="not mocked")
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def close(self) -> None:
        self._closed = True

    @property
    def is_connected(self) -> bool:
        return not self._closed

    @property
    def sent_requests(self) -> list[TransportRequest]:
        """All requests that have been sent through this adapter."""
        return list(self._sent)
