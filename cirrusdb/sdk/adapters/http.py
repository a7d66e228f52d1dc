"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

HTTP/REST transport adapter (default).
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

import httpx

from cirrusdb.exceptions import TransportError
from cirrusdb.logging_config import get_logger
from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse

logger = get_logger(__name__)


class HttpAdapter(BaseAdapter):
    """Default HTTP transport using ``httpx.AsyncClient``.

    Args:
        timeout: Default request timeout in seconds. ``None`` keeps the
            httpx default.
        headers: Headers added to every request (e.g. a custom User-Agent).
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._headers = dict(headers or {})
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._connected = False

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            kwargs: Dict[str, Any] = {"headers": self._headers}
            if self._timeout is not None:
                kwargs["timeout"] = self._timeout
            if self._transport is not None:
                kwargs["transport"] = self._transport
            self._client = httpx.AsyncClient(**kwargs)
            self._connected = True
        return self._client

    async def send(self, request: TransportRequest) -> TransportResponse:
        client = self._ensure_client()
        start = time.monotonic()

        kwargs: Dict[str, Any] = {}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout

        try:
            resp = await client.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                content=request.body.encode("utf-8") if request.body is not None else None,
                **kwargs,
            )
        except httpx.HTTPError as e:
            logger.error(f"Transport failure: {request.method} {request.url}: {e}")
            raise TransportError(f"Request failed: {e}") from e

        elapsed = (time.monotonic() - start) * 1000

        return TransportResponse(
            status_code=resp.status_code,
            headers=dict(resp.headers),
            text=resp.text,
            elapsed_ms=round(elapsed, 2),
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
        self._connected = False

    @property
    def is_connected(self) -> bool:
        return self._connected
