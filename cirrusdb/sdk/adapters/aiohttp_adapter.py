"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

aiohttp transport adapter.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Dict, Optional

import aiohttp
from aiohttp import ClientTimeout, TCPConnector

from cirrusdb.exceptions import TransportError
from cirrusdb.logging_config import get_logger
from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse

logger = get_logger(__name__)


class AiohttpAdapter(BaseAdapter):
    """Transport backed by an ``aiohttp.ClientSession``.

    The session and connector are created on first use, inside the running
    event loop.

    Args:
        timeout: Default total request timeout in seconds.
        max_connections: Connector pool size (default: 100).
        headers: Headers added to every request.
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        max_connections: int = 100,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._timeout = ClientTimeout(total=timeout)
        self._max_connections = max_connections
        self._headers = dict(headers or {})
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers,
                timeout=self._timeout,
                connector=TCPConnector(limit=self._max_connections),
            )
        return self._session

    async def send(self, request: TransportRequest) -> TransportResponse:
        session = await self._get_session()
        start = time.monotonic()

        kwargs: Dict[str, Any] = {}
        if request.timeout is not None:
            kwargs["timeout"] = ClientTimeout(total=request.timeout)

        try:
            async with session.request(
                method=request.method,
                url=request.url,
                headers=request.headers,
                data=request.body.encode("utf-8") if request.body is not None else None,
                **kwargs,
            ) as response:
                # Undecodable bytes become U+FFFD, matching httpx Response.text.
                text = await response.text(errors="replace")
                status = response.status
                headers = dict(response.headers)
        except (aiohttp.ClientError, asyncio.TimeoutError, TimeoutError) as e:
            logger.error(f"Transport failure: {request.method} {request.url}: {e}")
            raise TransportError(f"Request failed: {e}") from e

        elapsed = (time.monotonic() - start) * 1000

        return TransportResponse(
            status_code=status,
            headers=headers,
            text=text,
            elapsed_ms=round(elapsed, 2),
        )

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed aiohttp session")

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._session.closed
