"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Transport adapters.
"""

from cirrusdb.sdk.adapters.aiohttp_adapter import AiohttpAdapter
from cirrusdb.sdk.adapters.base import BaseAdapter, TransportRequest, TransportResponse
from cirrusdb.sdk.adapters.http import HttpAdapter
from cirrusdb.sdk.adapters.mock import MockAdapter, envelope_response

__all__ = [
    "AiohttpAdapter",
    "BaseAdapter",
    "TransportRequest",
    "TransportResponse",
    "HttpAdapter",
    "MockAdapter",
    "envelope_response",
]
