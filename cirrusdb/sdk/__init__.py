"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

CirrusDB SDK - public API surface.
"""

from cirrusdb.sdk.adapters import (
    AiohttpAdapter,
    BaseAdapter,
    HttpAdapter,
    MockAdapter,
    TransportRequest,
    TransportResponse,
)
from cirrusdb.sdk.client import CirrusClient
from cirrusdb.sdk.endpoints import ENDPOINTS, Endpoint, get_endpoint
from cirrusdb.sdk.pipeline import (
    ACKNOWLEDGED,
    Acknowledged,
    Outcome,
    RequestDescriptor,
    RequestOptions,
    RequestPipeline,
    ResponseEnvelope,
    Value,
)

__all__ = [
    "CirrusClient",
    "RequestOptions",
    "RequestDescriptor",
    "RequestPipeline",
    "ResponseEnvelope",
    "Outcome",
    "Value",
    "Acknowledged",
    "ACKNOWLEDGED",
    "Endpoint",
    "ENDPOINTS",
    "get_endpoint",
    "BaseAdapter",
    "HttpAdapter",
    "AiohttpAdapter",
    "MockAdapter",
    "TransportRequest",
    "TransportResponse",
]
