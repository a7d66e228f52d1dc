"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Transport adapter base class and data structures.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class TransportRequest:
    """Fully assembled outbound request."""
    method: str
    path: str
    hostname: str
    port: int
    scheme: str = "https"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None
    timeout: Optional[float] = None

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.hostname}:{self.port}{self.path}"


@dataclass
class TransportResponse:
    """Raw reply as received from the wire."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    text: str = ""
    elapsed_ms: float = 0.0


class BaseAdapter(ABC):
    """Abstract base for all transport adapters."""

    @abstractmethod
    async def send(self, request: TransportRequest) -> TransportResponse:
        """Send a request and return the raw response.

        Raises:
            TransportError: If the connection fails.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release adapter resources."""
        ...

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the adapter is in a usable state."""
        ...
