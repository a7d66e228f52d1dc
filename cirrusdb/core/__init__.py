"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Core components for the CirrusDB client.

This module contains the admission-control primitive shared by every request.
"""

from cirrusdb.core.throttle import Throttle

__all__ = [
    "Throttle",
]
