"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

CirrusDB client - asyncio access to the CirrusDB REST API.

Quick start::

    from cirrusdb import CirrusClient

    async with CirrusClient(email="me@example.com", password="secret") as client:
        await client.authenticate()
        apps = await client.applications.list()
"""

from cirrusdb._version import __version__
from cirrusdb.sdk.client import CirrusClient

__all__ = ["__version__", "CirrusClient"]
