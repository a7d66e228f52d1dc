"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
CirrusDB client, a product of Garudex Labs

Version information for the CirrusDB client.

Reads the version from the VERSION file at the root of the source tree,
falling back to the installed distribution metadata.
"""

from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """
    Read version from VERSION file.

    Returns:
        str: The version string (e.g., "0.1.0")
    """
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return metadata.version("cirrusdb")
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()
