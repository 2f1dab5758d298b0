"""
Copyright (C) 2026 Garudex Labs.  All Rights Reserved.
Hashtree, a product of Garudex Labs

Version information for Hashtree.

Reads the VERSION file in a source checkout, falling back to the installed
distribution metadata.
"""

from importlib import metadata
from pathlib import Path


def get_version() -> str:
    """Return the Hashtree version string (e.g., "0.1.0")."""
    version_file = Path(__file__).parent.parent / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    try:
        return metadata.version("hashtree")
    except metadata.PackageNotFoundError:
        return "unknown"


__version__ = get_version()
