# ==============================================================================
# Event Hub Reader Utilities
# ==============================================================================
"""
Shared utilities for the event hub reader.

This module exports configuration and version helpers.
"""

from eventhub_reader.utils.config import (
    EventHubSettings,
    ReaderSettings,
    Settings,
    get_settings,
)
from eventhub_reader.utils.versions import get_package_version

__all__ = [
    # Config
    "EventHubSettings",
    "ReaderSettings",
    "Settings",
    "get_settings",
    # Versions
    "get_package_version",
]
