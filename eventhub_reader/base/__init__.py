# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the transport boundary of the reader.
"""

from eventhub_reader.base.source import EventSource

__all__ = [
    "EventSource",
]
